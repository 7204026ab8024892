import random

import pytest

from mlpolycommit.eq_poly import (
    EqPolynomial,
    IdentityPolynomial,
    compute_dotproduct,
)
from mlpolycommit.group import SCALAR_ORDER


def _random_point(seed, size):
    rng = random.Random(seed)
    return [rng.randrange(SCALAR_ORDER) for _ in range(size)]


def _chis_at_r(r):
    ell = len(r)
    chis = []
    for i in range(1 << ell):
        chi = 1
        for j, rj in enumerate(r):
            if i & (1 << (ell - j - 1)):
                chi = chi * rj % SCALAR_ORDER
            else:
                chi = chi * (1 - rj) % SCALAR_ORDER
        chis.append(chi)
    return chis


def _factored_chis_at_r(r):
    ell = len(r)
    m = 1 << (ell // 2)
    left = []
    for i in range(m):
        chi = 1
        for j in range(ell // 2):
            if (m * i) & (1 << (ell - j - 1)):
                chi = chi * r[j] % SCALAR_ORDER
            else:
                chi = chi * (1 - r[j]) % SCALAR_ORDER
        left.append(chi)
    right = []
    for i in range(m):
        chi = 1
        for j in range(ell // 2, ell):
            if i & (1 << (ell - j - 1)):
                chi = chi * r[j] % SCALAR_ORDER
            else:
                chi = chi * (1 - r[j]) % SCALAR_ORDER
        right.append(chi)
    return left, right


def _outer(left, right):
    return [a * b % SCALAR_ORDER for a in left for b in right]


def test_polynomial_evaluation_value():
    z = [1, 2, 1, 4]
    r = [4, 3]
    chis = EqPolynomial(r).evals()
    assert compute_dotproduct(z, chis) == 28


def test_polynomial_evaluation_with_lr():
    z = [1, 2, 1, 4]
    r = [4, 3]
    left, right = EqPolynomial(r).compute_factored_evals()
    m = 2
    lz = [sum(left[j] * z[j * m + i] for j in range(m)) % SCALAR_ORDER for i in range(m)]
    assert compute_dotproduct(lz, right) == 28


def test_memoized_chis():
    r = _random_point(1, 10)
    assert EqPolynomial(r).evals() == _chis_at_r(r)


def test_factored_chis():
    r = _random_point(2, 10)
    chis = EqPolynomial(r).evals()
    left, right = EqPolynomial(r).compute_factored_evals()
    assert _outer(left, right) == chis


def test_memoized_factored_chis():
    r = _random_point(3, 10)
    assert EqPolynomial(r).compute_factored_evals() == _factored_chis_at_r(r)


def test_evals_small_values():
    assert EqPolynomial([]).evals() == [1]
    assert EqPolynomial([5]).evals() == [(1 - 5) % SCALAR_ORDER, 5]


def test_evaluate_matches_evals_on_boolean_points():
    r = _random_point(4, 3)
    eq = EqPolynomial(r)
    evals = eq.evals()
    for index in range(8):
        bits = [(index >> (2 - k)) & 1 for k in range(3)]
        assert eq.evaluate(bits) == evals[index]


def test_evaluate_symmetric():
    a = _random_point(5, 4)
    b = _random_point(6, 4)
    assert EqPolynomial(a).evaluate(b) == EqPolynomial(b).evaluate(a)


def test_evaluate_length_mismatch():
    with pytest.raises(ValueError):
        EqPolynomial([1, 2]).evaluate([1])


def test_evals_front_repeats_blocks():
    r = _random_point(7, 2)
    eq = EqPolynomial(r)
    front = eq.evals_front(4)
    assert len(front) == 16
    assert front == [chi for chi in eq.evals() for _ in range(4)]


def test_evals_front_full_length_equals_evals():
    r = _random_point(8, 3)
    eq = EqPolynomial(r)
    assert eq.evals_front(3) == eq.evals()


def test_evals_front_too_short():
    with pytest.raises(ValueError):
        EqPolynomial([1, 2, 3]).evals_front(2)


@pytest.mark.parametrize("ell, expected", [(0, (0, 0)), (1, (0, 1)), (4, (2, 2)), (5, (2, 3))])
def test_compute_factored_lens(ell, expected):
    assert EqPolynomial.compute_factored_lens(ell) == expected


def test_factored_evals_with_l_size():
    r = _random_point(9, 5)
    eq = EqPolynomial(r)
    left, right = eq.compute_factored_evals_with_l_size(8)
    assert len(left) == 8
    assert len(right) == 4
    assert _outer(left, right) == eq.evals()


def test_factored_evals_with_l_size_invalid():
    eq = EqPolynomial([1, 2])
    with pytest.raises(ValueError):
        eq.compute_factored_evals_with_l_size(3)
    with pytest.raises(ValueError):
        eq.compute_factored_evals_with_l_size(8)


def test_identity_polynomial_boolean_point():
    assert IdentityPolynomial(3).evaluate([1, 0, 1]) == 5
    assert IdentityPolynomial(4).evaluate([1, 1, 1, 1]) == 15


def test_identity_polynomial_length_mismatch():
    with pytest.raises(ValueError):
        IdentityPolynomial(2).evaluate([1, 0, 1])


def test_dotproduct_values_and_mismatch():
    assert compute_dotproduct([1, 2, 3], [4, 5, 6]) == 32
    assert compute_dotproduct([SCALAR_ORDER - 1], [2]) == SCALAR_ORDER - 2
    with pytest.raises(ValueError):
        compute_dotproduct([1, 2], [1])