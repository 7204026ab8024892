import random

import pytest

from mlpolycommit.custom_dense_mlpoly import DensePolynomialPqx, Mode, rev_bits
from mlpolycommit.group import SCALAR_ORDER


def _zmat(rng, num_proofs, num_witness_secs, num_inputs):
    return [
        [
            [
                [rng.randrange(SCALAR_ORDER) for _ in range(num_inputs[p])]
                for _ in range(num_witness_secs)
            ]
            for _ in range(num_proofs[p])
        ]
        for p in range(len(num_proofs))
    ]


def _point(rng, n):
    return [rng.randrange(SCALAR_ORDER) for _ in range(n)]


@pytest.mark.parametrize("n", [1, 2, 4, 8, 16])
def test_rev_bits_is_an_involution(n):
    for q in range(n):
        assert rev_bits(rev_bits(q, n), n) == q


def test_rev_bits_is_a_permutation():
    assert sorted(rev_bits(q, 8) for q in range(8)) == list(range(8))
    assert rev_bits(0, 8) == 0


def test_rev_bits_of_single_proof_is_zero():
    assert rev_bits(0, 1) == 0


def test_new_rev_round_trips_through_dense_poly():
    rng = random.Random(1)
    num_proofs, num_inputs, nws = [4, 4], [2, 2], 2
    z_mat = _zmat(rng, num_proofs, nws, num_inputs)
    poly = DensePolynomialPqx.new_rev(z_mat, num_proofs, 4, num_inputs, 2)
    dense = poly.to_dense_poly()
    for p in range(2):
        for q in range(4):
            for w in range(nws):
                for x in range(2):
                    index = p * 4 * nws * 2 + q * nws * 2 + w * 2 + x
                    assert dense[index] == z_mat[p][q][w][x]


@pytest.mark.parametrize(
    "num_proofs, num_inputs, nws, max_q, max_x",
    [
        ([4, 4], [2, 2], 2, 4, 2),
        ([4, 2, 1], [4, 2, 1], 3, 4, 4),
        ([2, 1, 2, 2, 1], [1, 2, 2, 1, 2], 1, 2, 2),
    ],
)
def test_evaluate_matches_dense_expansion(num_proofs, num_inputs, nws, max_q, max_x):
    rng = random.Random(len(num_proofs) * 7 + nws)
    z_mat = _zmat(rng, num_proofs, nws, num_inputs)
    poly = DensePolynomialPqx.new_rev(z_mat, num_proofs, max_q, num_inputs, max_x)
    dense = poly.to_dense_poly()

    def log2(n):
        return (n - 1).bit_length()

    r_p = _point(rng, log2(poly.num_instances))
    r_q = _point(rng, log2(max_q))
    r_w = _point(rng, log2(poly.num_witness_secs))
    r_x = _point(rng, log2(max_x))
    expected = dense.evaluate(r_p + r_q[::-1] + r_w + r_x[::-1])
    assert poly.evaluate(r_p, r_q, r_w, r_x) == expected


def test_evaluate_leaves_polynomial_unchanged():
    rng = random.Random(3)
    z_mat = _zmat(rng, [2, 2], 2, [2, 2])
    poly = DensePolynomialPqx.new_rev(z_mat, [2, 2], 2, [2, 2], 2)
    before = poly.to_dense_poly().evals()
    poly.evaluate([5], [6], [7], [8])
    assert poly.to_dense_poly().evals() == before
    assert poly.max_num_proofs == 2


def test_constructor_copies_input():
    z_mat = [[[[1, 2]]], [[[3, 4]]]]
    poly = DensePolynomialPqx(z_mat, [1, 1], 1, [2, 2], 2)
    poly.bound_poly_x(9)
    assert z_mat == [[[[1, 2]]], [[[3, 4]]]]


def test_index_returns_zero_outside_stored_entries():
    z_mat = [[[[1, 2]]], [[[3, 4]]], [[[5, 6]]]]
    poly = DensePolynomialPqx(z_mat, [1, 1, 1], 1, [2, 2, 2], 2)
    assert poly.index(2, 0, 0, 1) == 6
    assert poly.index(3, 0, 0, 0) == 0
    assert poly.index(0, 1, 0, 0) == 0
    assert poly.index(0, 0, 0, 2) == 0


def test_index_high_matches_index_of_high_half():
    rng = random.Random(5)
    z_mat = _zmat(rng, [4, 2], 2, [2, 2])
    poly = DensePolynomialPqx(z_mat, [4, 2], 4, [2, 2], 2)
    assert poly.index_high(0, 1, 0, 0, Mode.Q) == poly.index(0, 3, 0, 0)
    assert poly.index_high(1, 0, 1, 0, Mode.X) == poly.index(1, 0, 1, 1)
    assert poly.index_high(0, 0, 0, 1, Mode.P) == poly.index(1, 0, 0, 1)
    assert poly.index_high(1, 0, 0, 0, Mode.W) == poly.index(1, 0, 1, 0)


@pytest.mark.parametrize("mode", [Mode.P, Mode.Q, Mode.W, Mode.X])
def test_bound_poly_dispatches_by_mode(mode):
    rng = random.Random(int(mode))
    z_mat = _zmat(rng, [1, 1], 2, [1, 1])
    a = DensePolynomialPqx(z_mat, [1, 1], 1, [1, 1], 1)
    b = DensePolynomialPqx(z_mat, [1, 1], 1, [1, 1], 1)
    a.bound_poly(11, mode)
    direct = {
        Mode.P: b.bound_poly_p,
        Mode.Q: b.bound_poly_q,
        Mode.W: b.bound_poly_w,
        Mode.X: b.bound_poly_x,
    }[mode]
    direct(11)
    assert a.z == b.z


def test_bound_poly_accepts_integer_mode():
    z_mat = [[[[1, 2]]]]
    a = DensePolynomialPqx(z_mat, [1], 1, [2], 2)
    b = DensePolynomialPqx(z_mat, [1], 1, [2], 2)
    a.bound_poly(3, 4)
    b.bound_poly_x(3)
    assert a.z == b.z


@pytest.mark.parametrize("mode", [0, 5])
def test_unrecognized_mode_raises(mode):
    poly = DensePolynomialPqx([[[[1]]]], [1], 1, [1], 1)
    with pytest.raises(ValueError, match="unrecognized mode"):
        poly.bound_poly(1, mode)
    with pytest.raises(ValueError, match="unrecognized mode"):
        poly.index_high(0, 0, 0, 0, mode)


def test_binding_p_before_q_raises():
    poly = DensePolynomialPqx([[[[1]], [[2]]]], [2], 2, [1], 1)
    with pytest.raises(ValueError):
        poly.bound_poly_p(1)


def test_binding_p_before_x_raises():
    poly = DensePolynomialPqx([[[[1, 2]]]], [1], 1, [2], 2)
    with pytest.raises(ValueError):
        poly.bound_poly_p(1)


def test_binding_x_at_zero_keeps_low_half():
    z_mat = [[[[10, 20, 30, 40]]]]
    poly = DensePolynomialPqx(z_mat, [1], 1, [4], 4)
    poly.bound_poly_x(0)
    assert poly.num_inputs == [2]
    assert poly.max_num_inputs == 2
    assert poly.z[0][0][0][:2] == [10, 20]


def test_binding_x_at_one_takes_high_half():
    z_mat = [[[[10, 20, 30, 40]]]]
    poly = DensePolynomialPqx(z_mat, [1], 1, [4], 4)
    poly.bound_poly_x(1)
    assert poly.z[0][0][0][:2] == [30, 40]


def test_len_counts_instances_proofs_and_inputs():
    z_mat = _zmat(random.Random(9), [2, 2, 2], 1, [4, 4, 4])
    poly = DensePolynomialPqx(z_mat, [2, 2, 2], 2, [4, 4, 4], 4)
    assert poly.num_instances == 4
    assert len(poly) == poly.num_instances * 2 * 4