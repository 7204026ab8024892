import pytest

from mlpolycommit.errors import DecompressionError
from mlpolycommit.group import (
    FIELD_PRIME,
    GROUP_BASEPOINT_COMPRESSED,
    SCALAR_ORDER,
    CompressedGroup,
    GroupElement,
    reduce_scalar,
    vartime_multiscalar_mul,
)

B = GroupElement.basepoint()


def test_basepoint_encoding_matches_constant():
    assert B.compress() == GROUP_BASEPOINT_COMPRESSED


def test_identity_encodes_to_zero_bytes():
    assert GroupElement.identity().compress().to_bytes() == bytes(32)


def test_double_basepoint_encoding():
    expected = "6a493210f7499cd17fecb510ae0cea23a110e8d5b901f8acadd3095c73a3b919"
    assert (B + B).compress().to_bytes().hex() == expected


def test_order_times_basepoint_is_identity():
    assert B * (SCALAR_ORDER - 1) + B == GroupElement.identity()


def test_negation_cancels():
    assert B + (-B) == GroupElement.identity()
    assert (B * 5) - (B * 5) == GroupElement.identity()


def test_scalar_distributes():
    a, b = 123456789, 987654321
    assert B * (a + b) == B * a + B * b
    assert a * B == B * a


def test_compress_round_trip():
    point = B * 424242
    assert point.compress().decompress() == point
    assert point.compress().unpack() == point


def test_hash_is_representation_independent():
    table = {B * 3: "three"}
    assert table[B + B + B] == "three"


def test_noncanonical_encoding_rejected():
    encoded = FIELD_PRIME.to_bytes(32, "little")
    assert CompressedGroup(encoded).decompress() is None


def test_negative_encoding_rejected():
    compressed = CompressedGroup((1).to_bytes(32, "little"))
    assert compressed.decompress() is None
    with pytest.raises(DecompressionError) as info:
        compressed.unpack()
    assert info.value.data == compressed.to_bytes()


def test_compressed_length_checked():
    with pytest.raises(ValueError):
        CompressedGroup(bytes(31))


def test_from_uniform_bytes_deterministic_and_valid():
    data = bytes(range(64))
    p1 = GroupElement.from_uniform_bytes(data)
    p2 = GroupElement.from_uniform_bytes(data)
    assert p1 == p2
    assert p1.compress().decompress() == p1
    assert p1 * (SCALAR_ORDER - 1) + p1 == GroupElement.identity()


def test_from_uniform_bytes_differs_on_input():
    a = GroupElement.from_uniform_bytes(bytes(range(64)))
    b = GroupElement.from_uniform_bytes(bytes(range(1, 65)))
    assert not (a == b)


def test_from_uniform_bytes_length_checked():
    with pytest.raises(ValueError):
        GroupElement.from_uniform_bytes(bytes(32))


def test_reduce_scalar():
    assert reduce_scalar(-1) == SCALAR_ORDER - 1
    assert reduce_scalar(SCALAR_ORDER + 7) == 7


def test_multiscalar_mul_matches_sum():
    points = [B, B * 2, B * 7]
    scalars = [3, 11, 5]
    expected = B * 3 + (B * 2) * 11 + (B * 7) * 5
    assert vartime_multiscalar_mul(scalars, points) == expected


def test_multiscalar_mul_empty_is_identity():
    assert vartime_multiscalar_mul([], []) == GroupElement.identity()


def test_multiscalar_mul_length_mismatch():
    with pytest.raises(ValueError):
        vartime_multiscalar_mul([1, 2], [B])