"""The ristretto255 prime-order group, with scalars as integers modulo its order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .errors import DecompressionError

FIELD_PRIME = 2**255 - 19
SCALAR_ORDER = 2**252 + 27742317777372353535851937790883648493

_P = FIELD_PRIME
_D = (-121665 * pow(121666, -1, _P)) % _P
_D2 = 2 * _D % _P
_SQRT_M1 = 19681161376707505956807079304988542015446066515923890162744021073123829784752
_SQRT_AD_MINUS_ONE = (
    25063068953384623474111414158702152701244531502492656460079210482610430750235
)
_INVSQRT_A_MINUS_D = (
    54469307008909316920995813868745141605393597292927456921205312896311721017578
)
_ONE_MINUS_D_SQ = (1 - _D * _D) % _P
_D_MINUS_ONE_SQ = (_D - 1) * (_D - 1) % _P

_BASE_X = 15112221349535400772501151409588531511454012693041857206046113283949847762202
_BASE_Y = 46316835694926478169428394003475163141307993866256225615783033603165251855960

_LOW_255_BITS = (1 << 255) - 1


def reduce_scalar(value: int) -> int:
    """Reduce an integer into the scalar field of the group."""
    return value % SCALAR_ORDER


def _is_negative(x: int) -> bool:
    return bool((x % _P) & 1)


def _abs(x: int) -> int:
    x %= _P
    return (-x) % _P if x & 1 else x


def _sqrt_ratio_m1(u: int, v: int) -> tuple[bool, int]:
    u %= _P
    v %= _P
    v3 = v * v % _P * v % _P
    v7 = v3 * v3 % _P * v % _P
    r = u * v3 % _P * pow(u * v7 % _P, (_P - 5) // 8, _P) % _P
    check = v * r % _P * r % _P
    correct_sign = check == u
    flipped_sign = check == (-u) % _P
    flipped_sign_i = check == (-u * _SQRT_M1) % _P
    if flipped_sign or flipped_sign_i:
        r = r * _SQRT_M1 % _P
    return correct_sign or flipped_sign, _abs(r)


class GroupElement:
    """A ristretto255 point held in extended Edwards coordinates."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int, t: int) -> None:
        self._x = x % _P
        self._y = y % _P
        self._z = z % _P
        self._t = t % _P

    @classmethod
    def identity(cls) -> GroupElement:
        return cls(0, 1, 1, 0)

    @classmethod
    def basepoint(cls) -> GroupElement:
        return cls(_BASE_X, _BASE_Y, 1, _BASE_X * _BASE_Y)

    @classmethod
    def from_uniform_bytes(cls, data: bytes) -> GroupElement:
        """Map 64 uniformly random bytes to a point."""
        if len(data) != 64:
            raise ValueError(f"expected 64 bytes, got {len(data)}")
        halves = (data[:32], data[32:])
        p1, p2 = (
            _elligator((int.from_bytes(half, "little") & _LOW_255_BITS) % _P)
            for half in halves
        )
        return p1 + p2

    def compress(self) -> CompressedGroup:
        x0, y0, z0, t0 = self._x, self._y, self._z, self._t
        u1 = (z0 + y0) * (z0 - y0) % _P
        u2 = x0 * y0 % _P
        _, invsqrt = _sqrt_ratio_m1(1, u1 * u2 % _P * u2)
        den1 = invsqrt * u1 % _P
        den2 = invsqrt * u2 % _P
        z_inv = den1 * den2 % _P * t0 % _P
        if _is_negative(t0 * z_inv):
            x = y0 * _SQRT_M1 % _P
            y = x0 * _SQRT_M1 % _P
            den_inv = den1 * _INVSQRT_A_MINUS_D % _P
        else:
            x, y, den_inv = x0, y0, den2
        if _is_negative(x * z_inv):
            y = (-y) % _P
        s = _abs(den_inv * (z0 - y))
        return CompressedGroup(s.to_bytes(32, "little"))

    def __add__(self, other: object) -> GroupElement:
        if not isinstance(other, GroupElement):
            return NotImplemented
        x1, y1, z1, t1 = self._x, self._y, self._z, self._t
        x2, y2, z2, t2 = other._x, other._y, other._z, other._t
        a = (y1 - x1) * (y2 - x2) % _P
        b = (y1 + x1) * (y2 + x2) % _P
        c = t1 * _D2 % _P * t2 % _P
        d = 2 * z1 * z2 % _P
        e, f, g, h = b - a, d - c, d + c, b + a
        return GroupElement(e * f, g * h, f * g, e * h)

    def __neg__(self) -> GroupElement:
        return GroupElement(-self._x, self._y, self._z, -self._t)

    def __sub__(self, other: object) -> GroupElement:
        if not isinstance(other, GroupElement):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: object) -> GroupElement:
        if not isinstance(scalar, int):
            return NotImplemented
        k = reduce_scalar(scalar)
        result = GroupElement.identity()
        addend = self
        while k:
            if k & 1:
                result = result + addend
            addend = addend + addend
            k >>= 1
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupElement):
            return NotImplemented
        return (self._x * other._y - self._y * other._x) % _P == 0 or (
            self._y * other._y - self._x * other._x
        ) % _P == 0

    def __hash__(self) -> int:
        return hash(self.compress().data)

    def __repr__(self) -> str:
        return f"GroupElement({self.compress().data.hex()})"


def _elligator(t: int) -> GroupElement:
    r = _SQRT_M1 * t % _P * t % _P
    u = (r + 1) * _ONE_MINUS_D_SQ % _P
    v = (-1 - r * _D) * (r + _D) % _P
    was_square, s = _sqrt_ratio_m1(u, v)
    if was_square:
        c = _P - 1
    else:
        s = (-_abs(s * t)) % _P
        c = r
    n = (c * (r - 1) % _P * _D_MINUS_ONE_SQ - v) % _P
    w0 = 2 * s * v % _P
    w1 = n * _SQRT_AD_MINUS_ONE % _P
    w2 = (1 - s * s) % _P
    w3 = (1 + s * s) % _P
    return GroupElement(w0 * w3, w2 * w1, w1 * w3, w0 * w2)


@dataclass(frozen=True)
class CompressedGroup:
    """The canonical 32-byte encoding of a group element."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != 32:
            raise ValueError(f"expected 32 bytes, got {len(self.data)}")

    def decompress(self) -> Optional[GroupElement]:
        """Decode the point, or return None if the bytes are not a valid encoding."""
        s = int.from_bytes(self.data, "little")
        if s >= _P or s & 1:
            return None
        ss = s * s % _P
        u1 = (1 - ss) % _P
        u2 = (1 + ss) % _P
        u2_sqr = u2 * u2 % _P
        v = (-(_D * u1 % _P * u1) - u2_sqr) % _P
        was_square, invsqrt = _sqrt_ratio_m1(1, v * u2_sqr)
        den_x = invsqrt * u2 % _P
        den_y = invsqrt * den_x % _P * v % _P
        x = _abs(2 * s * den_x)
        y = u1 * den_y % _P
        t = x * y % _P
        if not was_square or _is_negative(t) or y == 0:
            return None
        return GroupElement(x, y, 1, t)

    def unpack(self) -> GroupElement:
        """Decode the point, raising DecompressionError on an invalid encoding."""
        point = self.decompress()
        if point is None:
            raise DecompressionError(self.data)
        return point

    def to_bytes(self) -> bytes:
        return self.data


GROUP_BASEPOINT_COMPRESSED = CompressedGroup(
    bytes.fromhex("e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76")
)


def vartime_multiscalar_mul(
    scalars: Iterable[int], points: Iterable[GroupElement]
) -> GroupElement:
    """Return the sum of scalars[i] * points[i]; the two must have equal length."""
    total = GroupElement.identity()
    for scalar, point in zip(scalars, points, strict=True):
        total = total + point * scalar
    return total