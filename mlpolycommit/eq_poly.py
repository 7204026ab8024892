"""Multilinear equality and identity polynomials over the scalar field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .group import reduce_scalar


def compute_dotproduct(a: Sequence[int], b: Sequence[int]) -> int:
    """Return the inner product of two equal-length scalar vectors."""
    if len(a) != len(b):
        raise ValueError(f"vector lengths differ: {len(a)} and {len(b)}")
    return reduce_scalar(sum(x * y for x, y in zip(a, b)))


def _log2_exact(n: int) -> int:
    if n <= 0 or n & (n - 1):
        raise ValueError(f"{n} is not a power of two")
    return n.bit_length() - 1


@dataclass(frozen=True)
class EqPolynomial:
    """The polynomial eq(r, x) = prod_i (r_i x_i + (1 - r_i)(1 - x_i))."""

    r: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", tuple(reduce_scalar(v) for v in self.r))

    def evaluate(self, rx: Sequence[int]) -> int:
        """Evaluate eq(r, rx) at an arbitrary point."""
        if len(rx) != len(self.r):
            raise ValueError(f"expected a point of {len(self.r)} values, got {len(rx)}")
        result = 1
        for ri, xi in zip(self.r, rx):
            result = reduce_scalar(result * (ri * xi + (1 - ri) * (1 - xi)))
        return result

    def evals(self) -> list[int]:
        """Return eq(r, b) for every Boolean b, the first variable being the high bit."""
        evals = [1]
        for rj in self.r:
            doubled: list[int] = []
            for value in evals:
                high = reduce_scalar(value * rj)
                doubled.append(reduce_scalar(value - high))
                doubled.append(high)
            evals = doubled
        return evals

    def evals_front(self, total_len: int) -> list[int]:
        """Evaluations over total_len variables where eq binds only the leading ones."""
        ell = len(self.r)
        if total_len < ell:
            raise ValueError(f"total length {total_len} is shorter than {ell} variables")
        base_size = 1 << (total_len - ell)
        return [chi for chi in self.evals() for _ in range(base_size)]

    @staticmethod
    def compute_factored_lens(ell: int) -> tuple[int, int]:
        """Split ell variables into a left half and a (possibly larger) right half."""
        return ell // 2, ell - ell // 2

    def compute_factored_evals(self) -> tuple[list[int], list[int]]:
        """Return the evaluation tables of the left and right halves of r."""
        left_num_vars, _ = EqPolynomial.compute_factored_lens(len(self.r))
        return self._split_evals(left_num_vars)

    def compute_factored_evals_with_l_size(self, l_size: int) -> tuple[list[int], list[int]]:
        """Like compute_factored_evals, with a left table of l_size entries."""
        left_num_vars = _log2_exact(l_size)
        if left_num_vars > len(self.r):
            raise ValueError(
                f"left size {l_size} exceeds 2^{len(self.r)} evaluations"
            )
        return self._split_evals(left_num_vars)

    def _split_evals(self, left_num_vars: int) -> tuple[list[int], list[int]]:
        left = EqPolynomial(self.r[:left_num_vars]).evals()
        right = EqPolynomial(self.r[left_num_vars:]).evals()
        return left, right


@dataclass(frozen=True)
class IdentityPolynomial:
    """The polynomial mapping a Boolean point to the integer it encodes."""

    size_point: int

    def evaluate(self, r: Sequence[int]) -> int:
        if len(r) != self.size_point:
            raise ValueError(f"expected a point of {self.size_point} values, got {len(r)}")
        length = len(r)
        return reduce_scalar(
            sum((1 << (length - i - 1)) * ri for i, ri in enumerate(r))
        )