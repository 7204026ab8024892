"""Dense multilinear polynomials in evaluation form and their commitments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .commitments import MultiCommitGens, commit_slice
from .eq_poly import EqPolynomial, compute_dotproduct
from .group import CompressedGroup, reduce_scalar


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


@dataclass(frozen=True)
class PolyCommitmentBlinds:
    """Blinding factors, one per row of the evaluation matrix."""

    blinds: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "blinds", tuple(reduce_scalar(b) for b in self.blinds)
        )


@dataclass(frozen=True)
class PolyCommitment:
    """Row-wise commitments to a polynomial viewed as a matrix."""

    C: tuple[CompressedGroup, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "C", tuple(self.C))


class DensePolynomial:
    """A multilinear polynomial given by its values on the Boolean hypercube.

    The first variable selects the high half of the evaluation table.
    Binding a variable shrinks the active length but keeps the underlying
    table, so indexing past the active length sees the stale values.
    """

    __slots__ = ("_num_vars", "_len", "_z")

    def __init__(self, values: Iterable[int]) -> None:
        z = [reduce_scalar(v) for v in values]
        z.extend([0] * (_next_power_of_two(len(z)) - len(z)))
        self._z = z
        self._len = len(z)
        self._num_vars = len(z).bit_length() - 1

    @property
    def num_vars(self) -> int:
        """The number of unbound variables."""
        return self._num_vars

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, index: int) -> int:
        return self._z[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DensePolynomial):
            return NotImplemented
        return self._num_vars == other._num_vars and self.evals() == other.evals()

    def __repr__(self) -> str:
        return f"DensePolynomial(num_vars={self._num_vars}, evals={self.evals()})"

    @classmethod
    def from_usize(cls, values: Sequence[int]) -> DensePolynomial:
        """Build a polynomial from non-negative integers."""
        if any(v < 0 for v in values):
            raise ValueError("values must be non-negative")
        return cls(values)

    @staticmethod
    def merge(polys: Iterable[DensePolynomial]) -> DensePolynomial:
        """Concatenate the evaluation tables and pad with zeros."""
        z: list[int] = []
        for poly in polys:
            z.extend(poly._z)
        return DensePolynomial(z)

    def evals(self) -> list[int]:
        """Return a copy of the active evaluations."""
        return self._z[: self._len]

    def split(self, idx: int) -> tuple[DensePolynomial, DensePolynomial]:
        """Return the polynomials on [0, idx) and [idx, 2 * idx)."""
        if not idx < self._len:
            raise ValueError(f"split index {idx} not below length {self._len}")
        return (
            DensePolynomial(self._z[:idx]),
            DensePolynomial(self._z[idx : 2 * idx]),
        )

    def _matrix_sizes(self) -> tuple[int, int]:
        left_num_vars, right_num_vars = EqPolynomial.compute_factored_lens(
            self._num_vars
        )
        return 1 << left_num_vars, 1 << right_num_vars

    def commit(
        self,
        gens: MultiCommitGens,
        blinds: Optional[PolyCommitmentBlinds] = None,
    ) -> tuple[PolyCommitment, PolyCommitmentBlinds]:
        """Commit to each row of the evaluation matrix; blinds default to zeros."""
        n = len(self._z)
        if n != 1 << self._num_vars:
            raise ValueError("cannot commit to a polynomial with bound variables")
        l_size, r_size = self._matrix_sizes()
        if l_size * r_size != n:
            raise ValueError("matrix dimensions do not cover the polynomial")
        if blinds is None:
            blinds = PolyCommitmentBlinds((0,) * l_size)
        if len(blinds.blinds) != l_size:
            raise ValueError(f"expected {l_size} blinds, got {len(blinds.blinds)}")
        rows = (self._z[r_size * i : r_size * (i + 1)] for i in range(l_size))
        commitment = PolyCommitment(
            tuple(
                commit_slice(row, blind, gens).compress()
                for row, blind in zip(rows, blinds.blinds)
            )
        )
        return commitment, blinds

    def bound(self, left: Sequence[int]) -> list[int]:
        """Return the vector-matrix product of left with the evaluation matrix."""
        l_size, r_size = self._matrix_sizes()
        if len(left) < l_size:
            raise ValueError(f"expected {l_size} left values, got {len(left)}")
        return [
            reduce_scalar(
                sum(left[j] * self._z[j * r_size + i] for j in range(l_size))
            )
            for i in range(r_size)
        ]

    def _finish_binding(self, n: int) -> None:
        self._num_vars -= 1
        self._len = n

    def bound_poly_var_top(self, r: int) -> None:
        """Bind the first variable to r."""
        n = self._len // 2
        z = self._z
        for i in range(n):
            z[i] = reduce_scalar(z[i] + r * (z[i + n] - z[i]))
        self._finish_binding(n)

    def bound_poly_var_top_disjoint_rounds(
        self,
        r: int,
        proof_space: int,
        instance_space: int,
        cons_len: int,
        proof_len: int,
        instance_len: int,
        num_proofs: Sequence[int],
    ) -> None:
        """Bind the first variable of a (x, q, p) table, skipping invalid (p, q) pairs."""
        n = self._len // 2
        if n != cons_len * proof_len * instance_len:
            raise ValueError("half length does not match the given dimensions")
        z = self._z
        for p in range(instance_len):
            max_q = proof_len if proof_len != proof_space else num_proofs[p]
            for q in range(max_q):
                for x in range(cons_len):
                    i = x * proof_space * instance_space + q * instance_space + p
                    z[i] = reduce_scalar(z[i] + r * (z[i + n] - z[i]))
        self._finish_binding(n)

    def bound_poly_var_front_rq(
        self,
        r_q: Sequence[int],
        max_proof_space: int,
        instance_space: int,
        cons_space: int,
        num_proofs: Sequence[int],
    ) -> None:
        """Bind the whole reversed q section of a (q, p, x) table."""
        n = self._len
        if n != max_proof_space * instance_space * cons_space:
            raise ValueError("length does not match the given dimensions")
        num_proofs = list(num_proofs)
        z = self._z
        for r in r_q:
            n //= 2
            max_proof_space //= 2
            for p in range(instance_space):
                if num_proofs[p] == 1:
                    for x in range(cons_space):
                        i = p * cons_space + x
                        z[i] = reduce_scalar((1 - r) * z[i])
                else:
                    num_proofs[p] //= 2
                    step = max_proof_space // num_proofs[p]
                    if step == 0:
                        raise ValueError("proof count exceeds the proof space")
                    for q in range(0, max_proof_space, step):
                        for x in range(cons_space):
                            i = q * instance_space * cons_space + p * cons_space + x
                            z[i] = reduce_scalar(z[i] + r * (z[i + n] - z[i]))
            self._finish_binding(n)

    def bound_poly_var_bot(self, r: int) -> None:
        """Bind the last variable to r."""
        n = self._len // 2
        z = self._z
        for i in range(n):
            z[i] = reduce_scalar(z[2 * i] + r * (z[2 * i + 1] - z[2 * i]))
        self._finish_binding(n)

    def evaluate(self, r: Sequence[int]) -> int:
        """Evaluate the polynomial at r in linear time."""
        if len(r) != self._num_vars:
            raise ValueError(f"expected {self._num_vars} coordinates, got {len(r)}")
        chis = EqPolynomial(tuple(r)).evals()
        if len(chis) != len(self._z):
            raise ValueError("cannot evaluate a polynomial with bound variables")
        return compute_dotproduct(self._z, chis)

    def extend(self, other: DensePolynomial) -> None:
        """Append another polynomial of the same size, adding one top variable."""
        if len(self._z) != self._len:
            raise ValueError("cannot extend a polynomial with bound variables")
        if len(other._z) != self._len:
            raise ValueError(
                f"expected a polynomial of length {self._len}, got {len(other._z)}"
            )
        self._z.extend(other._z)
        self._num_vars += 1
        self._len *= 2