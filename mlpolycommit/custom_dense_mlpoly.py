"""Space-efficient dense polynomials over (p, q, w, x) index quadruples.

Instances may carry fewer proofs or inputs than the maximum. Missing
entries are treated as zero and are not stored. The q and x sections are
kept in bit-reversed order, so that the entries of an instance with fewer
proofs sit at multiples of a fixed step of the reversed index.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence, Union

from .dense_mlpoly import DensePolynomial
from .group import reduce_scalar


class Mode(IntEnum):
    """The section of variables a binding or high-index lookup acts on."""

    P = 1
    Q = 2
    W = 3
    X = 4


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def _log2(n: int) -> int:
    return (n - 1).bit_length() if n > 1 else 0


def rev_bits(q: int, max_num_proofs: int) -> int:
    """Reverse the low log2(max_num_proofs) bits of q."""
    bits = _log2(max_num_proofs)
    return sum(
        ((q >> i) & 1) * ((max_num_proofs >> i) // 2) for i in range(bits)
    )


def _to_mode(mode: Union[Mode, int]) -> Mode:
    try:
        return Mode(mode)
    except ValueError:
        raise ValueError(
            f"DensePolynomialPqx bound failed: unrecognized mode {mode}!"
        ) from None


class DensePolynomialPqx:
    """A dense polynomial with variable order p, q_rev, w, x_rev.

    ``z[p][j][w][k]`` holds the value at q_rev = j * (max_num_proofs /
    num_proofs[p]) and x_rev = k * (max_num_inputs / num_inputs[p]).
    """

    def __init__(
        self,
        z_mat: Sequence[Sequence[Sequence[Sequence[int]]]],
        num_proofs: Sequence[int],
        max_num_proofs: int,
        num_inputs: Sequence[int],
        max_num_inputs: int,
    ) -> None:
        """Wrap a table already in (p, q_rev, w, x_rev) form."""
        self.z: list[list[list[list[int]]]] = [
            [[[reduce_scalar(v) for v in xs] for xs in ws] for ws in qs]
            for qs in z_mat
        ]
        self.num_instances = _next_power_of_two(len(self.z))
        self.num_proofs = list(num_proofs)
        self.max_num_proofs = max_num_proofs
        self.num_witness_secs = _next_power_of_two(len(self.z[0][0]))
        self.num_inputs = list(num_inputs)
        self.max_num_inputs = max_num_inputs

    @classmethod
    def new_rev(
        cls,
        z_mat: Sequence[Sequence[Sequence[Sequence[int]]]],
        num_proofs: Sequence[int],
        max_num_proofs: int,
        num_inputs: Sequence[int],
        max_num_inputs: int,
    ) -> DensePolynomialPqx:
        """Build from a table in standard (p, q, w, x) form, reversing q and x."""
        num_witness_secs = len(z_mat[0][0])
        table: list[list[list[list[int]]]] = []
        for p, instance in enumerate(z_mat):
            n_proofs, n_inputs = num_proofs[p], num_inputs[p]
            block = [
                [[0] * n_inputs for _ in range(num_witness_secs)]
                for _ in range(n_proofs)
            ]
            step_q = max_num_proofs // n_proofs
            step_x = max_num_inputs // n_inputs
            for q in range(n_proofs):
                q_rev = rev_bits(q, max_num_proofs) // step_q
                for x in range(n_inputs):
                    x_rev = rev_bits(x, max_num_inputs) // step_x
                    for w in range(num_witness_secs):
                        block[q_rev][w][x_rev] = instance[q][w][x]
            table.append(block)
        return cls(table, num_proofs, max_num_proofs, num_inputs, max_num_inputs)

    def _clone(self) -> DensePolynomialPqx:
        return DensePolynomialPqx(
            self.z,
            self.num_proofs,
            self.max_num_proofs,
            self.num_inputs,
            self.max_num_inputs,
        )._with_sizes(self.num_instances, self.num_witness_secs)

    def _with_sizes(self, num_instances: int, num_witness_secs: int) -> DensePolynomialPqx:
        self.num_instances = num_instances
        self.num_witness_secs = num_witness_secs
        return self

    def __len__(self) -> int:
        return self.num_instances * self.max_num_proofs * self.max_num_inputs

    def index(self, p: int, q_rev: int, w: int, x_rev: int) -> int:
        """Return the stored value, or zero when the entry is not stored."""
        z = self.z
        if (
            p < len(z)
            and q_rev < len(z[p])
            and w < len(z[p][q_rev])
            and x_rev < len(z[p][q_rev][w])
        ):
            return z[p][q_rev][w][x_rev]
        return 0

    def index_high(
        self, p: int, q_rev: int, w: int, x_rev: int, mode: Union[Mode, int]
    ) -> int:
        """Return the entry with the leading bit of the chosen section set to 1."""
        mode = _to_mode(mode)
        z = self.z
        if mode is Mode.P:
            high = p + self.num_instances // 2
            return z[high][q_rev][w][x_rev] if high < len(z) else 0
        if mode is Mode.Q:
            if self.num_proofs[p] == 1:
                return 0
            return z[p][q_rev + self.num_proofs[p] // 2][w][x_rev]
        if mode is Mode.W:
            high = w + self.num_witness_secs // 2
            return z[p][q_rev][high][x_rev] if high < len(z[p][q_rev]) else 0
        if self.num_inputs[p] == 1:
            return 0
        return z[p][q_rev][w][x_rev + self.num_inputs[p] // 2]

    def bound_poly(self, r: int, mode: Union[Mode, int]) -> None:
        """Bind the leading variable of the chosen section to r."""
        mode = _to_mode(mode)
        binders = {
            Mode.P: self.bound_poly_p,
            Mode.Q: self.bound_poly_q,
            Mode.W: self.bound_poly_w,
            Mode.X: self.bound_poly_x,
        }
        binders[mode](r)

    def bound_poly_p(self, r: int) -> None:
        """Bind the leading p variable; q and x must already be fully bound."""
        if self.max_num_proofs != 1:
            raise ValueError("the q section must be bound before the p section")
        if self.max_num_inputs != 1:
            raise ValueError("the x section must be bound before the p section")
        self.num_instances //= 2
        z = self.z
        for p in range(self.num_instances):
            for w in range(min(self.num_witness_secs, len(z[p][0]))):
                high_p = p + self.num_instances
                high = z[high_p][0][w][0] if high_p < len(z) else 0
                low = z[p][0][w][0]
                z[p][0][w][0] = reduce_scalar(low + r * (high - low))

    def bound_poly_q(self, r: int) -> None:
        """Bind the leading q_rev variable to r."""
        self.max_num_proofs //= 2
        z = self.z
        for p in range(min(self.num_instances, len(z))):
            if self.num_proofs[p] == 1:
                for w in range(min(self.num_witness_secs, len(z[p][0]))):
                    row = z[p][0][w]
                    for x in range(self.num_inputs[p]):
                        row[x] = reduce_scalar((1 - r) * row[x])
            else:
                self.num_proofs[p] //= 2
                half = self.num_proofs[p]
                for q in range(half):
                    for w in range(min(self.num_witness_secs, len(z[p][q]))):
                        low_row, high_row = z[p][q][w], z[p][q + half][w]
                        for x in range(self.num_inputs[p]):
                            low = low_row[x]
                            low_row[x] = reduce_scalar(low + r * (high_row[x] - low))

    def bound_poly_w(self, r: int) -> None:
        """Bind the leading w variable to r."""
        self.num_witness_secs //= 2
        half = self.num_witness_secs
        z = self.z
        for p in range(min(self.num_instances, len(z))):
            for q in range(self.num_proofs[p]):
                block = z[p][q]
                for w in range(half):
                    for x in range(self.num_inputs[p]):
                        high = block[w + half][x] if w + half < len(block) else 0
                        low = block[w][x]
                        block[w][x] = reduce_scalar(low + r * (high - low))

    def bound_poly_x(self, r: int) -> None:
        """Bind the leading x_rev variable to r."""
        self.max_num_inputs //= 2
        z = self.z
        for p in range(min(self.num_instances, len(z))):
            if self.num_inputs[p] == 1:
                for q in range(self.num_proofs[p]):
                    for w in range(min(self.num_witness_secs, len(z[p][q]))):
                        z[p][q][w][0] = reduce_scalar((1 - r) * z[p][q][w][0])
            else:
                self.num_inputs[p] //= 2
                half = self.num_inputs[p]
                for q in range(self.num_proofs[p]):
                    for w in range(min(self.num_witness_secs, len(z[p][q]))):
                        row = z[p][q][w]
                        for x in range(half):
                            low = row[x]
                            row[x] = reduce_scalar(low + r * (row[x + half] - low))

    def bound_poly_vars_rp(self, r_p: Sequence[int]) -> None:
        """Bind the whole p section; the q and x sections must be bound first."""
        for r in r_p:
            self.bound_poly_p(r)

    def bound_poly_vars_rq(self, r_q: Sequence[int]) -> None:
        """Bind the whole q_rev section."""
        for r in r_q:
            self.bound_poly_q(r)

    def bound_poly_vars_rw(self, r_w: Sequence[int]) -> None:
        """Bind the whole w section."""
        for r in r_w:
            self.bound_poly_w(r)

    def bound_poly_vars_rx(self, r_x: Sequence[int]) -> None:
        """Bind the whole x_rev section."""
        for r in r_x:
            self.bound_poly_x(r)

    def evaluate(
        self,
        r_p: Sequence[int],
        r_q: Sequence[int],
        r_w: Sequence[int],
        r_x: Sequence[int],
    ) -> int:
        """Evaluate at a point without changing this polynomial."""
        bound = self._clone()
        bound.bound_poly_vars_rx(r_x)
        bound.bound_poly_vars_rw(r_w)
        bound.bound_poly_vars_rq(r_q)
        bound.bound_poly_vars_rp(r_p)
        return bound.index(0, 0, 0, 0)

    def to_dense_poly(self) -> DensePolynomial:
        """Expand into a regular dense polynomial in (p, q, w, x) order."""
        max_q, max_x, nws = self.max_num_proofs, self.max_num_inputs, self.num_witness_secs
        values = [0] * (self.num_instances * max_q * nws * max_x)
        for p in range(min(self.num_instances, len(self.z))):
            step_q = max_q // self.num_proofs[p]
            step_x = max_x // self.num_inputs[p]
            for q_rev in range(self.num_proofs[p]):
                q = rev_bits(q_rev * step_q, max_q)
                block = self.z[p][q_rev]
                for x_rev in range(self.num_inputs[p]):
                    x = rev_bits(x_rev * step_x, max_x)
                    for w in range(min(nws, len(block))):
                        values[p * max_q * nws * max_x + q * nws * max_x + w * max_x + x] = (
                            block[w][x_rev]
                        )
        return DensePolynomial(values)