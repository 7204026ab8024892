"""Pedersen multi-commitments over ristretto255."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Sequence

from .group import (
    GROUP_BASEPOINT_COMPRESSED,
    GroupElement,
    vartime_multiscalar_mul,
)


@dataclass(frozen=True)
class MultiCommitGens:
    """Generators G_1..G_n and a blinding generator h."""

    generators: tuple[GroupElement, ...]
    h: GroupElement

    def __post_init__(self) -> None:
        object.__setattr__(self, "generators", tuple(self.generators))

    @property
    def n(self) -> int:
        return len(self.generators)

    @classmethod
    def from_label(cls, n: int, label: bytes) -> MultiCommitGens:
        """Derive n generators and a blinding generator from a label."""
        shake = hashlib.shake_256()
        shake.update(label)
        shake.update(GROUP_BASEPOINT_COMPRESSED.to_bytes())
        stream = shake.digest(64 * (n + 1))
        points = [
            GroupElement.from_uniform_bytes(stream[start : start + 64])
            for start in range(0, len(stream), 64)
        ]
        return cls(tuple(points[:n]), points[n])

    def scale(self, s: int) -> MultiCommitGens:
        """Multiply every G_i by s, keeping h."""
        return MultiCommitGens(tuple(g * s for g in self.generators), self.h)

    def split_at(self, mid: int) -> tuple[MultiCommitGens, MultiCommitGens]:
        if not 0 <= mid <= self.n:
            raise ValueError(f"split point {mid} out of range for {self.n} generators")
        return (
            MultiCommitGens(self.generators[:mid], self.h),
            MultiCommitGens(self.generators[mid:], self.h),
        )


def commit_scalar(value: int, blind: int, gens: MultiCommitGens) -> GroupElement:
    """Commit to one scalar with a single-generator set."""
    if gens.n != 1:
        raise ValueError(f"expected 1 generator, got {gens.n}")
    return vartime_multiscalar_mul([value, blind], [gens.generators[0], gens.h])


def commit_vector(
    values: Sequence[int], blind: int, gens: MultiCommitGens
) -> GroupElement:
    """Commit to a vector whose length equals the number of generators."""
    if gens.n != len(values):
        raise ValueError(f"expected {gens.n} values, got {len(values)}")
    return vartime_multiscalar_mul(values, gens.generators) + gens.h * blind


def commit_slice(
    values: Sequence[int], blind: int, gens: MultiCommitGens
) -> GroupElement:
    """Commit to a vector using the leading generators of a larger set."""
    if gens.n < len(values):
        raise ValueError(f"{len(values)} values exceed {gens.n} generators")
    return (
        vartime_multiscalar_mul(values, gens.generators[: len(values)]) + gens.h * blind
    )