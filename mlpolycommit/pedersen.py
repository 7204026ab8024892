"""Pedersen vector commitments with generators derived from a label."""

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
class PedersenGenerators:
    """A list of independent group generators."""

    generators: tuple[GroupElement, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "generators", tuple(self.generators))

    @classmethod
    def from_label(cls, length: int, label: bytes) -> PedersenGenerators:
        """Derive length generators deterministically from a label."""
        shake = hashlib.shake_256()
        shake.update(label)
        shake.update(GROUP_BASEPOINT_COMPRESSED.to_bytes())
        seed = shake.digest(32)
        stream = hashlib.shake_256(seed).digest(64 * length)
        return cls(
            tuple(
                GroupElement.from_uniform_bytes(stream[start : start + 64])
                for start in range(0, len(stream), 64)
            )
        )

    def clone_n(self, n: int) -> PedersenGenerators:
        """Return the first n generators."""
        if len(self.generators) < n:
            raise ValueError(
                "Insufficient number of generators for clone_n: "
                f"required {n}, available {len(self.generators)}"
            )
        return PedersenGenerators(self.generators[:n])

    def commit(self, value: int) -> GroupElement:
        """Commit to one scalar with a single generator."""
        if len(self.generators) != 1:
            raise ValueError(f"expected 1 generator, got {len(self.generators)}")
        return self.generators[0] * value


def commit_vector(inputs: Sequence[int], bases: Sequence[GroupElement]) -> GroupElement:
    """Return the sum of inputs[i] * bases[i]."""
    if len(bases) != len(inputs):
        raise ValueError(f"expected {len(bases)} inputs, got {len(inputs)}")
    return vartime_multiscalar_mul(inputs, bases)