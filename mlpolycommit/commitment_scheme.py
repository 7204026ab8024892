"""The interface shared by polynomial commitment schemes, and the Fiat-Shamir transcript."""

from __future__ import annotations

import hashlib
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, Union

from .dense_mlpoly import DensePolynomial
from .group import CompressedGroup, GroupElement, reduce_scalar


class BatchType(Enum):
    """How a batch of polynomials is shaped, which fixes its matrix layout."""

    BIG = "big"
    SMALL = "small"
    SURGE_INIT_FINAL = "surge_init_final"
    SURGE_READ_WRITE = "surge_read_write"


@dataclass(frozen=True)
class CommitShape:
    """The length of polynomials a setup must support, and their batch type."""

    input_length: int
    batch_type: BatchType


def _frame(data: bytes) -> bytes:
    return struct.pack("<Q", len(data)) + bytes(data)


class Transcript:
    """A public-coin transcript: absorbed messages determine every challenge."""

    def __init__(self, label: bytes) -> None:
        self._state = hashlib.shake_256()
        self._absorb(b"transcript", label)

    def _absorb(self, label: bytes, data: bytes) -> None:
        self._state.update(_frame(label) + _frame(data))

    def append_message(self, label: bytes, message: bytes = b"") -> None:
        self._absorb(b"message:" + bytes(label), message)

    def append_protocol_name(self, name: bytes) -> None:
        self.append_message(b"protocol-name", name)

    def append_point(
        self, label: bytes, point: Union[GroupElement, CompressedGroup]
    ) -> None:
        if isinstance(point, GroupElement):
            data = point.compress().to_bytes()
        elif isinstance(point, CompressedGroup):
            data = point.to_bytes()
        else:
            raise TypeError(f"cannot append {type(point).__name__} as a point")
        self._absorb(b"point:" + bytes(label), data)

    def append_scalar(self, label: bytes, scalar: int) -> None:
        self._absorb(b"scalar:" + bytes(label), reduce_scalar(scalar).to_bytes(32, "little"))

    def append_scalars(self, scalars: Sequence[int]) -> None:
        self.append_message(b"begin_append_vector")
        for scalar in scalars:
            self.append_scalar(b"scalar", scalar)
        self.append_message(b"end_append_vector")

    def challenge_scalar(self, label: bytes) -> int:
        """Derive a scalar from everything absorbed so far, then absorb it."""
        fork = self._state.copy()
        fork.update(_frame(b"challenge") + _frame(label))
        output = fork.digest(64)
        self._absorb(b"challenge:" + bytes(label), output)
        return reduce_scalar(int.from_bytes(output, "little"))

    def challenge_vector(self, label: bytes, length: int) -> list[int]:
        return [self.challenge_scalar(label) for _ in range(length)]


class CommitmentScheme(ABC):
    """A commitment scheme for multilinear polynomials with opening proofs."""

    @abstractmethod
    def setup(self, shapes: Sequence[CommitShape]) -> Any:
        """Produce public parameters supporting the given shapes."""

    @abstractmethod
    def commit(self, poly: DensePolynomial, setup: Any) -> Any:
        """Commit to one polynomial."""

    @abstractmethod
    def batch_commit(
        self, evals: Sequence[Sequence[int]], setup: Any, batch_type: BatchType
    ) -> list[Any]:
        """Commit to several evaluation tables at once."""

    @abstractmethod
    def commit_slice(self, evals: Sequence[int], setup: Any) -> Any:
        """Commit to a raw evaluation table."""

    def batch_commit_polys(
        self, polys: Sequence[DensePolynomial], setup: Any, batch_type: BatchType
    ) -> list[Any]:
        """Commit to several polynomials by their evaluation tables."""
        return self.batch_commit([poly.evals() for poly in polys], setup, batch_type)

    @abstractmethod
    def combine_commitments(
        self, commitments: Sequence[Any], coeffs: Sequence[int]
    ) -> Any:
        """Combine commitments homomorphically with the given coefficients."""

    @abstractmethod
    def prove(
        self,
        setup: Any,
        poly: DensePolynomial,
        opening_point: Sequence[int],
        transcript: Transcript,
    ) -> Any:
        """Prove the evaluation of poly at opening_point."""

    @abstractmethod
    def batch_prove(
        self,
        setup: Any,
        polynomials: Sequence[DensePolynomial],
        opening_point: Sequence[int],
        openings: Sequence[int],
        batch_type: BatchType,
        transcript: Transcript,
    ) -> Any:
        """Prove the evaluations of several polynomials at one point."""

    @abstractmethod
    def verify(
        self,
        proof: Any,
        setup: Any,
        transcript: Transcript,
        opening_point: Sequence[int],
        opening: int,
        commitment: Any,
    ) -> None:
        """Check a proof, raising ProofVerifyError if it does not verify."""

    @abstractmethod
    def batch_verify(
        self,
        batch_proof: Any,
        setup: Any,
        opening_point: Sequence[int],
        openings: Sequence[int],
        commitments: Sequence[Any],
        transcript: Transcript,
    ) -> None:
        """Check a batched proof, raising ProofVerifyError if it does not verify."""

    @abstractmethod
    def protocol_name(self) -> bytes:
        """The label the scheme uses in transcripts."""