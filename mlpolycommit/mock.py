"""A commitment scheme that commits to the polynomial itself, for testing protocols."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .commitment_scheme import BatchType, CommitmentScheme, CommitShape, Transcript
from .dense_mlpoly import DensePolynomial
from .errors import ProofVerifyError
from .group import reduce_scalar


@dataclass
class MockCommitment:
    """A commitment that simply holds the polynomial."""

    poly: DensePolynomial

    def append_to_transcript(self, transcript: Transcript) -> None:
        transcript.append_message(b"mocker")


@dataclass(frozen=True)
class MockProof:
    """A proof that records only the opening point."""

    opening_point: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "opening_point", tuple(reduce_scalar(v) for v in self.opening_point)
        )


def _point(values: Sequence[int]) -> tuple[int, ...]:
    return tuple(reduce_scalar(v) for v in values)


class MockCommitScheme(CommitmentScheme):
    """Checks openings by evaluating the committed polynomial directly."""

    def setup(self, shapes: Sequence[CommitShape]) -> None:
        return None

    def commit(self, poly: DensePolynomial, setup: Any) -> MockCommitment:
        return MockCommitment(DensePolynomial(poly.evals()))

    def batch_commit(
        self, evals: Sequence[Sequence[int]], setup: Any, batch_type: BatchType
    ) -> list[MockCommitment]:
        return [MockCommitment(DensePolynomial(e)) for e in evals]

    def commit_slice(self, evals: Sequence[int], setup: Any) -> MockCommitment:
        return MockCommitment(DensePolynomial(evals))

    def prove(
        self,
        setup: Any,
        poly: DensePolynomial,
        opening_point: Sequence[int],
        transcript: Transcript,
    ) -> MockProof:
        return MockProof(tuple(opening_point))

    def batch_prove(
        self,
        setup: Any,
        polynomials: Sequence[DensePolynomial],
        opening_point: Sequence[int],
        openings: Sequence[int],
        batch_type: BatchType,
        transcript: Transcript,
    ) -> MockProof:
        return MockProof(tuple(opening_point))

    def combine_commitments(
        self, commitments: Sequence[MockCommitment], coeffs: Sequence[int]
    ) -> MockCommitment:
        if not commitments:
            raise ValueError("cannot combine an empty list of commitments")
        combined = [0] * max(len(c.poly) for c in commitments)
        for commitment, coeff in zip(commitments, coeffs):
            for i, value in enumerate(commitment.poly.evals()):
                combined[i] = reduce_scalar(combined[i] + coeff * value)
        return MockCommitment(DensePolynomial(combined))

    def verify(
        self,
        proof: MockProof,
        setup: Any,
        transcript: Optional[Transcript],
        opening_point: Sequence[int],
        opening: int,
        commitment: MockCommitment,
    ) -> None:
        if commitment.poly.evaluate(opening_point) != reduce_scalar(opening):
            raise ProofVerifyError("opening does not match the committed polynomial")
        if proof.opening_point != _point(opening_point):
            raise ProofVerifyError("proof was made for a different opening point")

    def batch_verify(
        self,
        batch_proof: MockProof,
        setup: Any,
        opening_point: Sequence[int],
        openings: Sequence[int],
        commitments: Sequence[MockCommitment],
        transcript: Optional[Transcript],
    ) -> None:
        if batch_proof.opening_point != _point(opening_point):
            raise ProofVerifyError("proof was made for a different opening point")
        if len(openings) != len(commitments):
            raise ValueError(
                f"{len(openings)} openings for {len(commitments)} commitments"
            )
        for opening, commitment in zip(openings, commitments):
            if commitment.poly.evaluate(opening_point) != reduce_scalar(opening):
                raise ProofVerifyError("opening does not match the committed polynomial")

    def protocol_name(self) -> bytes:
        return b"mock_commit"