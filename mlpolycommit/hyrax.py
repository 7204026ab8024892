"""Hyrax commitments to multilinear polynomials and their opening proofs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .commitment_scheme import BatchType, CommitmentScheme, CommitShape, Transcript
from .dense_mlpoly import DensePolynomial
from .eq_poly import EqPolynomial, compute_dotproduct
from .errors import ProofVerifyError
from .group import GroupElement, reduce_scalar, vartime_multiscalar_mul
from .pedersen import PedersenGenerators, commit_vector

_TRACE_LEN_R1CS_POLYS_BATCH_RATIO = 64
_SURGE_RATIO_READ_WRITE = 16
_SURGE_RATIO_FINAL = 4

_GENERATORS_LABEL = b"Hyrax generators"
_OPENING_PROTOCOL = b"Hyrax opening proof"
_BATCHED_PROTOCOL = b"BatchedHyraxOpeningProof"


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def _log2_exact(n: int) -> int:
    if n <= 0 or n & (n - 1):
        raise ValueError(f"{n} is not a power of two")
    return n.bit_length() - 1


def batch_type_to_ratio(batch_type: BatchType) -> int:
    """The row-to-column size ratio used for a batch type."""
    ratios = {
        BatchType.BIG: _TRACE_LEN_R1CS_POLYS_BATCH_RATIO,
        BatchType.SMALL: 1,
        BatchType.SURGE_READ_WRITE: _SURGE_RATIO_READ_WRITE,
        BatchType.SURGE_INIT_FINAL: _SURGE_RATIO_FINAL,
    }
    return ratios[batch_type]


def matrix_dimensions(num_vars: int, ratio: int) -> tuple[int, int]:
    """Return (number of rows, row length) of the evaluation matrix."""
    if num_vars < 1:
        raise ValueError("a polynomial needs at least one variable")
    row_size = 1 << (num_vars // 2)
    row_size = _next_power_of_two(row_size * math.isqrt(ratio))
    right_num_vars = min(row_size.bit_length() - 1, num_vars - 1)
    row_size = 1 << right_num_vars
    col_size = 1 << (num_vars - right_num_vars)
    return col_size, row_size


def _row_generators(generators: PedersenGenerators, count: int) -> tuple[GroupElement, ...]:
    if len(generators.generators) < count:
        raise ValueError(
            f"{count} generators required, only {len(generators.generators)} available"
        )
    return generators.generators[:count]


def _combine_rows(
    commitments: Sequence[HyraxCommitment], coeffs: Sequence[int], size: int
) -> tuple[GroupElement, ...]:
    combined = [GroupElement.identity()] * size
    for coeff, commitment in zip(coeffs, commitments):
        for j, row in enumerate(commitment.row_commitments):
            combined[j] = combined[j] + row * coeff
    return tuple(combined)


@dataclass(frozen=True)
class HyraxCommitment:
    """One Pedersen commitment per row of the evaluation matrix."""

    row_commitments: tuple[GroupElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "row_commitments", tuple(self.row_commitments))

    @classmethod
    def commit(
        cls, poly: DensePolynomial, generators: PedersenGenerators
    ) -> HyraxCommitment:
        return cls.commit_slice(poly.evals(), generators)

    @classmethod
    def commit_slice(
        cls, eval_slice: Sequence[int], generators: PedersenGenerators
    ) -> HyraxCommitment:
        n = len(eval_slice)
        l_size, r_size = matrix_dimensions(_log2_exact(n), 1)
        if l_size * r_size != n:
            raise ValueError("matrix dimensions do not cover the evaluations")
        gens = _row_generators(generators, r_size)
        return cls(
            tuple(
                commit_vector(eval_slice[start : start + r_size], gens)
                for start in range(0, n, r_size)
            )
        )

    @classmethod
    def batch_commit(
        cls,
        batch: Sequence[Sequence[int]],
        generators: PedersenGenerators,
        batch_type: BatchType,
    ) -> list[HyraxCommitment]:
        if not batch:
            raise ValueError("cannot commit to an empty batch")
        n = len(batch[0])
        if any(len(evals) != n for evals in batch):
            raise ValueError("all polynomials in a batch must have the same length")
        l_size, r_size = matrix_dimensions(
            _log2_exact(n), batch_type_to_ratio(batch_type)
        )
        if l_size * r_size != n:
            raise ValueError("matrix dimensions do not cover the evaluations")
        gens = _row_generators(generators, r_size)
        return [
            cls(
                tuple(
                    commit_vector(evals[start : start + r_size], gens)
                    for start in range(0, n, r_size)
                )
            )
            for evals in batch
        ]

    def append_to_transcript(self, transcript: Transcript) -> None:
        transcript.append_message(b"poly_commitment_begin")
        for row in self.row_commitments:
            transcript.append_point(b"poly_commitment", row)
        transcript.append_message(b"poly_commitment_end")


@dataclass(frozen=True)
class HyraxOpeningProof:
    """The product of the left eq vector with the evaluation matrix."""

    vector_matrix_product: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "vector_matrix_product",
            tuple(reduce_scalar(v) for v in self.vector_matrix_product),
        )

    @classmethod
    def prove(
        cls,
        poly: DensePolynomial,
        opening_point: Sequence[int],
        ratio: int,
        transcript: Transcript,
    ) -> HyraxOpeningProof:
        transcript.append_protocol_name(_OPENING_PROTOCOL)
        if poly.num_vars != len(opening_point):
            raise ValueError(
                f"expected a point of {poly.num_vars} values, got {len(opening_point)}"
            )
        l_size, r_size = matrix_dimensions(poly.num_vars, ratio)
        left, _ = EqPolynomial(tuple(opening_point)).compute_factored_evals_with_l_size(
            l_size
        )
        evals = poly.evals()
        product = [0] * r_size
        for i, start in enumerate(range(0, len(evals), r_size)):
            weight = left[i]
            for j, value in enumerate(evals[start : start + r_size]):
                product[j] += weight * value
        return cls(tuple(product))

    def verify(
        self,
        generators: PedersenGenerators,
        transcript: Transcript,
        opening_point: Sequence[int],
        opening: int,
        commitment: HyraxCommitment,
        ratio: int,
    ) -> None:
        """Raise ProofVerifyError unless the proof opens the commitment to opening."""
        transcript.append_protocol_name(_OPENING_PROTOCOL)
        l_size, r_size = matrix_dimensions(len(opening_point), ratio)
        left, right = EqPolynomial(
            tuple(opening_point)
        ).compute_factored_evals_with_l_size(l_size)
        if len(commitment.row_commitments) != len(left):
            raise ProofVerifyError("commitment has the wrong number of rows")
        if len(self.vector_matrix_product) != r_size:
            raise ProofVerifyError("proof has the wrong length")
        derived = vartime_multiscalar_mul(left, commitment.row_commitments)
        product = vartime_multiscalar_mul(
            self.vector_matrix_product, _row_generators(generators, r_size)
        )
        dot_product = compute_dotproduct(self.vector_matrix_product, right)
        if derived != product or dot_product != reduce_scalar(opening):
            raise ProofVerifyError()


@dataclass(frozen=True)
class BatchedHyraxOpeningProof:
    """One opening proof for a random linear combination of polynomials."""

    joint_proof: HyraxOpeningProof
    ratio: int

    @classmethod
    def prove(
        cls,
        polynomials: Sequence[DensePolynomial],
        opening_point: Sequence[int],
        openings: Sequence[int],
        batch_type: BatchType,
        transcript: Transcript,
    ) -> BatchedHyraxOpeningProof:
        if not polynomials:
            raise ValueError("cannot prove an empty batch")
        transcript.append_protocol_name(_BATCHED_PROTOCOL)
        transcript.append_scalars(openings)
        coeffs = transcript.challenge_vector(b"challenge_vec", len(polynomials))
        combined = [0] * len(polynomials[0])
        for coeff, poly in zip(coeffs, polynomials):
            for i, value in enumerate(poly.evals()[: len(combined)]):
                combined[i] += coeff * value
        ratio = batch_type_to_ratio(batch_type)
        joint_proof = HyraxOpeningProof.prove(
            DensePolynomial(combined), opening_point, ratio, transcript
        )
        return cls(joint_proof, ratio)

    def verify(
        self,
        generators: PedersenGenerators,
        opening_point: Sequence[int],
        openings: Sequence[int],
        commitments: Sequence[HyraxCommitment],
        transcript: Transcript,
    ) -> None:
        """Raise ProofVerifyError unless every commitment opens to its opening."""
        if len(openings) != len(commitments):
            raise ValueError(
                f"{len(openings)} openings for {len(commitments)} commitments"
            )
        l_size, _ = matrix_dimensions(len(opening_point), self.ratio)
        for i, commitment in enumerate(commitments):
            if len(commitment.row_commitments) != l_size:
                raise ValueError(
                    f"Row commitment {i}/{len(commitments)} wrong length."
                )
        transcript.append_protocol_name(_BATCHED_PROTOCOL)
        transcript.append_scalars(openings)
        coeffs = transcript.challenge_vector(b"challenge_vec", len(openings))
        rlc_eval = compute_dotproduct(coeffs, openings)
        rlc_commitment = HyraxCommitment(_combine_rows(commitments, coeffs, l_size))
        self.joint_proof.verify(
            generators, transcript, opening_point, rlc_eval, rlc_commitment, self.ratio
        )


class HyraxScheme(CommitmentScheme):
    """The Hyrax commitment scheme over Pedersen generators."""

    def setup(self, shapes: Sequence[CommitShape]) -> PedersenGenerators:
        max_len = max(
            (
                matrix_dimensions(
                    _log2_exact(shape.input_length),
                    batch_type_to_ratio(shape.batch_type),
                )[1]
                for shape in shapes
            ),
            default=0,
        )
        return PedersenGenerators.from_label(max_len, _GENERATORS_LABEL)

    def commit(self, poly: DensePolynomial, setup: PedersenGenerators) -> HyraxCommitment:
        return HyraxCommitment.commit(poly, setup)

    def batch_commit(
        self,
        evals: Sequence[Sequence[int]],
        setup: PedersenGenerators,
        batch_type: BatchType,
    ) -> list[HyraxCommitment]:
        return HyraxCommitment.batch_commit(evals, setup, batch_type)

    def commit_slice(
        self, evals: Sequence[int], setup: PedersenGenerators
    ) -> HyraxCommitment:
        return HyraxCommitment.commit_slice(evals, setup)

    def prove(
        self,
        setup: PedersenGenerators,
        poly: DensePolynomial,
        opening_point: Sequence[int],
        transcript: Transcript,
    ) -> HyraxOpeningProof:
        return HyraxOpeningProof.prove(poly, opening_point, 1, transcript)

    def batch_prove(
        self,
        setup: PedersenGenerators,
        polynomials: Sequence[DensePolynomial],
        opening_point: Sequence[int],
        openings: Sequence[int],
        batch_type: BatchType,
        transcript: Transcript,
    ) -> BatchedHyraxOpeningProof:
        return BatchedHyraxOpeningProof.prove(
            polynomials, opening_point, openings, batch_type, transcript
        )

    def combine_commitments(
        self, commitments: Sequence[HyraxCommitment], coeffs: Sequence[int]
    ) -> HyraxCommitment:
        if not commitments:
            raise ValueError("cannot combine an empty list of commitments")
        max_size = max(len(c.row_commitments) for c in commitments)
        return HyraxCommitment(_combine_rows(commitments, coeffs, max_size))

    def verify(
        self,
        proof: HyraxOpeningProof,
        setup: PedersenGenerators,
        transcript: Transcript,
        opening_point: Sequence[int],
        opening: int,
        commitment: HyraxCommitment,
    ) -> None:
        proof.verify(setup, transcript, opening_point, opening, commitment, 1)

    def batch_verify(
        self,
        batch_proof: BatchedHyraxOpeningProof,
        setup: PedersenGenerators,
        opening_point: Sequence[int],
        openings: Sequence[int],
        commitments: Sequence[HyraxCommitment],
        transcript: Optional[Transcript],
    ) -> None:
        if transcript is None:
            raise ValueError("a transcript is required")
        batch_proof.verify(setup, opening_point, openings, commitments, transcript)

    def protocol_name(self) -> bytes:
        return _BATCHED_PROTOCOL