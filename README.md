# mlpolycommit

Multilinear polynomials and polynomial commitment schemes over the ristretto255
prime-order group. The package is pure Python and has no third-party dependencies.

Scalars are plain Python integers, reduced modulo the group order
(`mlpolycommit.group.SCALAR_ORDER`) with `mlpolycommit.group.reduce_scalar`.

## Modules

- `mlpolycommit.group` — `GroupElement` (ristretto255 points with `+`, `-`, negation and
  multiplication by an integer), `CompressedGroup` (the 32-byte encoding, with
  `decompress`, `unpack` and `to_bytes`), `GroupElement.from_uniform_bytes`, and
  `vartime_multiscalar_mul`.
- `mlpolycommit.commitments` — `MultiCommitGens`, generators and a blinding generator
  derived from a label with SHAKE256 (`from_label`, `scale`, `split_at`), and the
  blinded Pedersen commitments `commit_scalar`, `commit_vector` and `commit_slice`.
- `mlpolycommit.eq_poly` — `EqPolynomial` (`evaluate`, `evals`, `evals_front`,
  `compute_factored_lens`, `compute_factored_evals`, `compute_factored_evals_with_l_size`),
  `IdentityPolynomial`, and `compute_dotproduct`.
- `mlpolycommit.dense_mlpoly` — `DensePolynomial`, a multilinear polynomial stored by its
  evaluations over the Boolean hypercube (the first variable selects the high half).
  It pads its input to a power of two and offers `evaluate`, `bound`,
  `bound_poly_var_top`, `bound_poly_var_bot`, the data-parallel binders
  `bound_poly_var_top_disjoint_rounds` and `bound_poly_var_front_rq`, `split`, `extend`,
  `merge`, `from_usize`, and `commit`, which gives a `PolyCommitment` of row-wise
  commitments under `MultiCommitGens`, together with its `PolyCommitmentBlinds`.
- `mlpolycommit.custom_dense_mlpoly` — `DensePolynomialPqx`, a space-saving layout for
  polynomials indexed by instance, proof, witness section and input, where instances
  may have fewer proofs or inputs than the maximum; `Mode` chooses the section to bind,
  `rev_bits` reverses index bits, and `to_dense_poly` expands to a `DensePolynomial`.
- `mlpolycommit.commitment_scheme` — the `CommitmentScheme` base class, `BatchType`,
  `CommitShape`, and `Transcript`, a SHAKE256-based Fiat–Shamir transcript.
- `mlpolycommit.pedersen` — `PedersenGenerators` (`from_label`, `clone_n`, `commit`) and
  `commit_vector`.
- `mlpolycommit.hyrax` — `HyraxScheme`, with `HyraxCommitment`, `HyraxOpeningProof`,
  `BatchedHyraxOpeningProof`, `matrix_dimensions` and `batch_type_to_ratio`.
- `mlpolycommit.mock` — `MockCommitScheme`, which commits to the polynomial itself and
  checks openings by evaluating it; useful for testing protocols.
- `mlpolycommit.errors` — `ProofVerifyError`, `DecompressionError`, `R1CSError` and
  `R1CSErrorKind`.

## Example

```python
from mlpolycommit.commitment_scheme import BatchType, CommitShape, Transcript
from mlpolycommit.dense_mlpoly import DensePolynomial
from mlpolycommit.hyrax import HyraxScheme

poly = DensePolynomial([1, 2, 1, 4])
point = [4, 3]
value = poly.evaluate(point)          # 28

scheme = HyraxScheme()
setup = scheme.setup([CommitShape(len(poly), BatchType.SMALL)])
commitment = scheme.commit(poly, setup)

proof = scheme.prove(setup, poly, point, Transcript(b"example"))
scheme.verify(proof, setup, Transcript(b"example"), point, value, commitment)
```

`verify` and `batch_verify` return nothing on success and raise
`mlpolycommit.errors.ProofVerifyError` when a proof does not check out. Prover and
verifier must start from transcripts with the same label.

## What the package does not do

- `DensePolynomial.commit` produces blinded row commitments, but the package has no
  evaluation proof for a `PolyCommitment`; opening proofs are available only through
  `HyraxScheme`.
- Hyrax opening proofs reveal the vector-matrix product and are not zero-knowledge.
- There are no pairing-based schemes.
- Group arithmetic is plain Python and is neither fast nor constant-time.

## Running the tests

```
pip install -e .[test]
pytest
```