"""Errors raised when proofs fail to verify or constraint systems are malformed."""

from __future__ import annotations

from enum import Enum


class ProofVerifyError(Exception):
    """Raised when a proof does not verify."""

    def __init__(self, message: str = "Proof verification failed") -> None:
        super().__init__(message)


class DecompressionError(ProofVerifyError):
    """Raised when a compressed group element does not decode to a point."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        super().__init__(
            f"Compressed group element failed to decompress: {list(self.data)}"
        )


class R1CSErrorKind(Enum):
    """The ways an R1CS instance or assignment can be invalid."""

    NON_POWER_OF_TWO_CONS = "the number of constraints is not a power of 2"
    NON_POWER_OF_TWO_VARS = "the number of variables is not a power of 2"
    INVALID_NUMBER_OF_INPUTS = "a wrong number of inputs was supplied in an assignment"
    INVALID_NUMBER_OF_VARS = "a wrong number of variables was supplied in an assignment"
    INVALID_SCALAR = "bytes do not parse into a valid scalar"
    INVALID_INDEX = "row or column in a (row, col, val) tuple is out of range"


class R1CSError(Exception):
    """Raised for a malformed R1CS instance or assignment."""

    def __init__(self, kind: R1CSErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, R1CSError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self) -> int:
        return hash(self.kind)