"""
Schemas - Error Taxonomy
File: errors.py

Tree construction, proof generation and proof transport report failures
through HashTreeException subclasses. Each one converts to a HashTreeError
model when it has to be reported rather than raised (CLI JSON output).

Verification has no error channel: a failed check is a plain False.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    GENERIC = "HASHTREE_ERROR"

    # Construction
    EMPTY_INPUT = "EMPTY_INPUT"

    # Proofs
    PROOF_GENERATION_FAILED = "PROOF_GENERATION_FAILED"
    PROOF_DECODE_ERROR = "PROOF_DECODE_ERROR"

    # Digests
    UNSUPPORTED_HASH = "UNSUPPORTED_HASH"


# =============================================================================
# Reported Errors
# =============================================================================

class HashTreeError(BaseModel):
    """Serializable form of a HashTreeException."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., examples=[ErrorCodes.EMPTY_INPUT])
    message: str
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Context such as the missing leaf hash or a decode offset",
    )
    retryable: bool = False

    def to_exception(self) -> "HashTreeException":
        """Rebuild the exception, as the subclass registered for this code."""
        exc_class = _EXCEPTIONS_BY_CODE.get(self.code, HashTreeException)
        # Subclass constructors take domain arguments (leaf_hash, offset);
        # the stored message and details are restored as-is instead.
        exc = exc_class.__new__(exc_class)
        HashTreeException.__init__(
            exc,
            self.message,
            code=self.code,
            details=dict(self.details),
            retryable=self.retryable,
        )
        return exc


# =============================================================================
# Raised Errors
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hashtree errors.

    Subclasses set ``code``; the constructor argument overrides it.
    Nothing in the library is retryable, since every failure is a
    property of the input.
    """

    code: str = ErrorCodes.GENERIC

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or type(self).code
        self.details = details if details is not None else {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(HashTreeException):
    """A tree was requested over zero blocks."""

    code = ErrorCodes.EMPTY_INPUT

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty block list",
    ) -> None:
        super().__init__(message)


class ProofGenerationException(HashTreeException):
    """No real (non-padding) leaf matches the queried data."""

    code = ErrorCodes.PROOF_GENERATION_FAILED

    def __init__(
        self,
        message: str = "Failed to generate proof",
        leaf_hash: Optional[str] = None,
    ) -> None:
        super().__init__(message, details={"leaf_hash": leaf_hash} if leaf_hash else {})


class ProofDecodeException(HashTreeException):
    """An encoded proof is truncated or carries invalid bytes."""

    code = ErrorCodes.PROOF_DECODE_ERROR

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message, details={} if offset is None else {"offset": offset})


class UnsupportedHashException(HashTreeException):
    """The named digest is unknown to hashlib or has no fixed size."""

    code = ErrorCodes.UNSUPPORTED_HASH

    def __init__(self, algorithm: str) -> None:
        super().__init__(
            f"Unsupported hash algorithm: {algorithm!r}",
            details={"algorithm": algorithm},
        )


_EXCEPTIONS_BY_CODE: dict[str, type[HashTreeException]] = {
    exc_class.code: exc_class
    for exc_class in (
        EmptyInputException,
        ProofGenerationException,
        ProofDecodeException,
        UnsupportedHashException,
    )
}
