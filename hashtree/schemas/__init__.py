"""
Schemas - Public API

Error models and exceptions shared by every hashtree module.

The proof transport model lives in hashtree.schemas.proof and is imported
from there directly, since it depends on the merkle package.
"""

from .errors import (
    EmptyInputException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    ProofDecodeException,
    ProofGenerationException,
    UnsupportedHashException,
)


__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "EmptyInputException",
    "ProofGenerationException",
    "ProofDecodeException",
    "UnsupportedHashException",
]
