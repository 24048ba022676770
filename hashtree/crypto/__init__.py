"""
Core cryptographic utilities.

Digest functions and the leaf/internal/padding hash rules.
"""
from .hashing import (
    DEFAULT_DIGEST_SIZE,
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    digest_size,
    ensure_bytes,
    from_hex,
    get_hash_function,
    internal_hash,
    leaf_hash,
    padding_hash,
    sha256,
    to_hex,
)

__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "DEFAULT_DIGEST_SIZE",
    "sha256",
    "get_hash_function",
    "ensure_bytes",
    "digest_size",
    "leaf_hash",
    "internal_hash",
    "padding_hash",
    "to_hex",
    "from_hex",
]
