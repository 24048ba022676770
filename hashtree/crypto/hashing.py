"""
Crypto - Hashing Utilities
Digest functions for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes (the reference digest)
- Pluggable fixed-length digests resolved from hashlib by name
- Leaf, internal and padding hash rules
- Hex encoding/decoding with 0x prefix

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = digest(block)
2. Internal hashing: parent = digest(left + right), no separator
3. Padding: the padding node's hash is digest_size zero bytes

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- No domain-separation prefixes; leaf and internal hashes share one digest
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable

from hashtree.schemas.errors import UnsupportedHashException


# A digest function maps arbitrary bytes to a fixed-length digest.
HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha256"
DEFAULT_DIGEST_SIZE = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def get_hash_function(name: str) -> HashFunction:
    """
    Resolve a fixed-length hashlib algorithm by name.

    Args:
        name: Algorithm name as understood by hashlib (e.g. "sha256",
              "sha3_256", "blake2b")

    Returns:
        A function computing the digest of raw bytes

    Raises:
        UnsupportedHashException: If the algorithm is unknown or has a
            variable-length output (shake_128, shake_256)
    """
    algorithm = name.strip().lower()
    # "SHA-256" -> "sha256", "sha3-256" -> "sha3_256"
    for candidate in (algorithm, algorithm.replace("-", ""), algorithm.replace("-", "_")):
        if candidate in hashlib.algorithms_available:
            algorithm = candidate
            break

    if algorithm == DEFAULT_HASH_ALGORITHM:
        return sha256

    if algorithm not in hashlib.algorithms_available or algorithm.startswith("shake_"):
        raise UnsupportedHashException(name)

    def _digest(data: bytes) -> bytes:
        return hashlib.new(algorithm, data).digest()

    _digest.__name__ = algorithm
    return _digest


def ensure_bytes(value: object, what: str = "Data") -> bytes:
    """
    Return value as bytes, rejecting anything that is not bytes-like.

    Raises:
        TypeError: If value is not bytes, bytearray or memoryview
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{what} must be bytes-like, got {type(value).__name__}")


def digest_size(hash_function: HashFunction = sha256) -> int:
    """Return the output length in bytes of a digest function."""
    return len(hash_function(b""))


def leaf_hash(block: bytes, hash_function: HashFunction = sha256) -> bytes:
    """
    Hash one data block into a leaf value.

    Rule: leaf = digest(block)

    Raises:
        TypeError: If block is not bytes-like
    """
    return hash_function(ensure_bytes(block, "Data block"))


def internal_hash(
    left: bytes,
    right: bytes,
    hash_function: HashFunction = sha256,
) -> bytes:
    """
    Compute the parent hash of two child hashes.

    Rule: parent = digest(left + right), left before right.

    Args:
        left: Left child hash
        right: Right child hash
        hash_function: Digest to apply

    Returns:
        Parent hash
    """
    return hash_function(left + right)


def padding_hash(size: int = DEFAULT_DIGEST_SIZE) -> bytes:
    """
    Hash value of the padding node paired with an unmatched node.

    The padding value is the all-zero digest itself, not a hash of it.
    """
    return bytes(size)


def to_hex(data: bytes) -> str:
    """Render a digest as 0x-prefixed lowercase hex."""
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Parse 0x-prefixed hex back to bytes.

    Raises:
        ValueError: If the 0x prefix is missing, the digit count is odd
                    or a digit is not hex
    """
    prefix, digits = hex_string[:2], hex_string[2:]
    if prefix != "0x":
        raise ValueError(f"Expected 0x-prefixed hex, got {hex_string[:10]!r}")
    if len(digits) % 2:
        raise ValueError(f"Hex digest must have even length, got {len(digits)} digits")
    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise ValueError(f"Invalid hex digest {hex_string[:10]!r}...: {e}") from e


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
