"""
Merkle - Tree Vertices
Leaf and Internal node types.

A node is either a Leaf holding the digest of one block, or an Internal
vertex holding the digest of its two children's concatenated digests
and owning both children. Nodes are frozen; a subtree is never shared
between parents.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from hashtree.crypto.hashing import (
    DEFAULT_DIGEST_SIZE,
    HashFunction,
    internal_hash,
    leaf_hash,
    padding_hash,
    sha256,
)


@dataclass(frozen=True)
class Leaf:
    """
    A leaf vertex.

    Attributes:
        hash: digest(block), or the zero value for a padding leaf
        padding: True for the placeholder paired with an unmatched node
    """
    hash: bytes
    padding: bool = field(default=False, compare=False)

    @classmethod
    def from_block(cls, block: bytes, hash_function: HashFunction = sha256) -> "Leaf":
        """Create a data leaf from a raw block."""
        return cls(hash=leaf_hash(block, hash_function))

    @classmethod
    def padding_node(cls, size: int = DEFAULT_DIGEST_SIZE) -> "Leaf":
        """Create the fixed padding leaf for a digest of the given size."""
        return cls(hash=padding_hash(size), padding=True)


@dataclass(frozen=True)
class Internal:
    """
    An internal vertex.

    Attributes:
        hash: digest(left.hash + right.hash)
        left: Left child
        right: Right child
    """
    hash: bytes
    left: "Node"
    right: "Node"

    @classmethod
    def combine(
        cls,
        left: "Node",
        right: "Node",
        hash_function: HashFunction = sha256,
    ) -> "Internal":
        """Create the parent of two nodes."""
        return cls(
            hash=internal_hash(left.hash, right.hash, hash_function),
            left=left,
            right=right,
        )


Node = Union[Leaf, Internal]


__all__ = [
    "Leaf",
    "Internal",
    "Node",
]
