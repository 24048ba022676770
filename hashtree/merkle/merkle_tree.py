"""
Merkle - Tree Construction
Deterministic bottom-up construction of an immutable binary hash tree.

This module provides:
- build_tree: reduce an ordered block list to a single root node
- MerkleTree: immutable owner of the root with proof helpers

Construction Rules (Hard Contracts):
1. Empty input: raises EmptyInputException, no tree is produced
2. Single block: root = the leaf itself
3. Adjacent nodes are paired left-to-right at every level
4. Padding: an odd level's last node is paired with the zero-valued
   padding leaf, never with a copy of itself. Applied at every odd level.

Determinism Notes:
- Leaf order is input order; this module never sorts blocks
- The leaf index is implicit and never stored
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from hashtree.crypto.hashing import HashFunction, digest_size, sha256, to_hex
from hashtree.merkle.merkle_proofs import ProofInput, ProofStep, generate_proof, verify_proof
from hashtree.merkle.nodes import Internal, Leaf, Node
from hashtree.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


def build_tree(
    blocks: Iterable[bytes],
    hash_function: HashFunction = sha256,
) -> Node:
    """
    Build a Merkle tree from an ordered sequence of data blocks.

    Algorithm:
    1. Map each block to a Leaf in input order
    2. While more than one node remains:
       - If the level is odd, pair the last node with a padding leaf
       - Combine adjacent pairs into Internal nodes
    3. The remaining node is the root

    Padding Rule: zero-valued padding leaf at each odd level.
    Example: [a, b, c] -> [ab, c0] -> [root]

    Args:
        blocks: Ordered data blocks (bytes-like)
        hash_function: Digest used for leaves and internal nodes

    Returns:
        The root node

    Raises:
        EmptyInputException: If blocks is empty
        TypeError: If a block is not bytes-like
    """
    level: list[Node] = [Leaf.from_block(block, hash_function) for block in blocks]

    if not level:
        raise EmptyInputException()

    size = digest_size(hash_function)
    leaf_count = len(level)
    depth = 1

    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(Leaf.padding_node(size))

        level = [
            Internal.combine(level[i], level[i + 1], hash_function)
            for i in range(0, len(level), 2)
        ]
        depth += 1

    root = level[0]
    logger.debug(
        "Built Merkle tree: leaves=%d height=%d root=%s",
        leaf_count, depth, to_hex(root.hash),
    )
    return root


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree over an ordered block list.

    Build with MerkleTree.build(blocks). The tree exposes no mutation API;
    it can be shared between threads without locking.

    Attributes:
        root: The root node
        hash_function: Digest the tree was built with

    Example:
        >>> tree = MerkleTree.build([b"a", b"b", b"c"])
        >>> proof = tree.generate_proof(b"a")
        >>> tree.verify(b"a", proof)
        True
    """
    root: Node
    hash_function: HashFunction = field(default=sha256, compare=False, repr=False)

    @classmethod
    def build(
        cls,
        blocks: Iterable[bytes],
        hash_function: HashFunction = sha256,
    ) -> "MerkleTree":
        """
        Build a tree from an ordered sequence of data blocks.

        Raises:
            EmptyInputException: If blocks is empty
        """
        return cls(root=build_tree(blocks, hash_function), hash_function=hash_function)

    @property
    def root_hash(self) -> bytes:
        """The digest committing to the whole block sequence."""
        return self.root.hash

    @property
    def digest_size(self) -> int:
        return len(self.root.hash)

    @property
    def height(self) -> int:
        """
        Number of levels from the leaves to the root (inclusive).

        A single leaf has height 1. The leftmost path always reaches the
        deepest level since padding only ever extends the right edge.
        """
        height = 1
        node = self.root
        while isinstance(node, Internal):
            node = node.left
            height += 1
        return height

    @property
    def leaf_count(self) -> int:
        """Number of data leaves (padding excluded)."""
        return sum(1 for _ in self._iter_leaves())

    def leaf_hashes(self) -> list[bytes]:
        """Data leaf hashes in left-to-right order."""
        return [leaf.hash for leaf in self._iter_leaves()]

    def _iter_leaves(self) -> Iterator[Leaf]:
        stack: list[Node] = [self.root]
        while stack:
            node = stack.pop()
            if isinstance(node, Internal):
                stack.append(node.right)
                stack.append(node.left)
            elif not node.padding:
                yield node

    def generate_proof(self, data: bytes) -> list[ProofStep]:
        """
        Generate the inclusion proof for data.

        Raises:
            ProofGenerationException: If no leaf matches data
        """
        return generate_proof(self, data)

    def verify(self, data: bytes, proof: ProofInput) -> bool:
        """Verify a proof for data against this tree's root."""
        return verify_proof(data, proof, self.root_hash, self.hash_function)


def compute_tree_height(num_leaves: int) -> int:
    """
    Compute the height of a tree built from num_leaves blocks.

    Returns:
        Number of levels (0 for no leaves, 1 for a single leaf)
    """
    if num_leaves <= 0:
        return 0

    height = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        height += 1

    return height


__all__ = [
    "build_tree",
    "MerkleTree",
    "compute_tree_height",
]
