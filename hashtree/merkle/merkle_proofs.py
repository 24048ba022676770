"""
Merkle - Inclusion Proofs
Proof generation by depth-first search and proof verification by
recomputing the root.

This module provides:
- Side / ProofStep: one (sibling_hash, side) element of a proof
- generate_proof: locate a block's leaf and collect its sibling path
- verify_proof: recompute the root from a block and its path
- MerkleProver / MerkleVerifier: static-method convenience wrappers

Proof Rules:
1. Steps are ordered leaf-to-root
2. side records where the sibling sits relative to the path value:
   LEFT -> digest(sibling + current), RIGHT -> digest(current + sibling)
3. If several leaves share a hash, the first one in left-to-right
   order is proven. Block contents are not compared.

Verification never raises. Truncated, reordered, tampered or malformed
proofs all produce False.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable as IterableABC
from enum import Enum
from typing import TYPE_CHECKING, Iterable, NamedTuple, Optional, Sequence, Union

from hashtree.crypto.hashing import HashFunction, internal_hash, leaf_hash, sha256, to_hex
from hashtree.merkle.nodes import Leaf, Node
from hashtree.schemas.errors import ProofGenerationException

if TYPE_CHECKING:
    from hashtree.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Position of a sibling relative to the path value it is combined with."""
    LEFT = "left"
    RIGHT = "right"


class ProofStep(NamedTuple):
    """A single level of an inclusion proof."""
    sibling_hash: bytes
    side: Side


ProofInput = Iterable[Union[ProofStep, Sequence[object]]]

_SIDES_BY_VALUE: dict[str, Side] = {side.value: side for side in Side}


def parse_side(value: object) -> Side | None:
    """
    Interpret a side marker.

    Accepts Side members and their string values ("left"/"right", case
    insensitive). Returns None for anything else.
    """
    if isinstance(value, Side):
        return value
    if isinstance(value, str):
        return _SIDES_BY_VALUE.get(value.lower())
    return None


def _coerce_step(step: object) -> tuple[bytes, Side] | None:
    if not isinstance(step, (tuple, list)) or len(step) != 2:
        return None

    sibling, raw_side = step
    if not isinstance(sibling, (bytes, bytearray, memoryview)):
        return None

    side = parse_side(raw_side)
    if side is None:
        return None

    return bytes(sibling), side


class _PathLink(NamedTuple):
    """One step of a root-to-node path, pointing at the step above it."""
    step: ProofStep
    parent: Optional["_PathLink"]


def _unwind(link: Optional[_PathLink]) -> list[ProofStep]:
    # Links run from the deepest step upwards, which is leaf-to-root order.
    steps: list[ProofStep] = []
    while link is not None:
        steps.append(link.step)
        link = link.parent
    return steps


def generate_proof(tree: "MerkleTree", data: bytes) -> list[ProofStep]:
    """
    Generate an inclusion proof for data in tree.

    Algorithm:
    1. target = leaf_hash(data)
    2. Depth-first search, left subtree before right, for a data leaf
       whose hash equals target. The traversal is iterative, so tree
       depth is not bounded by the interpreter's recursion limit.
    3. Each stack entry links to the step that led to it, so a push
       costs O(1) and a full search is O(n). The path is materialised
       only on a match, by following the links from leaf to root.

    Args:
        tree: The tree to search
        data: Raw block to prove

    Returns:
        Ordered proof steps, leaf to root (empty for a single-leaf tree)

    Raises:
        ProofGenerationException: If no leaf matches data
    """
    target = leaf_hash(data, tree.hash_function)

    stack: list[tuple[Node, Optional[_PathLink]]] = [(tree.root, None)]
    while stack:
        node, link = stack.pop()

        if isinstance(node, Leaf):
            if not node.padding and node.hash == target:
                return _unwind(link)
            continue

        # Right pushed first so the left subtree is searched first.
        stack.append((node.right, _PathLink(ProofStep(node.left.hash, Side.LEFT), link)))
        stack.append((node.left, _PathLink(ProofStep(node.right.hash, Side.RIGHT), link)))

    logger.debug("No leaf matches %s", to_hex(target))
    raise ProofGenerationException(leaf_hash=to_hex(target))


def verify_proof(
    data: bytes,
    proof: ProofInput,
    expected_root: bytes,
    hash_function: HashFunction = sha256,
) -> bool:
    """
    Verify an inclusion proof.

    Algorithm:
    1. current = leaf_hash(data)
    2. For each (sibling_hash, side) in order:
       - LEFT: current = digest(sibling_hash + current)
       - RIGHT: current = digest(current + sibling_hash)
    3. Compare current with expected_root byte for byte

    Args:
        data: Raw block claimed to be in the tree
        proof: Steps as ProofStep or (sibling_hash, side) pairs
        expected_root: The committed root hash
        hash_function: Digest the tree was built with

    Returns:
        True if the recomputed root equals expected_root, False otherwise
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        return False
    if not isinstance(expected_root, (bytes, bytearray, memoryview)):
        return False
    if not isinstance(proof, IterableABC) or isinstance(proof, (str, bytes, bytearray)):
        return False

    current = leaf_hash(data, hash_function)

    for step in proof:
        parsed = _coerce_step(step)
        if parsed is None:
            return False

        sibling, side = parsed
        if side is Side.LEFT:
            current = internal_hash(sibling, current, hash_function)
        else:
            current = internal_hash(current, sibling, hash_function)

    return current == bytes(expected_root)


class MerkleProver:
    """
    Convenience class for building roots and generating proofs.

    Example:
        >>> tree = MerkleTree.build([b"a", b"b", b"c"])
        >>> steps = MerkleProver.prove(tree, b"b")
        >>> len(steps)
        2
    """

    @staticmethod
    def prove(tree: "MerkleTree", data: bytes) -> list[ProofStep]:
        """
        Generate a proof for data in tree.

        Raises:
            ProofGenerationException: If data is not in the tree
        """
        return generate_proof(tree, data)

    @staticmethod
    def compute_root(
        blocks: Sequence[bytes],
        hash_function: HashFunction = sha256,
    ) -> bytes:
        """
        Compute the root hash for a sequence of blocks.

        Raises:
            EmptyInputException: If blocks is empty
        """
        from hashtree.merkle.merkle_tree import build_tree

        return build_tree(blocks, hash_function).hash


class MerkleVerifier:
    """Convenience class for verifying proofs."""

    @staticmethod
    def verify(
        data: bytes,
        proof: ProofInput,
        root: bytes,
        hash_function: HashFunction = sha256,
    ) -> bool:
        """Verify a proof for data against root."""
        return verify_proof(data, proof, root, hash_function)

    @staticmethod
    def verify_against_tree(tree: "MerkleTree", data: bytes, proof: ProofInput) -> bool:
        """Verify a proof for data against the root of tree."""
        return verify_proof(data, proof, tree.root_hash, tree.hash_function)


__all__ = [
    "Side",
    "ProofStep",
    "ProofInput",
    "parse_side",
    "generate_proof",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]
