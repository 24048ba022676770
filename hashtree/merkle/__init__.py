"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Immutable tree built from an ordered block list
- Leaf / Internal: Tree vertices
- ProofStep / Side: Elements of an inclusion proof
- generate_proof / verify_proof: Proof generation and verification
- encode_proof / decode_proof: Compact binary proof encoding

Commitment Rules:
1. Leaf hashing: digest(block)
2. Parent hashing: digest(left + right)
3. Padding: pair an odd level's last node with the zero-valued padding leaf
4. Empty input: EmptyInputException
5. Single block: root = leaf

Usage:
    from hashtree.merkle import MerkleTree, verify_proof

    tree = MerkleTree.build([b"tx1", b"tx2", b"tx3"])
    proof = tree.generate_proof(b"tx1")
    assert verify_proof(b"tx1", proof, tree.root_hash)
"""
from .nodes import (
    Internal,
    Leaf,
    Node,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    ProofInput,
    ProofStep,
    Side,
    generate_proof,
    parse_side,
    verify_proof,
)

from .merkle_tree import (
    MerkleTree,
    build_tree,
    compute_tree_height,
)

from .encoding import (
    decode_proof,
    encode_proof,
)


__all__ = [
    # Core types
    "MerkleTree",
    "Leaf",
    "Internal",
    "Node",
    "ProofStep",
    "ProofInput",
    "Side",
    # Core functions
    "build_tree",
    "compute_tree_height",
    "generate_proof",
    "verify_proof",
    "parse_side",
    "encode_proof",
    "decode_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
