"""
hashtree - Merkle tree commitments and inclusion proofs.

Commits an ordered sequence of data blocks to a single root hash and
produces and checks inclusion proofs for individual blocks.

Usage:
    from hashtree import MerkleTree, verify_proof

    tree = MerkleTree.build([b"tx: Alice -> Bob, amount: 10", b"..."])
    proof = tree.generate_proof(b"tx: Alice -> Bob, amount: 10")
    verify_proof(b"tx: Alice -> Bob, amount: 10", proof, tree.root_hash)
"""

__version__ = "0.1.0"

from hashtree.crypto.hashing import get_hash_function, leaf_hash, sha256
from hashtree.merkle import (
    MerkleTree,
    ProofStep,
    Side,
    build_tree,
    decode_proof,
    encode_proof,
    generate_proof,
    verify_proof,
)
from hashtree.schemas.errors import (
    EmptyInputException,
    HashTreeException,
    ProofDecodeException,
    ProofGenerationException,
    UnsupportedHashException,
)
from hashtree.schemas.proof import InclusionProof


__all__ = [
    "__version__",
    "MerkleTree",
    "ProofStep",
    "Side",
    "InclusionProof",
    "build_tree",
    "generate_proof",
    "verify_proof",
    "encode_proof",
    "decode_proof",
    "sha256",
    "leaf_hash",
    "get_hash_function",
    "HashTreeException",
    "EmptyInputException",
    "ProofGenerationException",
    "ProofDecodeException",
    "UnsupportedHashException",
]
