"""
Schemas - Inclusion Proof Transport Model
File: proof.py

Purpose: JSON-serializable inclusion proof. Hashes travel as 0x-prefixed
hex strings; the digest algorithm travels with the proof so a verifier
can recompute the root without out-of-band agreement.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hashtree.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    from_hex,
    get_hash_function,
    leaf_hash as compute_leaf_hash,
    to_hex,
)
from hashtree.merkle.merkle_proofs import ProofStep, Side, verify_proof
from hashtree.schemas.errors import UnsupportedHashException

if TYPE_CHECKING:
    from hashtree.merkle.merkle_tree import MerkleTree


SCHEMA_VERSION: str = "v1"


def _validate_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """One level of an inclusion proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="Sibling hash, 0x-prefixed hex")
    side: Side = Field(..., description="Where the sibling sits relative to the path value")

    @field_validator("sibling")
    @classmethod
    def _sibling_is_hex(cls, value: str) -> str:
        return _validate_hex(value)


class InclusionProof(BaseModel):
    """
    Inclusion proof for one block, ready for JSON transport.

    leaf_hash is informational; verification always recomputes the leaf
    from the supplied data.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(default=DEFAULT_HASH_ALGORITHM)
    leaf_hash: str = Field(..., description="Hash of the proven block, 0x-prefixed hex")
    root: str = Field(..., description="Root hash the proof commits to, 0x-prefixed hex")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("hash_algorithm")
    @classmethod
    def _algorithm_supported(cls, value: str) -> str:
        try:
            get_hash_function(value)
        except UnsupportedHashException as e:
            raise ValueError(e.message) from e
        return value

    @field_validator("leaf_hash", "root")
    @classmethod
    def _hash_is_hex(cls, value: str) -> str:
        return _validate_hex(value)

    @classmethod
    def from_steps(
        cls,
        data: bytes,
        steps: list[ProofStep],
        root: bytes,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> "InclusionProof":
        """Build the transport model from raw proof steps."""
        hash_function = get_hash_function(hash_algorithm)
        return cls(
            hash_algorithm=hash_algorithm,
            leaf_hash=to_hex(compute_leaf_hash(data, hash_function)),
            root=to_hex(root),
            steps=[
                ProofStepModel(sibling=to_hex(sibling), side=side)
                for sibling, side in steps
            ],
        )

    @classmethod
    def from_tree(
        cls,
        tree: "MerkleTree",
        data: bytes,
        hash_algorithm: str | None = None,
    ) -> "InclusionProof":
        """
        Generate a proof for data in tree and wrap it.

        hash_algorithm defaults to the name of the tree's digest function.
        Trees built with a custom digest (a lambda, a partial) have no
        hashlib name and need hash_algorithm passed explicitly.

        Raises:
            ProofGenerationException: If data is not in the tree
            UnsupportedHashException: If the algorithm cannot be resolved
        """
        algorithm = hash_algorithm or getattr(tree.hash_function, "__name__", None)
        if not algorithm:
            raise UnsupportedHashException(repr(tree.hash_function))

        # Resolve before searching so a bad name never surfaces as a
        # pydantic ValidationError from the hash_algorithm validator.
        get_hash_function(algorithm)
        return cls.from_steps(data, tree.generate_proof(data), tree.root_hash, algorithm)

    def to_steps(self) -> list[ProofStep]:
        """Decode back to raw proof steps."""
        return [ProofStep(from_hex(step.sibling), step.side) for step in self.steps]

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def verify(self, data: bytes, expected_root: bytes | None = None) -> bool:
        """
        Verify data against this proof.

        Args:
            data: Raw block claimed to be in the tree
            expected_root: Trusted root to check against. Defaults to the
                root carried by the proof, which only shows internal
                consistency.

        Returns:
            True if the recomputed root matches, False otherwise
        """
        root = self.root_bytes if expected_root is None else expected_root
        return verify_proof(
            data,
            self.to_steps(),
            root,
            get_hash_function(self.hash_algorithm),
        )


__all__ = [
    "SCHEMA_VERSION",
    "ProofStepModel",
    "InclusionProof",
]
