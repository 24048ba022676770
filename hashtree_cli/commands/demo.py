"""
CLI Demo Command

Feed three sample transactions through build -> prove -> verify and
print the root hash and whether the proof is valid.

Usage:
    hashtree demo [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree, verify_proof
from hashtree.schemas.errors import HashTreeException

from hashtree_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    report_error,
    resolve_hash,
    wants_json,
)


SAMPLE_TRANSACTIONS: list[bytes] = [
    b"tx: Alice -> Bob, amount: 10",
    b"tx: Eve -> Frank, amount: 30",
    b"tx: Grace -> Heidi, amount: 40",
]


def demo_cmd(args: Namespace) -> int:
    """Execute the demo command."""
    output_json = wants_json(args)
    target = SAMPLE_TRANSACTIONS[0]

    try:
        algorithm, hash_function = resolve_hash(args)
        tree = MerkleTree.build(SAMPLE_TRANSACTIONS, hash_function)
        proof = tree.generate_proof(target)
    except HashTreeException as e:
        return report_error(e, output_json)

    valid = verify_proof(target, proof, tree.root_hash, hash_function)

    if output_json:
        print(json.dumps({
            "root": to_hex(tree.root_hash),
            "hash_algorithm": algorithm,
            "proof_steps": len(proof),
            "valid": valid,
        }, indent=2))
    else:
        print(f"Merkle Tree Root Hash: {to_hex(tree.root_hash)}")
        print(f"Proof is valid: {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
