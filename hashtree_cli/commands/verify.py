"""
CLI Verify Command

Verify a block against a stored proof and a trusted root hash.

JSON proofs (as written by `hashtree prove`) carry their digest
algorithm; binary proofs use --hash or the configured algorithm.

Usage:
    hashtree verify --data "tx: Alice -> Bob, amount: 10" --proof proof.json --root 0x...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from hashtree.crypto.hashing import from_hex, get_hash_function
from hashtree.merkle import ProofStep, decode_proof, verify_proof
from hashtree.schemas.errors import HashTreeException
from hashtree.schemas.proof import InclusionProof

from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    read_data,
    report_error,
    resolve_hash,
    wants_json,
)


logger = logging.getLogger(__name__)


def parse_root(value: str) -> bytes:
    """
    Parse a root hash given as hex, with or without 0x prefix.

    Raises:
        ValueError: If value is not valid hex
    """
    value = value.strip().lower()
    if not value.startswith("0x"):
        value = "0x" + value
    return from_hex(value)


def load_proof(path: str | Path, args: Namespace) -> tuple[list[ProofStep], str]:
    """
    Load a JSON or binary proof file.

    Returns:
        Proof steps and the digest algorithm to verify with

    Raises:
        ProofDecodeException: If a binary proof is malformed
        pydantic.ValidationError: If a JSON proof is malformed
    """
    content = Path(path).read_bytes()

    # A binary proof starts with a digest length byte (at most 64 for
    # hashlib digests), never 0x7b, so the first byte alone tells them apart.
    # Leading whitespace is not stripped: 0x20 is the SHA-256 length byte.
    if content[:1] == b"{":
        proof = InclusionProof.model_validate_json(content)
        algorithm = getattr(args, "hash", None) or proof.hash_algorithm
        return proof.to_steps(), algorithm

    algorithm, _ = resolve_hash(args)
    return decode_proof(content), algorithm


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 when the proof does not verify)
    """
    output_json = wants_json(args)

    try:
        data = read_data(args)
        expected_root = parse_root(args.root)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        steps, algorithm = load_proof(args.proof, args)
        hash_function = get_hash_function(algorithm)
    except HashTreeException as e:
        return report_error(e, output_json)
    except ValidationError as e:
        print(f"Error: invalid proof file {args.proof}: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = verify_proof(data, steps, expected_root, hash_function)

    if output_json:
        print(json.dumps({
            "ok": valid,
            "valid": valid,
            "hash_algorithm": algorithm,
            "steps": len(steps),
        }, indent=2))
    else:
        print(f"valid: {str(valid).lower()}")

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
