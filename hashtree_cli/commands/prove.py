"""
CLI Prove Command

Generate an inclusion proof for one block of a file.

Usage:
    hashtree prove blocks.txt --data "tx: Alice -> Bob, amount: 10" [--out proof.json]
    hashtree prove blocks.txt --data-file block.bin --format binary --out proof.bin
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree, encode_proof
from hashtree.schemas.errors import HashTreeException
from hashtree.schemas.proof import InclusionProof

from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    get_config,
    read_blocks,
    read_data,
    report_error,
    resolve_hash,
    wants_json,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)
    proof_format = args.format or get_config(args).output.proof_format

    if proof_format == "binary" and not args.out:
        print("Error: --format binary requires --out", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        data = read_data(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        algorithm, hash_function = resolve_hash(args)
        tree = MerkleTree.build(read_blocks(args.file, raw=args.raw), hash_function)
        proof = InclusionProof.from_tree(tree, data, hash_algorithm=algorithm)
    except HashTreeException as e:
        return report_error(e, output_json)

    logger.info(f"Generated proof with {len(proof.steps)} steps against root {proof.root}")

    if proof_format == "binary":
        Path(args.out).write_bytes(encode_proof(proof.to_steps()))
    elif args.out:
        Path(args.out).write_text(proof.model_dump_json(indent=2))

    if output_json:
        summary = {"ok": True, "root": proof.root, "steps": len(proof.steps)}
        if args.out:
            summary["out"] = str(args.out)
        else:
            summary["proof"] = proof.model_dump(mode="json")
        print(json.dumps(summary, indent=2))
    elif args.out:
        print(f"root: {to_hex(tree.root_hash)}")
        print(f"steps: {len(proof.steps)}")
        print(f"proof written to: {args.out}")
    else:
        print(proof.model_dump_json(indent=2))

    return EXIT_SUCCESS
