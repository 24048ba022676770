"""
CLI Root Command

Build a tree from a file of blocks and print its root hash.

Usage:
    hashtree root blocks.txt [--raw] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree
from hashtree.schemas.errors import HashTreeException

from hashtree_cli.commands.common import (
    EXIT_SUCCESS,
    read_blocks,
    report_error,
    resolve_hash,
    wants_json,
)


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)

    try:
        algorithm, hash_function = resolve_hash(args)
        blocks = read_blocks(args.file, raw=args.raw)
        logger.info(f"Building tree from {len(blocks)} blocks in {args.file}")
        tree = MerkleTree.build(blocks, hash_function)
    except HashTreeException as e:
        return report_error(e, output_json)

    if output_json:
        print(json.dumps({
            "ok": True,
            "root": to_hex(tree.root_hash),
            "hash_algorithm": algorithm,
            "leaf_count": tree.leaf_count,
            "height": tree.height,
        }, indent=2))
    else:
        print(f"root: {to_hex(tree.root_hash)}")
        print(f"hash_algorithm: {algorithm}")
        print(f"leaf_count: {tree.leaf_count}")
        print(f"height: {tree.height}")

    return EXIT_SUCCESS
