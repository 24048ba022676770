"""
CLI Shared Helpers

Exit codes, input loading and error reporting shared by all commands.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from hashtree.config import RuntimeConfig
from hashtree.crypto.hashing import HashFunction, get_hash_function
from hashtree.schemas.errors import HashTreeException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def get_config(args: Namespace) -> RuntimeConfig:
    """Return the config attached by main(), or defaults."""
    return getattr(args, "cli_config", None) or RuntimeConfig()


def resolve_hash(args: Namespace) -> tuple[str, HashFunction]:
    """
    Resolve the digest for this invocation (--hash beats config).

    Raises:
        UnsupportedHashException: If the algorithm is unknown
    """
    name = getattr(args, "hash", None) or get_config(args).hash.algorithm
    return name, get_hash_function(name)


def wants_json(args: Namespace) -> bool:
    """True when --json was given or the config selects JSON output."""
    return bool(getattr(args, "json", False)) or get_config(args).output.format == "json"


def read_blocks(path: str | Path, raw: bool = False) -> list[bytes]:
    """
    Read data blocks from a file.

    Args:
        path: File to read
        raw: Treat the whole file as a single block instead of one
             block per line

    Returns:
        Blocks in file order (line terminators stripped)
    """
    content = Path(path).read_bytes()
    if raw:
        return [content] if content else []
    return content.splitlines()


def read_data(args: Namespace) -> bytes:
    """
    Read the target block from --data or --data-file.

    Raises:
        ValueError: If neither was given
    """
    if getattr(args, "data_file", None):
        return Path(args.data_file).read_bytes()
    if getattr(args, "data", None) is not None:
        return args.data.encode("utf-8")
    raise ValueError("Either --data or --data-file is required")


def report_error(exc: HashTreeException, as_json: bool) -> int:
    """Print a library error and return the runtime error exit code."""
    if as_json:
        print(json.dumps({"ok": False, "error": exc.to_error_model().model_dump()}, indent=2))
    else:
        print(f"Error [{exc.code}]: {exc.message}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR
