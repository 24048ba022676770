"""
CLI Main Entry Point

Usage:
    hashtree [--config PATH] [--log-level LEVEL] [--hash ALGO] <command> ...

    hashtree root <file> [--raw] [--json]
    hashtree prove <file> (--data TEXT | --data-file PATH) [--out PATH] [--format json|binary]
    hashtree verify (--data TEXT | --data-file PATH) --proof PATH --root HEX [--json]
    hashtree demo [--json]
    hashtree config --show

Environment Variables:
    HASHTREE_HASH_ALGORITHM     Digest algorithm (default: sha256)
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Optional log file
    HASHTREE_OUTPUT_FORMAT      human or json (default: human)
    HASHTREE_PROOF_FORMAT       json or binary (default: json)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree import __version__
from hashtree.config import load_config

from hashtree_cli.commands import demo, prove, root, verify
from hashtree_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Send logs to stderr (and optionally a file) so stdout stays parseable."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_json_flag(parser: argparse.ArgumentParser, help_text: str = "Output machine-readable JSON") -> None:
    parser.add_argument("--json", action="store_true", help=help_text)


def _add_blocks_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", type=str, help="File with one block per line")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Treat the whole file as a single block",
    )


def _add_data_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--data", type=str, help="Target block as text (UTF-8 encoded)")
    group.add_argument("--data-file", type=str, help="File whose full contents are the target block")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Build Merkle roots, generate and verify inclusion proofs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Config file (default: ./hashtree.yaml, ./hashtree.json "
             "or ~/.config/hashtree/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--hash",
        default=None,
        help="Digest algorithm, e.g. sha256 or sha3_256 (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    root_parser = subparsers.add_parser(
        "root",
        help="Compute the root hash of a file of blocks",
    )
    _add_blocks_arguments(root_parser)
    _add_json_flag(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one block",
    )
    _add_blocks_arguments(prove_parser)
    _add_data_arguments(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Write the proof to this path instead of stdout",
    )
    prove_parser.add_argument(
        "--format",
        choices=["json", "binary"],
        default=None,
        help="Proof encoding (default: output.proof_format from config)",
    )
    _add_json_flag(prove_parser, "Output a machine-readable JSON summary")
    prove_parser.set_defaults(func=prove.prove_cmd)

    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a block against a proof and a trusted root",
    )
    _add_data_arguments(verify_parser)
    verify_parser.add_argument("--proof", required=True, help="Proof file (JSON or binary)")
    verify_parser.add_argument("--root", required=True, help="Trusted root hash (hex, 0x optional)")
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    demo_parser = subparsers.add_parser(
        "demo",
        help="Build, prove and verify over three sample transactions",
    )
    _add_json_flag(demo_parser)
    demo_parser.set_defaults(func=demo.demo_cmd)

    config_parser = subparsers.add_parser("config", help="Show effective configuration")
    config_parser.add_argument("--show", action="store_true", help="Print the merged configuration")
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    if not args.show:
        print("Usage: hashtree config --show")
        return EXIT_SUCCESS

    print(json.dumps(args.cli_config.to_dict(), indent=2))
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        0 on success, 1 on errors, 2 when a proof does not verify
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.log_file)
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        # Library errors are reported by the commands; this is the fallback
        # for I/O and other unexpected failures.
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
