"""
hashtree CLI

Command-line interface for building Merkle roots and checking
inclusion proofs.

Usage:
    python -m hashtree_cli root blocks.txt
    python -m hashtree_cli prove blocks.txt --data "tx: ..." --out proof.json
    python -m hashtree_cli verify --data "tx: ..." --proof proof.json --root 0x...
    python -m hashtree_cli demo
"""

__version__ = "0.1.0"
