"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from hashtree.merkle import MerkleTree  # noqa: E402


# =============================================================================
# Sample Data
# =============================================================================

SAMPLE_TRANSACTIONS = [
    b"tx: Alice -> Bob, amount: 10",
    b"tx: Eve -> Frank, amount: 30",
    b"tx: Grace -> Heidi, amount: 40",
]


def make_blocks(count: int, prefix: str = "block") -> list[bytes]:
    """Create count distinct blocks."""
    return [f"{prefix}{i}".encode() for i in range(count)]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def transactions() -> list[bytes]:
    """The three sample transactions."""
    return list(SAMPLE_TRANSACTIONS)


@pytest.fixture
def transaction_tree(transactions) -> MerkleTree:
    """A tree over the three sample transactions."""
    return MerkleTree.build(transactions)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove HASHTREE_* environment variables for the test."""
    for name in (
        "HASHTREE_HASH_ALGORITHM",
        "HASHTREE_LOG_LEVEL",
        "HASHTREE_LOG_FILE",
        "HASHTREE_OUTPUT_FORMAT",
        "HASHTREE_PROOF_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
