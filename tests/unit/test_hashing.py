"""
Hashing Unit Tests
Tests for hashtree/crypto/hashing.py

Tests:
- sha256 known values and determinism
- leaf/internal/padding hash rules
- pluggable digest resolution
- to_hex/from_hex
"""
import hashlib
import pytest

from hashtree.crypto.hashing import (
    digest_size,
    ensure_bytes,
    from_hex,
    get_hash_function,
    internal_hash,
    leaf_hash,
    padding_hash,
    sha256,
    to_hex,
)
from hashtree.schemas.errors import ErrorCodes, UnsupportedHashException


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        """Test sha256 of empty bytes."""
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_different_inputs_different_outputs(self):
        """Test different inputs produce different hashes."""
        assert sha256(b"input1") != sha256(b"input2")


class TestHashRules:
    """Tests for leaf, internal and padding hashes."""

    def test_leaf_hash_is_plain_digest(self):
        """Leaf hash is digest(block) with no prefix."""
        assert leaf_hash(b"block") == hashlib.sha256(b"block").digest()

    def test_leaf_hash_accepts_bytearray(self):
        """Bytes-like blocks hash the same as bytes."""
        assert leaf_hash(bytearray(b"block")) == leaf_hash(b"block")
        assert leaf_hash(memoryview(b"block")) == leaf_hash(b"block")

    def test_leaf_hash_rejects_str(self):
        """Text must be encoded by the caller."""
        with pytest.raises(TypeError, match="bytes-like"):
            leaf_hash("block")

    def test_leaf_hash_rejects_int(self):
        """An int is not silently turned into zero bytes."""
        with pytest.raises(TypeError):
            leaf_hash(32)

    def test_internal_hash_left_then_right(self):
        """Internal hash concatenates left before right without separator."""
        left = sha256(b"l")
        right = sha256(b"r")

        assert internal_hash(left, right) == hashlib.sha256(left + right).digest()
        assert internal_hash(left, right) != internal_hash(right, left)

    def test_padding_hash_is_zero_value(self):
        """Padding value is 32 zero bytes, not a digest of them."""
        assert padding_hash() == b"\x00" * 32
        assert padding_hash() != sha256(b"\x00" * 32)

    def test_padding_hash_custom_size(self):
        """Padding follows the digest size."""
        assert padding_hash(64) == bytes(64)

    def test_ensure_bytes_passthrough(self):
        """ensure_bytes returns immutable bytes."""
        result = ensure_bytes(bytearray(b"ab"))

        assert result == b"ab"
        assert isinstance(result, bytes)


class TestGetHashFunction:
    """Tests for pluggable digest resolution."""

    def test_sha256_returns_reference_function(self):
        """sha256 resolves to the module's sha256."""
        assert get_hash_function("sha256") is sha256
        assert get_hash_function("SHA-256") is sha256

    def test_sha3_256(self):
        """Other fixed-length algorithms resolve through hashlib."""
        fn = get_hash_function("sha3_256")

        assert fn(b"x") == hashlib.sha3_256(b"x").digest()
        assert fn.__name__ == "sha3_256"

    def test_digest_size(self):
        """digest_size reports output length."""
        assert digest_size(sha256) == 32
        assert digest_size(get_hash_function("sha512")) == 64

    def test_unknown_algorithm_raises(self):
        """Unknown algorithms raise UnsupportedHashException."""
        with pytest.raises(UnsupportedHashException) as exc_info:
            get_hash_function("not-a-hash")

        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_HASH
        assert exc_info.value.details["algorithm"] == "not-a-hash"

    def test_variable_length_algorithm_rejected(self):
        """shake_* digests have no fixed length and are rejected."""
        with pytest.raises(UnsupportedHashException):
            get_hash_function("shake_256")


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_with_prefix(self):
        """Test to_hex adds 0x prefix."""
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty_bytes(self):
        """Test to_hex with empty bytes."""
        assert to_hex(b"") == "0x"

    def test_from_hex_round_trip(self):
        """A digest survives hex conversion."""
        digest = sha256(b"round trip")

        assert from_hex(to_hex(digest)) == digest

    def test_from_hex_requires_prefix(self):
        """Test from_hex rejects strings without 0x prefix."""
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        """Test from_hex rejects odd-length hex."""
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        """Test from_hex rejects invalid hex characters."""
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
