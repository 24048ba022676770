"""
Error Taxonomy Unit Tests
Tests for hashtree/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from hashtree.schemas.errors import (
    EmptyInputException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    ProofDecodeException,
    ProofGenerationException,
    UnsupportedHashException,
)


class TestExceptions:
    """Exception codes and details."""

    def test_all_derive_from_base(self):
        """Every library exception is a HashTreeException."""
        for exc in (
            EmptyInputException(),
            ProofGenerationException(),
            ProofDecodeException("bad"),
            UnsupportedHashException("rot13"),
        ):
            assert isinstance(exc, HashTreeException)
            assert exc.retryable is False

    def test_empty_input(self):
        """EmptyInputException carries EMPTY_INPUT."""
        exc = EmptyInputException()

        assert exc.code == ErrorCodes.EMPTY_INPUT
        assert "empty" in str(exc)

    def test_proof_generation_details(self):
        """ProofGenerationException records the searched leaf hash."""
        exc = ProofGenerationException(leaf_hash="0xabcd")

        assert exc.code == ErrorCodes.PROOF_GENERATION_FAILED
        assert exc.details == {"leaf_hash": "0xabcd"}
        assert str(exc) == "Failed to generate proof"

    def test_proof_decode_offset(self):
        """ProofDecodeException records the failing offset."""
        exc = ProofDecodeException("Truncated", offset=0)

        assert exc.details == {"offset": 0}

    def test_repr(self):
        """repr shows class, code and message."""
        assert repr(EmptyInputException()) == (
            "EmptyInputException(code='EMPTY_INPUT', "
            "message='Cannot build a Merkle tree from an empty block list')"
        )


class TestErrorModel:
    """Conversion between exceptions and HashTreeError models."""

    def test_exception_to_model(self):
        """to_error_model keeps code, message and details."""
        model = ProofGenerationException(leaf_hash="0x01").to_error_model()

        assert isinstance(model, HashTreeError)
        assert model.code == ErrorCodes.PROOF_GENERATION_FAILED
        assert model.details == {"leaf_hash": "0x01"}

    def test_model_to_exception(self):
        """to_exception produces a raisable base exception."""
        model = HashTreeError(code=ErrorCodes.EMPTY_INPUT, message="no blocks")

        with pytest.raises(HashTreeException) as exc_info:
            raise model.to_exception()

        assert exc_info.value.code == ErrorCodes.EMPTY_INPUT

    @pytest.mark.parametrize("exc", [
        EmptyInputException(),
        ProofGenerationException(leaf_hash="0x01"),
        ProofDecodeException("Truncated", offset=3),
        UnsupportedHashException("rot13"),
    ])
    def test_round_trip_keeps_subclass(self, exc):
        """exception -> model -> exception restores the same class and fields."""
        restored = exc.to_error_model().to_exception()

        assert type(restored) is type(exc)
        assert restored.code == exc.code
        assert restored.message == exc.message
        assert str(restored) == str(exc)
        assert restored.details == exc.details

    def test_unknown_code_gives_base_exception(self):
        """Codes without a subclass rebuild the base exception."""
        restored = HashTreeError(code="CUSTOM", message="m").to_exception()

        assert type(restored) is HashTreeException
        assert restored.code == "CUSTOM"

    def test_model_forbids_extra(self):
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            HashTreeError(code="X", message="m", unexpected=True)
