"""
Merkle - Binary Proof Encoding
Compact byte encoding for transmitting or storing inclusion proofs.

Wire format, repeated once per step in leaf-to-root order:

    +--------+----------------------+------+
    | len    | sibling hash         | side |
    | 1 byte | len bytes            | 1 B  |
    +--------+----------------------+------+

side is 0x01 when the sibling is on the LEFT of the path value and
0x00 when it is on the RIGHT. An empty proof encodes to b"".
"""
from __future__ import annotations

from typing import Iterable

from hashtree.merkle.merkle_proofs import ProofStep, Side, parse_side
from hashtree.schemas.errors import ProofDecodeException


SIDE_LEFT_BYTE = 0x01
SIDE_RIGHT_BYTE = 0x00
MAX_DIGEST_LENGTH = 0xFF


def encode_proof(proof: Iterable[ProofStep]) -> bytes:
    """
    Encode proof steps to bytes.

    Args:
        proof: Steps as ProofStep or (sibling_hash, side) pairs

    Returns:
        Encoded proof

    Raises:
        ValueError: If a sibling hash is empty or longer than 255 bytes,
                    or a side marker is not recognised
    """
    out = bytearray()

    for position, (sibling, raw_side) in enumerate(proof):
        side = parse_side(raw_side)
        if side is None:
            raise ValueError(f"Step {position}: invalid side marker {raw_side!r}")

        sibling = bytes(sibling)
        if not 0 < len(sibling) <= MAX_DIGEST_LENGTH:
            raise ValueError(
                f"Step {position}: sibling hash length {len(sibling)} "
                f"outside 1..{MAX_DIGEST_LENGTH}"
            )

        out.append(len(sibling))
        out += sibling
        out.append(SIDE_LEFT_BYTE if side is Side.LEFT else SIDE_RIGHT_BYTE)

    return bytes(out)


def decode_proof(data: bytes) -> list[ProofStep]:
    """
    Decode bytes produced by encode_proof.

    Args:
        data: Encoded proof

    Returns:
        Proof steps in leaf-to-root order

    Raises:
        ProofDecodeException: On truncated input, zero-length digests or
            unknown side bytes
    """
    steps: list[ProofStep] = []
    view = memoryview(bytes(data))
    offset = 0

    while offset < len(view):
        length = view[offset]
        if length == 0:
            raise ProofDecodeException("Zero-length sibling hash", offset=offset)

        start = offset + 1
        end = start + length
        if end + 1 > len(view):
            raise ProofDecodeException(
                f"Truncated proof: step needs {length + 2} bytes, "
                f"{len(view) - offset} available",
                offset=offset,
            )

        side_byte = view[end]
        if side_byte == SIDE_LEFT_BYTE:
            side = Side.LEFT
        elif side_byte == SIDE_RIGHT_BYTE:
            side = Side.RIGHT
        else:
            raise ProofDecodeException(
                f"Unknown side byte 0x{side_byte:02x}", offset=end
            )

        steps.append(ProofStep(bytes(view[start:end]), side))
        offset = end + 1

    return steps


__all__ = [
    "SIDE_LEFT_BYTE",
    "SIDE_RIGHT_BYTE",
    "encode_proof",
    "decode_proof",
]
