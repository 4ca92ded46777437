"""
Merkle Leaf Canonicalization
Turns raw identifiers into the sorted, deduplicated leaf set.

Canonical Leaf Rules (Hard Contracts):
1. Encoding: 32-byte big-endian unsigned integer, zero-padded on the left
2. Range: 0 <= identifier < 2**256; anything wider is rejected, never truncated
3. Ordering: ascending byte-wise comparison (same as numeric order)
4. Uniqueness: an element equal to its predecessor after sorting is dropped
5. Empty: zero leaves after deduplication raises EmptyInputError
"""
from __future__ import annotations

from typing import Iterable

from core.schemas.errors import EmptyInputError, PreconditionViolation


LEAF_WIDTH = 32

MAX_IDENTIFIER = (1 << (LEAF_WIDTH * 8)) - 1


def encode_identifier(value: int) -> bytes:
    """
    Encode an identifier as a fixed-width 32-byte leaf.

    Args:
        value: Non-negative integer below 2**256

    Returns:
        32-byte big-endian representation

    Raises:
        PreconditionViolation: If value is not an int, is negative,
            or does not fit in 32 bytes

    Example:
        >>> encode_identifier(5).hex()[-4:]
        '0005'
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreconditionViolation(
            f"Identifier must be an integer, got {type(value).__name__}",
            value=value,
        )
    if value < 0:
        raise PreconditionViolation(
            f"Identifier must be non-negative, got {value}",
            value=value,
        )
    if value > MAX_IDENTIFIER:
        raise PreconditionViolation(
            f"Identifier does not fit in {LEAF_WIDTH} bytes",
            value=value,
            details={"bit_length": value.bit_length()},
        )
    return value.to_bytes(LEAF_WIDTH, "big")


def decode_leaf(leaf: bytes) -> int:
    """
    Decode a 32-byte leaf back into its identifier.

    Raises:
        PreconditionViolation: If the leaf is not exactly 32 bytes
    """
    if len(leaf) != LEAF_WIDTH:
        raise PreconditionViolation(
            f"Leaf must be exactly {LEAF_WIDTH} bytes, got {len(leaf)}",
            details={"length": len(leaf)},
        )
    return int.from_bytes(leaf, "big")


def parse_identifier(text: str) -> int:
    """
    Parse a decimal or 0x-prefixed hex identifier string.

    Raises:
        PreconditionViolation: If the text is not a valid identifier
    """
    raw = text.strip()
    try:
        if raw[:2].lower() == "0x":
            value = int(raw[2:], 16)
        else:
            if not raw.isdigit():
                raise ValueError(raw)
            value = int(raw, 10)
    except ValueError as e:
        raise PreconditionViolation(
            f"Invalid identifier: {text!r}",
            value=text,
        ) from e

    # Range check happens here so bad CLI input fails before tree building
    encode_identifier(value)
    return value


def canonicalize(identifiers: Iterable[int]) -> list[bytes]:
    """
    Build the canonical leaf set for a collection of identifiers.

    Leaves are sorted first so that duplicates become adjacent, then a
    single pass drops every leaf equal to the one before it.

    Args:
        identifiers: Non-negative integers, any order, duplicates allowed

    Returns:
        Sorted list of distinct 32-byte leaves

    Raises:
        PreconditionViolation: If any identifier cannot be encoded
        EmptyInputError: If no leaves remain
    """
    encoded = sorted(encode_identifier(value) for value in identifiers)

    leaves: list[bytes] = []
    for leaf in encoded:
        if not leaves or leaves[-1] != leaf:
            leaves.append(leaf)

    if not leaves:
        raise EmptyInputError()

    return leaves


__all__ = [
    "LEAF_WIDTH",
    "MAX_IDENTIFIER",
    "encode_identifier",
    "decode_leaf",
    "parse_identifier",
    "canonicalize",
]
