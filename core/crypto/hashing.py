"""
Hashing Utilities
Digest primitives and hex helpers for the allow-list Merkle commitment.

This module provides:
- Keccak-256 hashing for raw bytes (Ethereum-compatible, via eth-utils)
- SHA-256 hashing for raw bytes
- A small registry mapping hash names to digest functions
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Every registered digest produces exactly 32 bytes
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable

from eth_utils import keccak

from core.schemas.errors import ConfigurationException


# A digest function: raw bytes in, 32 bytes out
Hasher = Callable[[bytes], bytes]

DIGEST_SIZE = 32

DEFAULT_HASH_FUNCTION = "keccak256"


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    This is the pre-standard Keccak used by Ethereum, not NIST SHA3-256.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest
    """
    return hashlib.sha256(data).digest()


HASHERS: dict[str, Hasher] = {
    "keccak256": keccak256,
    "sha256": sha256,
}


def get_hasher(name: str) -> Hasher:
    """
    Look up a digest function by name.

    Args:
        name: Registered hash name (case-insensitive), e.g. "keccak256"

    Returns:
        The digest function

    Raises:
        ConfigurationException: If the name is not registered
    """
    hasher = HASHERS.get(name.lower())
    if hasher is None:
        raise ConfigurationException(
            message=f"Unknown hash function: {name!r}",
            details={"hash_function": name, "supported": sorted(HASHERS)},
        )
    return hasher


def hasher_name(hasher: Hasher) -> str:
    """Return the registered name of a digest function, or its __name__."""
    for name, fn in HASHERS.items():
        if fn is hasher:
            return name
    return getattr(hasher, "__name__", "custom")


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "Hasher",
    "DIGEST_SIZE",
    "DEFAULT_HASH_FUNCTION",
    "keccak256",
    "sha256",
    "HASHERS",
    "get_hasher",
    "hasher_name",
    "to_hex",
    "from_hex",
]
