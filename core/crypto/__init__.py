"""
Core cryptographic utilities.

Digest primitives used to build and verify Merkle commitments.
"""
from .hashing import (
    DEFAULT_HASH_FUNCTION,
    DIGEST_SIZE,
    HASHERS,
    Hasher,
    from_hex,
    get_hasher,
    hasher_name,
    keccak256,
    sha256,
    to_hex,
)

__all__ = [
    "DEFAULT_HASH_FUNCTION",
    "DIGEST_SIZE",
    "HASHERS",
    "Hasher",
    "from_hex",
    "get_hasher",
    "hasher_name",
    "keccak256",
    "sha256",
    "to_hex",
]
