"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    ConfigurationException,
    EmptyInputError,
    EmptyTreeError,
    ErrorCodes,
    MerkleCommitmentException,
    MerkleError,
    NotFoundError,
    PreconditionViolation,
)

# Output model
from .commitment import (
    HEX_HASH_PATTERN,
    MerkleCommitment,
    validate_hex_hash,
)

__all__ = [
    "ConfigurationException",
    "EmptyInputError",
    "EmptyTreeError",
    "ErrorCodes",
    "MerkleCommitmentException",
    "MerkleError",
    "NotFoundError",
    "PreconditionViolation",
    "HEX_HASH_PATTERN",
    "MerkleCommitment",
    "validate_hex_hash",
]
