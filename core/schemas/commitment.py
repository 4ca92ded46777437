"""
Schemas
File: commitment.py

Purpose: The published result of committing to an identifier set:
root hash, per-identifier proofs and the maximum proof length.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# 0x followed by 64 hex chars = 32 bytes
HEX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")

DECIMAL_PATTERN = re.compile(r"^(0|[1-9][0-9]*)$")


def validate_hex_hash(value: str, field_name: str) -> str:
    """Validate that a value is a valid 32-byte hex hash with 0x prefix."""
    if not HEX_HASH_PATTERN.match(value):
        shown = f"{value[:20]}..." if len(value) > 20 else value
        raise ValueError(
            f"{field_name} must be a valid 32-byte hex string with 0x prefix "
            f"(64 hex chars), got: {shown}"
        )
    return value.lower()


class MerkleCommitment(BaseModel):
    """
    Root and inclusion proofs for a set of identifiers.

    Serialized with camelCase keys so the output can be handed straight
    to existing verifier tooling:

        {"root": "0x..", "proofs": {"5": ["0x..", ...]}, "maxProofLength": 2}
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    root: str = Field(
        ...,
        description="Merkle root as 0x-prefixed lowercase hex",
    )
    proofs: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Decimal identifier -> ordered sibling hashes (leaf to root)",
    )
    max_proof_length: int = Field(
        default=0,
        ge=0,
        alias="maxProofLength",
        description="Largest proof length across all identifiers",
    )
    leaf_count: int = Field(
        default=0,
        ge=0,
        alias="leafCount",
        description="Number of distinct leaves in the tree",
    )
    hash_function: str = Field(
        default="keccak256",
        alias="hashFunction",
        description="Digest used for leaves and internal nodes",
    )

    @field_validator("root")
    @classmethod
    def _validate_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @field_validator("proofs")
    @classmethod
    def _validate_proofs(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        normalized: dict[str, list[str]] = {}
        for identifier, proof in v.items():
            if not DECIMAL_PATTERN.match(identifier):
                raise ValueError(
                    f"proof keys must be base-10 identifiers, got: {identifier!r}"
                )
            normalized[identifier] = [
                validate_hex_hash(node, f"proofs[{identifier}]") for node in proof
            ]
        return normalized

    @model_validator(mode="after")
    def _check_max_proof_length(self) -> "MerkleCommitment":
        longest = max((len(p) for p in self.proofs.values()), default=0)
        if self.proofs and self.max_proof_length != longest:
            raise ValueError(
                f"maxProofLength is {self.max_proof_length}, "
                f"but the longest proof has {longest} elements"
            )
        return self

    def proof_for(self, identifier: int | str) -> list[str]:
        """Return the proof for an identifier; KeyError if it is not committed."""
        return self.proofs[str(identifier)]

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON with camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=indent)
