"""
Merkle Proof Extraction and Verification

Proofs are read off already-built layers; nothing is rebuilt per leaf.

Proof Rules:
1. Start at the leaf's position in the canonical leaf set
2. At each layer below the root, the sibling is at index ^ 1
3. A sibling past the end of the layer (odd node carried forward) is skipped
4. Move up: index = index // 2
5. proof[0] is the sibling nearest the leaf, proof[-1] nearest the root

Proof lengths therefore vary with where odd-length layers fall on the path.
"""
from __future__ import annotations

from typing import Mapping, Sequence

from core.crypto.hashing import Hasher, keccak256, to_hex
from core.merkle.layers import combined_hash
from core.schemas.errors import NotFoundError


PositionIndex = dict[bytes, int]


def build_position_index(leaves: Sequence[bytes]) -> PositionIndex:
    """Map each leaf to its position in the canonical leaf set."""
    return {leaf: index for index, leaf in enumerate(leaves)}


def extract_proof(
    leaf: bytes,
    position_index: Mapping[bytes, int],
    layers: Sequence[Sequence[bytes]],
) -> list[bytes]:
    """
    Collect the sibling hashes needed to recompute the root from a leaf.

    Args:
        leaf: Canonical 32-byte leaf (not its hash)
        position_index: Leaf -> position, from build_position_index()
        layers: Layers from build_layers() over the same leaf set

    Returns:
        Sibling nodes, bottom-up

    Raises:
        NotFoundError: If the leaf is not in the position index
    """
    index = position_index.get(leaf)
    if index is None:
        raise NotFoundError(leaf_hex=to_hex(leaf))

    proof: list[bytes] = []
    for layer in layers[:-1]:
        pair_index = index ^ 1
        if pair_index < len(layer):
            proof.append(layer[pair_index])
        index //= 2

    return proof


def proof_to_hex(proof: Sequence[bytes]) -> list[str]:
    """Render proof nodes as 0x-prefixed lowercase hex strings."""
    return [to_hex(node) for node in proof]


def process_proof(
    leaf: bytes,
    proof: Sequence[bytes],
    hasher: Hasher = keccak256,
) -> bytes:
    """
    Recompute a root from a leaf and its proof.

    The leaf is hashed once, then folded with each sibling using the
    same sorted-pair combination as tree construction.
    """
    computed = hasher(leaf)
    for sibling in proof:
        computed = combined_hash(computed, sibling, hasher)
    return computed


def verify_proof(
    leaf: bytes,
    proof: Sequence[bytes],
    root: bytes,
    hasher: Hasher = keccak256,
) -> bool:
    """
    Check that a leaf belongs to the tree with the given root.

    Returns:
        True if the proof reproduces root, False otherwise
    """
    return process_proof(leaf, proof, hasher) == root


__all__ = [
    "PositionIndex",
    "build_position_index",
    "extract_proof",
    "proof_to_hex",
    "process_proof",
    "verify_proof",
]
