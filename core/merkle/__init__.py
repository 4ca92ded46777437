"""
Merkle Tree Commitments over identifier sets.

This package provides:
- canonicalize: identifiers -> sorted, deduplicated 32-byte leaves
- build_layers: leaves -> every layer up to the root (sorted-pair hashing,
  odd node carried forward)
- extract_proof: sibling path for one leaf, read from built layers
- verify_proof: recompute a root from a leaf and its proof

Usage:
    from core.merkle import canonicalize, build_layers, get_root
    from core.merkle import build_position_index, extract_proof, verify_proof

    leaves = canonicalize([1, 2, 3, 6])
    layers = build_layers(leaves)
    root = get_root(layers)

    index = build_position_index(leaves)
    proof = extract_proof(leaves[0], index, layers)

    assert verify_proof(leaves[0], proof, root)
"""
from .canonical import (
    LEAF_WIDTH,
    MAX_IDENTIFIER,
    canonicalize,
    decode_leaf,
    encode_identifier,
    parse_identifier,
)

from .layers import (
    Layer,
    build_layers,
    combined_hash,
    compute_layer_count,
    get_root,
    next_layer,
)

from .proofs import (
    PositionIndex,
    build_position_index,
    extract_proof,
    process_proof,
    proof_to_hex,
    verify_proof,
)


__all__ = [
    # Canonicalization
    "LEAF_WIDTH",
    "MAX_IDENTIFIER",
    "canonicalize",
    "decode_leaf",
    "encode_identifier",
    "parse_identifier",
    # Layers
    "Layer",
    "build_layers",
    "combined_hash",
    "compute_layer_count",
    "get_root",
    "next_layer",
    # Proofs
    "PositionIndex",
    "build_position_index",
    "extract_proof",
    "process_proof",
    "proof_to_hex",
    "verify_proof",
]
