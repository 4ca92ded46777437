"""
Merkle Layer Construction
Builds every layer of a sorted-pair Merkle tree, from leaf hashes to root.

Commitment Rules (Hard Contracts):
1. Layer 0: hasher(leaf) for each leaf, in leaf-set order
2. Parent hashing: hasher(min(a, b) + max(a, b)), pairs sorted byte-wise
3. Odd node: the last node of an odd-length layer is carried up unchanged
   (never duplicated, never re-hashed)
4. Termination: the first layer of length 1 holds the root
5. Empty: zero leaves raises EmptyTreeError

Because pairs are sorted before hashing, a verifier does not need to know
whether a sibling sat on the left or the right.
"""
from __future__ import annotations

from typing import Optional, Sequence

from core.crypto.hashing import Hasher, keccak256
from core.schemas.errors import EmptyTreeError


Layer = list[bytes]


def combined_hash(
    first: Optional[bytes],
    second: Optional[bytes],
    hasher: Hasher = keccak256,
) -> Optional[bytes]:
    """
    Compute the parent of two sibling nodes.

    If one side is missing the other is returned as-is.

    Args:
        first: Left node, or None
        second: Right node, or None
        hasher: Digest function

    Returns:
        hasher(sorted concatenation), or the present side unchanged
    """
    if first is None:
        return second
    if second is None:
        return first

    low, high = sorted((first, second))
    return hasher(low + high)


def next_layer(layer: Sequence[bytes], hasher: Hasher = keccak256) -> Layer:
    """
    Pair up adjacent nodes and hash each pair into the layer above.

    Example: [a, b, c] -> [combined(a, b), c]
    """
    parents: Layer = []
    for i in range(0, len(layer), 2):
        sibling = layer[i + 1] if i + 1 < len(layer) else None
        parents.append(combined_hash(layer[i], sibling, hasher))
    return parents


def build_layers(leaves: Sequence[bytes], hasher: Hasher = keccak256) -> list[Layer]:
    """
    Build all tree layers from the canonical leaf set.

    Args:
        leaves: Distinct leaves in canonical order (order defines pairing)
        hasher: Digest function applied to leaves and pairs

    Returns:
        Layers from layer 0 (hashed leaves) to the single-node root layer;
        ceil(log2(n)) + 1 layers for n leaves

    Raises:
        EmptyTreeError: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyTreeError()

    layers: list[Layer] = [[hasher(leaf) for leaf in leaves]]

    while len(layers[-1]) > 1:
        layers.append(next_layer(layers[-1], hasher))

    return layers


def get_root(layers: Sequence[Sequence[bytes]]) -> bytes:
    """
    Return the root node of a built tree.

    Raises:
        EmptyTreeError: If there are no layers
    """
    if not layers or not layers[-1]:
        raise EmptyTreeError()
    return layers[-1][0]


def compute_layer_count(num_leaves: int) -> int:
    """
    Number of layers for a tree with the given leaf count.

    Carrying odd nodes forward gives the same count as ceil(log2(n)) + 1.
    Returns 0 for an empty tree.
    """
    if num_leaves <= 0:
        return 0
    return (num_leaves - 1).bit_length() + 1


__all__ = [
    "Layer",
    "combined_hash",
    "next_layer",
    "build_layers",
    "get_root",
    "compute_layer_count",
]
