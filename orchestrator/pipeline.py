"""
Commitment Pipeline

Composes canonicalization, layer construction and proof extraction into
one pure computation:

    identifiers -> leaf set -> layers -> root -> proof per leaf -> max length

Key features:
- No output side effects; stage diagnostics go to an optional trace logger
- Layers are built once and shared by every proof extraction
- Hash function selectable via RuntimeConfig (keccak256 by default)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from core.config.runtime import RuntimeConfig, get_default_config
from core.crypto.hashing import Hasher, hasher_name, to_hex
from core.merkle.canonical import canonicalize, decode_leaf
from core.merkle.layers import Layer, build_layers, get_root
from core.merkle.proofs import PositionIndex, build_position_index, extract_proof, proof_to_hex
from core.schemas.commitment import MerkleCommitment


logger = logging.getLogger(__name__)


# =============================================================================
# Tree Build
# =============================================================================

@dataclass(frozen=True)
class MerkleTreeBuild:
    """Intermediate structures of one tree build, read-only after construction."""
    leaves: list[bytes]
    position_index: PositionIndex
    layers: list[Layer]
    hasher: Hasher
    root: bytes = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", get_root(self.layers))

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    def proof(self, leaf: bytes) -> list[bytes]:
        """Extract the proof for a canonical leaf from the built layers."""
        return extract_proof(leaf, self.position_index, self.layers)


def _resolve_hasher(hasher: Optional[Hasher], config: Optional[RuntimeConfig]) -> Hasher:
    if hasher is not None:
        return hasher
    return (config or get_default_config()).merkle.hasher


def build_tree(
    identifiers: Iterable[int],
    *,
    hasher: Optional[Hasher] = None,
    config: Optional[RuntimeConfig] = None,
    trace: Optional[logging.Logger] = None,
) -> MerkleTreeBuild:
    """
    Canonicalize identifiers and build every layer of the tree.

    Raises:
        PreconditionViolation: If an identifier does not fit in 32 bytes
        EmptyInputError: If there are no identifiers
    """
    digest = _resolve_hasher(hasher, config)

    leaves = canonicalize(identifiers)
    if trace:
        trace.debug("elements: %s", [to_hex(leaf) for leaf in leaves])

    position_index = build_position_index(leaves)
    if trace:
        trace.debug(
            "position index: %s",
            {to_hex(leaf): index for leaf, index in position_index.items()},
        )

    layers = build_layers(leaves, digest)
    if trace:
        for depth, layer in enumerate(layers):
            trace.debug("layer %d: %s", depth, [to_hex(node) for node in layer])

    tree = MerkleTreeBuild(
        leaves=leaves,
        position_index=position_index,
        layers=layers,
        hasher=digest,
    )
    if trace:
        trace.debug("root: %s", to_hex(tree.root))

    return tree


def build_commitment(
    identifiers: Iterable[int],
    *,
    hasher: Optional[Hasher] = None,
    config: Optional[RuntimeConfig] = None,
    trace: Optional[logging.Logger] = None,
) -> MerkleCommitment:
    """
    Commit to a set of identifiers.

    Args:
        identifiers: Non-negative integers below 2**256, any order,
            duplicates allowed
        hasher: Digest function; overrides config when given
        config: Runtime configuration (default: get_default_config())
        trace: Optional logger receiving every intermediate stage at DEBUG

    Returns:
        MerkleCommitment with root, a proof per distinct identifier
        (keyed by its decimal string) and the maximum proof length

    Raises:
        PreconditionViolation: If an identifier does not fit in 32 bytes
        EmptyInputError: If there are no identifiers
    """
    tree = build_tree(identifiers, hasher=hasher, config=config, trace=trace)

    proofs: dict[str, list[str]] = {
        str(decode_leaf(leaf)): proof_to_hex(tree.proof(leaf))
        for leaf in tree.leaves
    }
    if trace:
        trace.debug("proofs: %s", proofs)

    max_proof_length = max(len(proof) for proof in proofs.values())
    if trace:
        trace.debug("max proof length: %d", max_proof_length)

    commitment = MerkleCommitment(
        root=to_hex(tree.root),
        proofs=proofs,
        max_proof_length=max_proof_length,
        leaf_count=tree.leaf_count,
        hash_function=hasher_name(tree.hasher),
    )

    logger.info(
        "Committed %d identifiers: root=%s max_proof_length=%d",
        tree.leaf_count,
        commitment.root,
        max_proof_length,
    )
    return commitment
