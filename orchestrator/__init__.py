"""
Commitment Pipeline (In-Process)

Public API:
- build_commitment: identifiers -> MerkleCommitment (root, proofs, max length)
- build_tree: identifiers -> MerkleTreeBuild (leaves, index, layers, root)
- MerkleTreeBuild: Intermediate structures of one build
"""

from orchestrator.pipeline import (
    MerkleTreeBuild,
    build_commitment,
    build_tree,
)

__all__ = [
    "MerkleTreeBuild",
    "build_commitment",
    "build_tree",
]
