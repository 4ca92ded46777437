"""
Commitment Pipeline Integration Tests
Tests for orchestrator/pipeline.py

End-to-end properties of build_commitment():
- Determinism under reordering
- Duplicate invariance
- Single-element tree
- Proof verification round-trip through the hex output
- Odd-layer carry rule
- Max proof length
- Empty input failure
"""
import logging
import random

import pytest

from core.config import MerkleConfig, RuntimeConfig, set_default_config
from core.crypto.hashing import from_hex, keccak256, sha256, to_hex
from core.merkle.canonical import encode_identifier
from core.merkle.layers import combined_hash
from core.merkle.proofs import verify_proof
from core.schemas.errors import EmptyInputError, NotFoundError, PreconditionViolation
from orchestrator import MerkleTreeBuild, build_commitment, build_tree


def _verify(commitment, identifier, hasher=keccak256):
    proof = [from_hex(node) for node in commitment.proof_for(identifier)]
    return verify_proof(encode_identifier(identifier), proof, from_hex(commitment.root), hasher)


class TestDeterminism:
    """Root is independent of input order and duplicates."""

    def test_reordering_same_root(self):
        ids = [17, 3, 99, 2**255, 0, 42, 7]
        shuffled = list(ids)
        random.Random(1234).shuffle(shuffled)

        assert build_commitment(ids).root == build_commitment(shuffled).root

    def test_reordering_same_proofs(self):
        ids = [5, 9, 1, 12, 30]

        assert build_commitment(ids).proofs == build_commitment(list(reversed(ids))).proofs

    def test_duplicates_do_not_change_output(self):
        ids = [1, 2, 3, 6]
        with_dupes = [6, 1, 1, 2, 3, 3, 6, 6]

        plain = build_commitment(ids)
        duped = build_commitment(with_dupes)

        assert plain.root == duped.root
        assert plain.proofs == duped.proofs
        assert plain.max_proof_length == duped.max_proof_length


class TestSingleElement:
    """Input [5]."""

    def test_root_is_leaf_hash(self):
        commitment = build_commitment([5])

        assert commitment.root == to_hex(keccak256(encode_identifier(5)))
        assert commitment.proofs == {"5": []}
        assert commitment.max_proof_length == 0
        assert commitment.leaf_count == 1


class TestRoundTrip:
    """Every identifier's hex proof recomputes the hex root."""

    @pytest.mark.parametrize("n", [2, 3, 4, 5, 11, 32, 33])
    def test_all_proofs_verify(self, n):
        ids = [i * 7919 for i in range(1, n + 1)]
        commitment = build_commitment(ids)

        assert set(commitment.proofs) == {str(i) for i in ids}
        for identifier in ids:
            assert _verify(commitment, identifier)

    def test_large_identifiers(self):
        ids = [2**256 - 1, 2**255, 2**128 + 3, 0]
        commitment = build_commitment(ids)

        for identifier in ids:
            assert str(identifier) in commitment.proofs
            assert _verify(commitment, identifier)


class TestOddLayerCarry:
    """Input [1, 2, 3]."""

    def test_middle_layer_has_two_nodes(self, odd_ids):
        tree = build_tree(odd_ids)
        h1, h2, h3 = (keccak256(encode_identifier(v)) for v in odd_ids)

        assert len(tree.layers) == 3
        assert tree.layers[1] == [combined_hash(h1, h2), h3]

    def test_carried_identifier_proof_omits_sibling(self, odd_ids):
        commitment = build_commitment(odd_ids)

        assert len(commitment.proofs["3"]) == 1
        assert len(commitment.proofs["1"]) == 2
        assert len(commitment.proofs["2"]) == 2
        assert commitment.max_proof_length == 2


class TestMaxProofLength:
    """Input [1, 1, 2, 3, 6] dedups to four leaves."""

    def test_four_leaves(self, sample_ids):
        commitment = build_commitment(sample_ids)

        assert commitment.leaf_count == 4
        assert commitment.max_proof_length == 2
        assert sorted(commitment.proofs, key=int) == ["1", "2", "3", "6"]
        assert all(len(p) <= 2 for p in commitment.proofs.values())

    def test_max_is_longest_proof(self):
        commitment = build_commitment(range(1, 6))

        assert commitment.max_proof_length == 3
        assert len(commitment.proofs["5"]) == 1


class TestFailures:
    """Error propagation."""

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            build_commitment([])

    def test_oversized_identifier(self):
        with pytest.raises(PreconditionViolation):
            build_commitment([1, 2**256])

    def test_tree_proof_for_non_member(self):
        tree = build_tree([1, 2, 3])

        with pytest.raises(NotFoundError):
            tree.proof(encode_identifier(4))


class TestHashSelection:
    """Hash function comes from the explicit argument, then config."""

    def test_explicit_hasher(self):
        commitment = build_commitment([5], hasher=sha256)

        assert commitment.root == to_hex(sha256(encode_identifier(5)))
        assert commitment.hash_function == "sha256"

    def test_config_hasher(self):
        config = RuntimeConfig(merkle=MerkleConfig(hash_function="sha256"))
        commitment = build_commitment([1, 2, 3], config=config)

        assert commitment.hash_function == "sha256"
        for identifier in (1, 2, 3):
            assert _verify(commitment, identifier, sha256)

    def test_default_config_hasher(self):
        set_default_config(RuntimeConfig(merkle=MerkleConfig(hash_function="sha256")))

        assert build_commitment([5]).hash_function == "sha256"

    def test_default_is_keccak(self):
        assert build_commitment([5]).hash_function == "keccak256"


class TestTrace:
    """Stage diagnostics go only to the trace logger."""

    def test_trace_logs_stages(self, caplog):
        trace = logging.getLogger("test.trace")
        with caplog.at_level(logging.DEBUG, logger="test.trace"):
            build_commitment([1, 2, 3], trace=trace)

        messages = [r.getMessage() for r in caplog.records if r.name == "test.trace"]
        assert any(m.startswith("elements:") for m in messages)
        assert any(m.startswith("layer 0:") for m in messages)
        assert any(m.startswith("root:") for m in messages)
        assert any(m.startswith("max proof length: 2") for m in messages)

    def test_no_trace_no_debug_output(self, caplog):
        with caplog.at_level(logging.DEBUG):
            build_commitment([1, 2, 3])

        ours = [r for r in caplog.records if r.name.startswith(("orchestrator", "core"))]
        assert not [r for r in ours if r.levelno == logging.DEBUG]
        assert any("Committed 3 identifiers" in r.getMessage() for r in ours)


class TestTreeBuild:
    """Tests for MerkleTreeBuild."""

    def test_fields(self):
        tree = build_tree([6, 1, 2, 3])

        assert isinstance(tree, MerkleTreeBuild)
        assert tree.leaf_count == 4
        assert tree.root == tree.layers[-1][0]
        assert tree.position_index[encode_identifier(6)] == 3
