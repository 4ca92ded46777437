"""
Leaf Canonicalization Unit Tests
Tests for core/merkle/canonical.py
"""
import pytest

from core.merkle.canonical import (
    LEAF_WIDTH,
    MAX_IDENTIFIER,
    canonicalize,
    decode_leaf,
    encode_identifier,
    parse_identifier,
)
from core.schemas.errors import EmptyInputError, ErrorCodes, PreconditionViolation


class TestEncodeIdentifier:
    """Tests for fixed-width big-endian encoding."""

    def test_small_value_left_padded(self):
        leaf = encode_identifier(5)

        assert len(leaf) == LEAF_WIDTH
        assert leaf == b"\x00" * 31 + b"\x05"

    def test_zero(self):
        assert encode_identifier(0) == b"\x00" * 32

    def test_max_value(self):
        assert encode_identifier(MAX_IDENTIFIER) == b"\xff" * 32

    def test_equal_values_identical_leaves(self):
        assert encode_identifier(2**200 + 7) == encode_identifier(2**200 + 7)

    def test_too_large_fails_fast(self):
        """Values wider than 32 bytes are rejected, never truncated."""
        with pytest.raises(PreconditionViolation) as exc_info:
            encode_identifier(2**256)

        assert exc_info.value.code == ErrorCodes.PRECONDITION_VIOLATION
        assert exc_info.value.details["bit_length"] == 257

    def test_negative_rejected(self):
        with pytest.raises(PreconditionViolation, match="non-negative"):
            encode_identifier(-1)

    def test_non_integer_rejected(self):
        with pytest.raises(PreconditionViolation):
            encode_identifier("5")  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(PreconditionViolation):
            encode_identifier(True)


class TestDecodeLeaf:
    """Tests for decode_leaf()."""

    def test_decode_inverts_encode(self):
        for value in (0, 1, 255, 256, 2**128, MAX_IDENTIFIER):
            assert decode_leaf(encode_identifier(value)) == value

    def test_wrong_width_rejected(self):
        with pytest.raises(PreconditionViolation, match="32 bytes"):
            decode_leaf(b"\x01")


class TestParseIdentifier:
    """Tests for parse_identifier()."""

    def test_decimal(self):
        assert parse_identifier("42") == 42

    def test_hex(self):
        assert parse_identifier("0x2a") == 42
        assert parse_identifier("0X2A") == 42

    def test_whitespace_stripped(self):
        assert parse_identifier("  7\n") == 7

    @pytest.mark.parametrize("text", ["", "abc", "-1", "1.5", "0x", "0xzz"])
    def test_invalid(self, text):
        with pytest.raises(PreconditionViolation):
            parse_identifier(text)

    def test_out_of_range(self):
        with pytest.raises(PreconditionViolation):
            parse_identifier(str(2**256))


class TestCanonicalize:
    """Tests for canonicalize()."""

    def test_sorted_ascending(self):
        leaves = canonicalize([6, 3, 1, 2])

        assert [decode_leaf(leaf) for leaf in leaves] == [1, 2, 3, 6]

    def test_duplicates_removed(self, sample_ids):
        leaves = canonicalize(sample_ids)

        assert [decode_leaf(leaf) for leaf in leaves] == [1, 2, 3, 6]
        assert len(set(leaves)) == len(leaves)

    def test_numeric_not_lexicographic_decimal_order(self):
        """Fixed-width bytes order numerically: 10 sorts after 9."""
        leaves = canonicalize([10, 9, 256, 255])

        assert [decode_leaf(leaf) for leaf in leaves] == [9, 10, 255, 256]

    def test_input_order_independent(self):
        assert canonicalize([3, 1, 2]) == canonicalize([2, 3, 1])

    def test_accepts_generator(self):
        assert len(canonicalize(i for i in range(5))) == 5

    def test_empty_raises(self):
        with pytest.raises(EmptyInputError) as exc_info:
            canonicalize([])

        assert exc_info.value.code == ErrorCodes.EMPTY_INPUT
        assert exc_info.value.retryable is False

    def test_oversized_element_raises(self):
        with pytest.raises(PreconditionViolation):
            canonicalize([1, 2**256 + 1])
