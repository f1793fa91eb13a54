"""
Tests for state conversion, input parsing and formatting helpers.
"""

import pytest

from crypto_explore.utils import (
    bytes_to_state,
    count_changed,
    diff_mask,
    format_diff_grid,
    format_state_grid,
    format_words,
    freeze_state,
    parse_key_hex,
    state_to_bytes,
    text_to_block,
    to_message_bytes,
)


class TestStateLayout:
    def test_column_major(self):
        state = bytes_to_state(bytes(range(16)))
        assert state[0] == [0, 4, 8, 12]
        assert state[1] == [1, 5, 9, 13]
        assert state[3][3] == 15
        assert state_to_bytes(state) == bytes(range(16))

    def test_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            bytes_to_state(bytes(15))

    def test_freeze(self):
        frozen = freeze_state(bytes_to_state(bytes(range(16))))
        assert isinstance(frozen, tuple)
        assert all(isinstance(row, tuple) for row in frozen)
        assert state_to_bytes(frozen) == bytes(range(16))

    def test_diff_mask(self):
        a = bytes_to_state(bytes(16))
        b = bytes_to_state(bytes([1] + [0] * 14 + [1]))
        mask = diff_mask(a, b)
        assert mask[0][0] and mask[3][3]
        assert count_changed(mask) == 2


class TestParseKey:
    def test_valid(self):
        key = parse_key_hex("2b7e151628aed2a6abf7158809cf4f3c")
        assert key.hex() == "2b7e151628aed2a6abf7158809cf4f3c"

    def test_whitespace_and_case(self):
        key = parse_key_hex(" 2B7E1516 28AED2A6\nABF71588 09CF4F3C ")
        assert key.hex() == "2b7e151628aed2a6abf7158809cf4f3c"

    @pytest.mark.parametrize("text", ["", "2b7e", "2b7e151628aed2a6abf7158809cf4f3c00"])
    def test_wrong_length(self, text):
        with pytest.raises(ValueError, match="32 hex chars"):
            parse_key_hex(text)

    def test_non_hex(self):
        with pytest.raises(ValueError, match="non-hex"):
            parse_key_hex("zz7e151628aed2a6abf7158809cf4f3c")


class TestMessages:
    def test_utf8(self):
        assert to_message_bytes("abc") == b"abc"
        assert to_message_bytes("€") == b"\xe2\x82\xac"
        assert to_message_bytes(b"\x00\xff") == b"\x00\xff"

    def test_block_padding(self):
        assert text_to_block("Hello World!") == b"Hello World!" + bytes(4)
        assert text_to_block("") == bytes(16)

    def test_block_truncation(self):
        assert text_to_block("A" * 40) == b"A" * 16


class TestFormatting:
    def test_grid(self):
        grid = format_state_grid(bytes_to_state(bytes(range(16))))
        assert grid.split("\n")[0] == "  00 04 08 0c"

    def test_diff_grid_marks(self):
        state = bytes_to_state(bytes(range(16)))
        mask = diff_mask(state, bytes_to_state(bytes([0xFF] + list(range(1, 16)))))
        first = format_diff_grid(state, mask).split("\n")[0]
        assert first.startswith("  00*")
        assert "04 " in first

    def test_words(self):
        assert format_words([1, 0xDEADBEEF]) == "00000001 deadbeef"
