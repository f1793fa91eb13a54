"""
Tests for SHA-256 primitives.

Intermediate values for "abc" come from the FIPS 180-2 worked example.
"""

import random

import pytest

from crypto_explore.reference import sha256_reference
from crypto_explore.sha256_core import (
    H0,
    K,
    MASK32,
    add32,
    big_sigma0,
    ch,
    compress_round,
    digest_to_bits,
    digest_to_bytes,
    digest_to_hex,
    expand_schedule,
    maj,
    pad_message,
    parse_blocks,
    rotr,
    sha256,
    sha256_hex,
    shr,
)


ABC_DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class TestWordOps:
    """32-bit word helpers."""

    def test_rotr(self):
        assert rotr(0x00000001, 1) == 0x80000000
        assert rotr(0x12345678, 8) == 0x78123456
        assert rotr(0xFFFFFFFF, 13) == 0xFFFFFFFF

    def test_shr(self):
        assert shr(0x80000000, 31) == 1
        assert shr(0x0000000F, 2) == 0x3

    def test_add32_wraps(self):
        assert add32(0xFFFFFFFF, 1) == 0
        assert add32(0x80000000, 0x80000000, 5) == 5
        assert add32(*([MASK32] * 5)) == (5 * MASK32) & MASK32

    def test_ch(self):
        assert ch(0xFFFFFFFF, 0x12345678, 0x9ABCDEF0) == 0x12345678
        assert ch(0x00000000, 0x12345678, 0x9ABCDEF0) == 0x9ABCDEF0
        assert ch(0xFFFF0000, 0xAAAAAAAA, 0x55555555) == 0xAAAA5555

    def test_maj(self):
        assert maj(0xFF00FF00, 0xF0F0F0F0, 0x00000000) == 0xF000F000
        assert maj(0xFFFFFFFF, 0xFFFFFFFF, 0) == 0xFFFFFFFF

    def test_sigma_stays_32_bit(self):
        rng = random.Random(0)
        for _ in range(50):
            x = rng.getrandbits(32)
            assert 0 <= big_sigma0(x) <= MASK32


class TestConstants:
    def test_table_sizes(self):
        assert len(K) == 64
        assert len(H0) == 8

    def test_known_entries(self):
        assert K[0] == 0x428A2F98
        assert K[63] == 0xC67178F2
        assert H0[0] == 0x6A09E667
        assert H0[7] == 0x5BE0CD19


class TestPadding:
    """Message padding and block parsing."""

    @pytest.mark.parametrize("length,padded_len", [
        (0, 64), (3, 64), (55, 64), (56, 128), (63, 128), (64, 128), (119, 128), (120, 192),
    ])
    def test_padded_length(self, length, padded_len):
        padded = pad_message(bytes(length))
        assert len(padded) == padded_len
        assert len(padded) % 64 == 0

    def test_layout(self):
        padded = pad_message(b"abc")
        assert padded[:3] == b"abc"
        assert padded[3] == 0x80
        assert padded[4:56] == bytes(52)
        assert int.from_bytes(padded[56:], "big") == 24

    def test_length_field_counts_bits(self):
        data = bytes(200)
        padded = pad_message(data)
        assert int.from_bytes(padded[-8:], "big") == 1600

    def test_parse_blocks(self):
        blocks = parse_blocks(pad_message(b"abc"))
        assert len(blocks) == 1
        assert blocks[0][0] == 0x61626380
        assert blocks[0][1:15] == (0,) * 14
        assert blocks[0][15] == 0x00000018

    def test_parse_rejects_partial_block(self):
        with pytest.raises(ValueError, match="multiple of 64"):
            parse_blocks(bytes(63))


class TestSchedule:
    def test_abc_schedule(self):
        block = parse_blocks(pad_message(b"abc"))[0]
        w = expand_schedule(block)
        assert len(w) == 64
        assert w[:16] == block
        assert w[16] == 0x61626380
        assert w[17] == 0x000F0000

    def test_rejects_wrong_word_count(self):
        with pytest.raises(ValueError):
            expand_schedule([0] * 15)


class TestCompression:
    """Round function against the FIPS 180-2 "abc" example."""

    def test_first_round(self):
        w = expand_schedule(parse_blocks(pad_message(b"abc"))[0])
        regs = compress_round(H0, w[0], K[0])
        assert regs == (
            0x5D6AEBCD, 0x6A09E667, 0xBB67AE85, 0x3C6EF372,
            0xFA2A4622, 0x510E527F, 0x9B05688C, 0x1F83D9AB,
        )

    def test_last_round(self):
        w = expand_schedule(parse_blocks(pad_message(b"abc"))[0])
        regs = H0
        for t in range(64):
            regs = compress_round(regs, w[t], K[t])
        assert regs == (
            0x506E3058, 0xD39A2165, 0x04D24D6C, 0xB85E2CE9,
            0x5EF50F24, 0xFB121210, 0x948D25B6, 0x961F4894,
        )

    def test_registers_shift(self):
        regs = tuple(range(1, 9))
        out = compress_round(regs, 0, 0)
        assert out[1:4] == regs[0:3]
        assert out[5:8] == regs[4:7]


class TestDigest:
    """Whole-message hashing."""

    @pytest.mark.parametrize("message,expected", [
        (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (b"abc", ABC_DIGEST),
        (b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
         "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
        (b"Hello World", "a591a6d40bf420404a011733cfb7b190d62c65bf0bcda32b57b277d9ad9f146e"),
    ])
    def test_known_answers(self, message, expected):
        assert sha256_hex(message) == expected

    @pytest.mark.parametrize("seed", range(10))
    def test_random_messages_match_reference(self, seed):
        rng = random.Random(seed)
        length = rng.randint(0, 300)
        data = bytes(rng.randint(0, 255) for _ in range(length))
        assert sha256_hex(data) == sha256_reference(data)

    @pytest.mark.parametrize("length", [55, 56, 63, 64, 65, 127, 128])
    def test_block_boundaries(self, length):
        data = b"x" * length
        assert sha256_hex(data) == sha256_reference(data)

    def test_digest_renderings(self):
        regs = sha256(b"abc")
        assert digest_to_hex(regs) == ABC_DIGEST
        assert digest_to_bytes(regs).hex() == ABC_DIGEST
        bits = digest_to_bits(regs)
        assert len(bits) == 256
        assert set(bits) <= {"0", "1"}
        assert int(bits, 2) == int(ABC_DIGEST, 16)
