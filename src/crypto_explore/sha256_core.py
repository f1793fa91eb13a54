"""
SHA-256 primitives: padding, block parsing, message schedule and compression.

All word arithmetic is on Python ints masked to 32 bits, so wraparound is
exact regardless of how large intermediate sums get.
"""

from __future__ import annotations

import struct
from typing import Sequence

MASK32 = 0xFFFFFFFF
BLOCK_BYTES = 64
ROUNDS = 64

# Round constants: first 32 bits of the fractional parts of the cube
# roots of the first 64 primes.
K: tuple[int, ...] = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5, 0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3, 0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc, 0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7, 0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13, 0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3, 0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5, 0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208, 0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)

# Initial hash value: first 32 bits of the fractional parts of the
# square roots of the first 8 primes.
H0: tuple[int, ...] = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)

Registers = tuple[int, int, int, int, int, int, int, int]
Block = tuple[int, ...]


# ------------------------------------------------------------------
# 32-bit word operations
# ------------------------------------------------------------------

def rotr(x: int, n: int) -> int:
    """Rotate a 32-bit word right by n bits."""
    return ((x >> n) | (x << (32 - n))) & MASK32


def shr(x: int, n: int) -> int:
    return (x & MASK32) >> n


def add32(*values: int) -> int:
    """Sum any number of words modulo 2^32."""
    total = 0
    for v in values:
        total = (total + v) & MASK32
    return total


def ch(x: int, y: int, z: int) -> int:
    """Choose: bits of y where x is 1, bits of z where x is 0."""
    return ((x & y) ^ (~x & z)) & MASK32


def maj(x: int, y: int, z: int) -> int:
    """Majority: per bit, the value shared by at least two inputs."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma0(x: int) -> int:
    return rotr(x, 2) ^ rotr(x, 13) ^ rotr(x, 22)


def big_sigma1(x: int) -> int:
    return rotr(x, 6) ^ rotr(x, 11) ^ rotr(x, 25)


def small_sigma0(x: int) -> int:
    return rotr(x, 7) ^ rotr(x, 18) ^ shr(x, 3)


def small_sigma1(x: int) -> int:
    return rotr(x, 17) ^ rotr(x, 19) ^ shr(x, 10)


# ------------------------------------------------------------------
# Padding and parsing
# ------------------------------------------------------------------

def pad_message(data: bytes) -> bytes:
    """
    Pad a message to a whole number of 64-byte blocks.

    Layout: message || 0x80 || 0x00 * k || bit length (8 bytes, big-endian)
    with k the smallest value making the length congruent to 56 mod 64
    before the length field.

    Args:
        data: Unpadded message bytes

    Returns:
        Padded bytes; length is a positive multiple of 64
    """
    bit_length = (len(data) * 8) & 0xFFFFFFFFFFFFFFFF
    padded = bytearray(data)
    padded.append(0x80)
    while len(padded) % BLOCK_BYTES != 56:
        padded.append(0x00)
    padded += struct.pack(">Q", bit_length)
    return bytes(padded)


def parse_blocks(padded: bytes) -> tuple[Block, ...]:
    """
    Split padded bytes into 512-bit blocks of sixteen big-endian words.
    """
    if len(padded) % BLOCK_BYTES != 0:
        raise ValueError(f"Padded length must be a multiple of 64, got {len(padded)}")
    return tuple(
        struct.unpack(">16I", padded[i:i + BLOCK_BYTES])
        for i in range(0, len(padded), BLOCK_BYTES)
    )


# ------------------------------------------------------------------
# Schedule and compression
# ------------------------------------------------------------------

def expand_schedule(block: Sequence[int]) -> tuple[int, ...]:
    """
    Expand 16 block words into the 64-word message schedule.
    """
    if len(block) != 16:
        raise ValueError(f"Block must be 16 words, got {len(block)}")
    w = list(block)
    for t in range(16, ROUNDS):
        w.append(add32(small_sigma1(w[t - 2]), w[t - 7], small_sigma0(w[t - 15]), w[t - 16]))
    return tuple(w)


def compress_round(registers: Sequence[int], w: int, k: int) -> Registers:
    """
    One compression round over the working registers a..h.

    Args:
        registers: Current (a, b, c, d, e, f, g, h)
        w: Schedule word for this round
        k: Round constant for this round

    Returns:
        New (a, b, c, d, e, f, g, h)
    """
    a, b, c, d, e, f, g, h = registers
    t1 = add32(h, big_sigma1(e), ch(e, f, g), k, w)
    t2 = add32(big_sigma0(a), maj(a, b, c))
    return (add32(t1, t2), a, b, c, add32(d, t1), e, f, g)


def fold_registers(hash_registers: Sequence[int], working: Sequence[int]) -> Registers:
    """Add the final working registers into the running hash."""
    return tuple(add32(h, v) for h, v in zip(hash_registers, working))


def compress_block(hash_registers: Sequence[int], block: Sequence[int]) -> Registers:
    """Run the schedule and all 64 rounds for one block."""
    schedule = expand_schedule(block)
    working = tuple(hash_registers)
    for t in range(ROUNDS):
        working = compress_round(working, schedule[t], K[t])
    return fold_registers(hash_registers, working)


# ------------------------------------------------------------------
# Whole-message helpers
# ------------------------------------------------------------------

def sha256(data: bytes) -> Registers:
    """Hash a message in one call; returns the eight final registers."""
    hash_registers: Registers = H0
    for block in parse_blocks(pad_message(data)):
        hash_registers = compress_block(hash_registers, block)
    return hash_registers


def digest_to_bytes(registers: Sequence[int]) -> bytes:
    return struct.pack(">8I", *registers)


def digest_to_hex(registers: Sequence[int]) -> str:
    """Render the eight registers as 64 hex characters."""
    return "".join(f"{r:08x}" for r in registers)


def digest_to_bits(registers: Sequence[int]) -> str:
    """Render the eight registers as a 256-character bit string."""
    return "".join(f"{r:032b}" for r in registers)


def sha256_hex(data: bytes) -> str:
    return digest_to_hex(sha256(data))
