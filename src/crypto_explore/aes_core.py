"""
AES-128 primitives: tables, key schedule and the four round transforms.

Every transform takes a 4x4 column-major state and returns a NEW state;
inputs are never modified, so a caller can keep the pre-transform matrix
for diffing without copying it first.
"""

from __future__ import annotations

from typing import Sequence

from .gf import gf_mul
from .utils import bytes_to_state, state_to_bytes

__all__ = [
    "SBOX",
    "INV_SBOX",
    "RCON",
    "NUM_ROUNDS",
    "MIX_MATRIX",
    "INV_MIX_MATRIX",
    "rot_word",
    "sub_word",
    "key_expansion",
    "sub_bytes",
    "shift_rows",
    "mix_columns",
    "add_round_key",
    "inv_sub_bytes",
    "inv_shift_rows",
    "inv_mix_columns",
    "encrypt_block",
    "decrypt_block",
]

State = Sequence[Sequence[int]]

NUM_ROUNDS = 10

SBOX: tuple[int, ...] = (
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
)


def _invert_table(table: Sequence[int]) -> tuple[int, ...]:
    inverse = [0] * 256
    for i, v in enumerate(table):
        inverse[v] = i
    return tuple(inverse)


INV_SBOX: tuple[int, ...] = _invert_table(SBOX)

# Round constants for AES-128 (x^(i-1) in GF(2^8), i = 1..10)
RCON: tuple[int, ...] = (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1b, 0x36)

MIX_MATRIX = (
    (2, 3, 1, 1),
    (1, 2, 3, 1),
    (1, 1, 2, 3),
    (3, 1, 1, 2),
)

INV_MIX_MATRIX = (
    (14, 11, 13, 9),
    (9, 14, 11, 13),
    (13, 9, 14, 11),
    (11, 13, 9, 14),
)


# ------------------------------------------------------------------
# Key schedule
# ------------------------------------------------------------------

def rot_word(word: Sequence[int]) -> list[int]:
    """Rotate a 4-byte word left by one byte."""
    return [word[1], word[2], word[3], word[0]]


def sub_word(word: Sequence[int]) -> list[int]:
    """Apply the S-box to each byte of a 4-byte word."""
    return [SBOX[b] for b in word]


def key_expansion(key: bytes) -> list[list[list[int]]]:
    """
    Expand a 16-byte key into 11 round keys.

    Args:
        key: 16-byte AES-128 key

    Returns:
        List of 11 round keys, each a 4x4 state (column-major, same
        layout as the cipher state)
    """
    if len(key) != 16:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")

    words: list[list[int]] = [list(key[4 * i:4 * i + 4]) for i in range(4)]

    for i in range(4, 4 * (NUM_ROUNDS + 1)):
        temp = list(words[i - 1])
        if i % 4 == 0:
            temp = sub_word(rot_word(temp))
            temp[0] ^= RCON[i // 4 - 1]
        words.append([words[i - 4][j] ^ temp[j] for j in range(4)])

    round_keys = []
    for r in range(NUM_ROUNDS + 1):
        rk = [[0] * 4 for _ in range(4)]
        for col in range(4):
            for row in range(4):
                rk[row][col] = words[4 * r + col][row]
        round_keys.append(rk)
    return round_keys


# ------------------------------------------------------------------
# Round transforms
# ------------------------------------------------------------------

def sub_bytes(state: State) -> list[list[int]]:
    """Replace every byte with its S-box image."""
    return [[SBOX[state[row][col]] for col in range(4)] for row in range(4)]


def shift_rows(state: State) -> list[list[int]]:
    """Rotate row r left by r positions."""
    return [[state[row][(col + row) % 4] for col in range(4)] for row in range(4)]


def _mix_with(state: State, matrix: Sequence[Sequence[int]]) -> list[list[int]]:
    result = [[0] * 4 for _ in range(4)]
    for col in range(4):
        column = [state[row][col] for row in range(4)]
        for row in range(4):
            acc = 0
            for k in range(4):
                acc ^= gf_mul(matrix[row][k], column[k])
            result[row][col] = acc
    return result


def mix_columns(state: State) -> list[list[int]]:
    """Multiply each column by the fixed MixColumns matrix in GF(2^8)."""
    return _mix_with(state, MIX_MATRIX)


def add_round_key(state: State, round_key: State) -> list[list[int]]:
    """XOR every byte with the matching round-key byte."""
    return [[state[row][col] ^ round_key[row][col] for col in range(4)] for row in range(4)]


def inv_sub_bytes(state: State) -> list[list[int]]:
    """Replace every byte with its inverse S-box image."""
    return [[INV_SBOX[state[row][col]] for col in range(4)] for row in range(4)]


def inv_shift_rows(state: State) -> list[list[int]]:
    """Rotate row r right by r positions."""
    return [[state[row][(col - row) % 4] for col in range(4)] for row in range(4)]


def inv_mix_columns(state: State) -> list[list[int]]:
    """Multiply each column by the inverse MixColumns matrix."""
    return _mix_with(state, INV_MIX_MATRIX)


# ------------------------------------------------------------------
# Whole-block helpers
# ------------------------------------------------------------------

def encrypt_block(key: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt one 16-byte block in a single call.

    Args:
        key: 16-byte AES key
        plaintext: 16-byte plaintext

    Returns:
        16-byte ciphertext
    """
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    round_keys = key_expansion(key)
    state = add_round_key(bytes_to_state(plaintext), round_keys[0])
    for round_num in range(1, NUM_ROUNDS + 1):
        state = sub_bytes(state)
        state = shift_rows(state)
        if round_num != NUM_ROUNDS:
            state = mix_columns(state)
        state = add_round_key(state, round_keys[round_num])
    return state_to_bytes(state)


def decrypt_block(key: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt one 16-byte block with the standard inverse cipher.

    Round keys are applied in reverse order.
    """
    if len(ciphertext) != 16:
        raise ValueError(f"Ciphertext must be 16 bytes, got {len(ciphertext)}")

    round_keys = key_expansion(key)
    state = add_round_key(bytes_to_state(ciphertext), round_keys[NUM_ROUNDS])
    for round_num in range(NUM_ROUNDS - 1, -1, -1):
        state = inv_shift_rows(state)
        state = inv_sub_bytes(state)
        state = add_round_key(state, round_keys[round_num])
        if round_num != 0:
            state = inv_mix_columns(state)
    return state_to_bytes(state)
