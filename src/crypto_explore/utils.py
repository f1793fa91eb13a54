"""
Utility functions for byte/state conversions, input parsing and hex formatting.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]
"""

from __future__ import annotations

import string
from typing import Sequence

# Read-only 4x4 matrix as stored in step snapshots
FrozenState = tuple[tuple[int, ...], ...]
FrozenMask = tuple[tuple[bool, ...], ...]

_HEX_DIGITS = set(string.hexdigits)


def bytes_to_state(data: bytes) -> list[list[int]]:
    """
    Convert 16 bytes to 4x4 AES state (column-major).

    Args:
        data: 16 bytes of input

    Returns:
        4x4 list of integers (0-255)
    """
    if len(data) != 16:
        raise ValueError(f"Expected 16 bytes, got {len(data)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        for row in range(4):
            state[row][col] = data[col * 4 + row]
    return state


def state_to_bytes(state: Sequence[Sequence[int]]) -> bytes:
    """
    Convert 4x4 AES state to 16 bytes (column-major).

    Args:
        state: 4x4 matrix of integers

    Returns:
        16 bytes
    """
    result = []
    for col in range(4):
        for row in range(4):
            result.append(state[row][col])
    return bytes(result)


def freeze_state(state: Sequence[Sequence[int]]) -> FrozenState:
    """Copy a 4x4 state into an immutable tuple-of-tuples."""
    return tuple(tuple(state[row][col] for col in range(4)) for row in range(4))


def diff_mask(
    before: Sequence[Sequence[int]],
    after: Sequence[Sequence[int]],
) -> FrozenMask:
    """Per-cell flags marking which bytes differ between two states."""
    return tuple(
        tuple(before[row][col] != after[row][col] for col in range(4))
        for row in range(4)
    )


def count_changed(mask: Sequence[Sequence[bool]]) -> int:
    """Number of set cells in a diff mask."""
    return sum(1 for row in mask for flag in row if flag)


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string (32 chars for 16 bytes)

    Returns:
        bytes
    """
    return bytes.fromhex(hex_str)


def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to hex string.

    Args:
        data: bytes

    Returns:
        Lowercase hex string
    """
    return data.hex()


def parse_key_hex(key_hex: str) -> bytes:
    """
    Parse an AES-128 key given as 32 hexadecimal characters.

    Whitespace is ignored. Any other deviation (wrong length, non-hex
    characters) is rejected instead of being truncated or zero-filled.

    Args:
        key_hex: Key text, e.g. "2b7e1516 28aed2a6 abf71588 09cf4f3c"

    Returns:
        16-byte key

    Raises:
        ValueError: If the key is not exactly 32 hex characters
    """
    clean = "".join(key_hex.split())
    bad = sorted({ch for ch in clean if ch not in _HEX_DIGITS})
    if bad:
        raise ValueError(f"Key contains non-hex characters: {''.join(bad)!r}")
    if len(clean) != 32:
        raise ValueError(f"Key must be 32 hex chars (16 bytes), got {len(clean)} chars")
    return bytes.fromhex(clean)


def to_message_bytes(message: str | bytes) -> bytes:
    """Encode a text message as UTF-8; bytes pass through unchanged."""
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


def text_to_block(text: str | bytes) -> bytes:
    """
    Turn a plaintext message into exactly one 16-byte AES block.

    Longer input is truncated, shorter input is zero-padded.
    """
    data = to_message_bytes(text)[:16]
    return data + bytes(16 - len(data))


def state_to_hex(state: Sequence[Sequence[int]]) -> str:
    """
    Convert state to hex string (via bytes).
    """
    return bytes_to_hex(state_to_bytes(state))


def format_state_grid(state: Sequence[Sequence[int]]) -> str:
    """
    Format state as a readable 4x4 grid.

    Returns multi-line string like:
      2b 28 ab 09
      7e ae f7 cf
      15 d2 15 4f
      16 a6 88 3c
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[row][col]:02x}" for col in range(4)]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def format_diff_grid(
    state: Sequence[Sequence[int]],
    mask: Sequence[Sequence[bool]],
) -> str:
    """Format state as a 4x4 grid with changed bytes marked by '*'."""
    lines = []
    for row in range(4):
        cells = []
        for col in range(4):
            mark = "*" if mask[row][col] else " "
            cells.append(f"{state[row][col]:02x}{mark}")
        lines.append("  " + " ".join(cells))
    return "\n".join(lines)


def format_state_line(state: Sequence[Sequence[int]]) -> str:
    """
    Format state as single-line hex string.
    """
    return state_to_hex(state)


def format_words(words: Sequence[int]) -> str:
    """Format 32-bit words as space-separated 8-char hex."""
    return " ".join(f"{w:08x}" for w in words)
