"""
Avalanche analysis: how many digest bits flip when the input changes.

Purely observational; nothing here feeds back into the hash itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from .sha256_core import digest_to_bits, digest_to_hex, sha256
from .utils import to_message_bytes

DIGEST_BITS = 256


def hamming_distance(bits_a: str, bits_b: str) -> int:
    """
    Count positions at which two equal-length bit strings differ.

    Raises:
        ValueError: If the lengths differ
    """
    if len(bits_a) != len(bits_b):
        raise ValueError(f"Length mismatch: {len(bits_a)} vs {len(bits_b)}")
    return sum(1 for x, y in zip(bits_a, bits_b) if x != y)


def bit_diff_mask(bits_a: str, bits_b: str) -> tuple[bool, ...]:
    """Per-position flags marking the differing bits."""
    if len(bits_a) != len(bits_b):
        raise ValueError(f"Length mismatch: {len(bits_a)} vs {len(bits_b)}")
    return tuple(x != y for x, y in zip(bits_a, bits_b))


def flip_bit(data: bytes, bit_index: int) -> bytes:
    """
    Return a copy of ``data`` with one bit inverted.

    Bit 0 is the most significant bit of byte 0.
    """
    if not 0 <= bit_index < len(data) * 8:
        raise ValueError(f"Bit index must be 0..{len(data) * 8 - 1}, got {bit_index}")
    out = bytearray(data)
    out[bit_index // 8] ^= 0x80 >> (bit_index % 8)
    return bytes(out)


@dataclass(frozen=True)
class AvalancheComparison:
    """Digest comparison of two messages."""

    hex_a: str
    hex_b: str
    bits_a: str
    bits_b: str
    distance: int

    @property
    def percent(self) -> float:
        return 100.0 * self.distance / len(self.bits_a)

    @property
    def diff_mask(self) -> tuple[bool, ...]:
        return bit_diff_mask(self.bits_a, self.bits_b)


def compare_digests(message_a: str | bytes, message_b: str | bytes) -> AvalancheComparison:
    """Hash two messages and measure how far apart their digests are."""
    digest_a = sha256(to_message_bytes(message_a))
    digest_b = sha256(to_message_bytes(message_b))
    bits_a = digest_to_bits(digest_a)
    bits_b = digest_to_bits(digest_b)
    return AvalancheComparison(
        hex_a=digest_to_hex(digest_a),
        hex_b=digest_to_hex(digest_b),
        bits_a=bits_a,
        bits_b=bits_b,
        distance=hamming_distance(bits_a, bits_b),
    )


def format_bit_map(mask: tuple[bool, ...], width: int = 64) -> str:
    """Render a diff mask as rows of 'X' (flipped) and '.' (kept)."""
    chars = "".join("X" if flag else "." for flag in mask)
    return "\n".join(chars[i:i + width] for i in range(0, len(chars), width))
