"""Avalanche metrics for SHA-256.

A trial hashes a random message and a copy with one flipped bit; the
metric is the Hamming distance between the two 256-bit digests. An ideal
hash flips each output bit with probability 1/2, so the mean distance
should sit near 128 with a standard deviation near 8.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any

from crypto_explore.avalanche import flip_bit, hamming_distance
from crypto_explore.sha256_core import digest_to_bits, sha256

from .interfaces import AvalancheConfig


@dataclass
class AvalancheTrial:
    """Result of one single-bit-flip trial."""

    message_hex: str
    bit_index: int
    distance: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "message_hex": self.message_hex,
            "bit_index": self.bit_index,
            "distance": self.distance,
        }


@dataclass
class AvalancheStats:
    """Summary statistics over a batch of trials."""

    config: AvalancheConfig
    trials: list[AvalancheTrial] = field(default_factory=list)

    @property
    def distances(self) -> list[int]:
        return [t.distance for t in self.trials]

    @property
    def mean(self) -> float:
        if not self.trials:
            return 0.0
        return sum(self.distances) / len(self.trials)

    @property
    def stdev(self) -> float:
        """Population standard deviation of the distances."""
        if not self.trials:
            return 0.0
        mu = self.mean
        return math.sqrt(sum((d - mu) ** 2 for d in self.distances) / len(self.trials))

    @property
    def minimum(self) -> int:
        return min(self.distances, default=0)

    @property
    def maximum(self) -> int:
        return max(self.distances, default=0)

    @property
    def mean_percent(self) -> float:
        return 100.0 * self.mean / self.config.digest_bits

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "trials": len(self.trials),
            "message_bytes": self.config.message_bytes,
            "seed": self.config.seed,
            "mean_distance": self.mean,
            "stdev_distance": self.stdev,
            "min_distance": self.minimum,
            "max_distance": self.maximum,
            "mean_percent": self.mean_percent,
            "expected_distance": self.config.expected_distance,
        }


def _create_rng(seed: int | None) -> random.Random:
    """Seeded PRNG for reproducibility (None seeds from the OS)."""
    return random.Random(seed)


def run_trial(message: bytes, bit_index: int) -> AvalancheTrial:
    """Hash ``message`` and its one-bit variant and measure the distance."""
    bits_a = digest_to_bits(sha256(message))
    bits_b = digest_to_bits(sha256(flip_bit(message, bit_index)))
    return AvalancheTrial(
        message_hex=message.hex(),
        bit_index=bit_index,
        distance=hamming_distance(bits_a, bits_b),
    )


def run_avalanche(config: AvalancheConfig) -> AvalancheStats:
    """Run ``config.trials`` single-bit-flip trials."""
    rng = _create_rng(config.seed)
    stats = AvalancheStats(config=config)
    for _ in range(config.trials):
        message = bytes(rng.randrange(256) for _ in range(config.message_bytes))
        bit_index = rng.randrange(config.message_bytes * 8)
        stats.trials.append(run_trial(message, bit_index))
    return stats


def distance_histogram(stats: AvalancheStats, bucket: int = 8) -> dict[int, int]:
    """Count distances per bucket (keyed by bucket lower bound)."""
    hist: dict[int, int] = {}
    for d in stats.distances:
        lo = (d // bucket) * bucket
        hist[lo] = hist.get(lo, 0) + 1
    return dict(sorted(hist.items()))
