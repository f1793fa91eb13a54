"""Core data structures for the evaluation framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AvalancheConfig:
    """Configuration for an avalanche experiment.

    Each trial draws a random message, flips one random bit and compares
    the SHA-256 digests of the two messages.
    """

    # Number of (message, flipped message) pairs
    trials: int = 200

    # Length in bytes of each random message
    message_bytes: int = 32

    # Seed for reproducible message/bit selection (None = fresh randomness)
    seed: int | None = None

    # Digest width in bits (SHA-256)
    digest_bits: int = 256

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.trials < 1:
            raise ValueError(f"trials must be positive, got {self.trials}")
        if self.message_bytes < 1:
            raise ValueError(f"message_bytes must be positive, got {self.message_bytes}")
        if self.digest_bits != 256:
            raise ValueError(f"digest_bits must be 256, got {self.digest_bits}")

    @property
    def expected_distance(self) -> float:
        """Ideal mean Hamming distance (half the digest)."""
        return self.digest_bits / 2


@dataclass
class ValidationResult:
    """Outcome of checking one primitive against its golden reference."""

    primitive: str
    label: str
    correct: bool
    expected: str
    computed: str
    steps: int = 0
    error_detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "primitive": self.primitive,
            "label": self.label,
            "correct": self.correct,
            "expected": self.expected,
            "computed": self.computed,
            "steps": self.steps,
            "error_detail": self.error_detail,
        }


@dataclass
class ValidationSummary:
    """Aggregate of many validation results."""

    results: list[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.correct)

    @property
    def failed(self) -> int:
        return len(self.results) - self.passed

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def add(self, result: ValidationResult) -> None:
        self.results.append(result)
