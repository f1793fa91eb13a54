"""Validation and avalanche measurement for the stepped AES / SHA-256 engines."""

__version__ = "1.0.0"

from .interfaces import AvalancheConfig, ValidationResult
from .golden import golden_encrypt, golden_digest
from .metrics import AvalancheStats, run_avalanche

__all__ = [
    "AvalancheConfig",
    "ValidationResult",
    "golden_encrypt",
    "golden_digest",
    "AvalancheStats",
    "run_avalanche",
]
