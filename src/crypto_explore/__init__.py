"""
Crypto Primitive Exploration

Two bit-exact primitive engines exposed as single-step state machines:
1. AES-128 single-block encryption (one round transform per step)
2. SHA-256 hashing (one phase change or compression round per step)
"""

__version__ = "1.0.0"

# Default AES-128 key from FIPS-197 Appendix B
DEFAULT_KEY_HEX = "2b7e151628aed2a6abf7158809cf4f3c"

# Default inputs of the step-by-step walkthroughs
DEFAULT_PLAINTEXT_TEXT = "Hello World!"
DEFAULT_MESSAGE = "Hello World"
