"""
Reference AES / SHA-256 implementations using PyCryptodome for verification.
"""

from Crypto.Cipher import AES
from Crypto.Hash import SHA256


def aes128_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt a single 16-byte block using AES-128 ECB.

    Args:
        key: 16-byte AES key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext
    """
    if len(key) != 16:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(plaintext)


def sha256_reference(data: bytes) -> str:
    """
    Hash a message with PyCryptodome's SHA-256.

    Returns:
        64-char lowercase hex digest
    """
    return SHA256.new(data).hexdigest()


def verify_ciphertext(computed: bytes, key: bytes, plaintext: bytes) -> bool:
    """
    Verify computed ciphertext against PyCryptodome reference.

    Returns:
        True if computed matches reference, False otherwise
    """
    expected = aes128_encrypt(key, plaintext)
    return computed == expected


def verify_digest(computed_hex: str, data: bytes) -> bool:
    """Verify a hex digest against PyCryptodome reference."""
    return computed_hex == sha256_reference(data)
