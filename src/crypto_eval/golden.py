"""Golden references (PyCryptodome) and known-answer vectors."""

from __future__ import annotations

import random

from Crypto.Cipher import AES
from Crypto.Hash import SHA256

from crypto_explore.aes_core import encrypt_block
from crypto_explore.aes_stepper import encrypt_stepped
from crypto_explore.sha256_core import sha256_hex
from crypto_explore.sha256_stepper import hash_stepped

from .interfaces import ValidationResult, ValidationSummary


def golden_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt a single block using PyCryptodome as golden reference.

    Args:
        key: 16-byte AES-128 key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext block

    Raises:
        ValueError: If key or plaintext is not 16 bytes
    """
    if len(key) != 16:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(plaintext)


def golden_digest(data: bytes) -> str:
    """Hex SHA-256 digest using PyCryptodome as golden reference."""
    return SHA256.new(data).hexdigest()


def validate_aes(key: bytes, plaintext: bytes, label: str = "") -> ValidationResult:
    """Check stepped and batch AES against the golden reference.

    Args:
        key: 16-byte AES-128 key
        plaintext: 16-byte plaintext block
        label: Name of the vector for reporting

    Returns:
        ValidationResult; correct only if all three ciphertexts agree
    """
    expected = golden_encrypt(key, plaintext)
    stepped, steps = encrypt_stepped(key, plaintext)
    batch = encrypt_block(key, plaintext)

    detail = ""
    if stepped != expected:
        detail = f"Stepped mismatch: expected {expected.hex()}, got {stepped.hex()}"
    elif batch != expected:
        detail = f"Batch mismatch: expected {expected.hex()}, got {batch.hex()}"

    return ValidationResult(
        primitive="aes128",
        label=label,
        correct=not detail,
        expected=expected.hex(),
        computed=stepped.hex(),
        steps=steps,
        error_detail=detail,
    )


def validate_sha256(data: bytes, label: str = "") -> ValidationResult:
    """Check stepped and batch SHA-256 against the golden reference."""
    expected = golden_digest(data)
    stepped, steps = hash_stepped(data)
    batch = sha256_hex(data)

    detail = ""
    if stepped != expected:
        detail = f"Stepped mismatch: expected {expected}, got {stepped}"
    elif batch != expected:
        detail = f"Batch mismatch: expected {expected}, got {batch}"

    return ValidationResult(
        primitive="sha256",
        label=label,
        correct=not detail,
        expected=expected,
        computed=stepped,
        steps=steps,
        error_detail=detail,
    )


def run_validation(num_random: int = 20, seed: int | None = None) -> ValidationSummary:
    """Run every known-answer vector plus random vectors for both primitives."""
    summary = ValidationSummary()

    for i, vec in enumerate(FIPS_197_TEST_VECTORS):
        result = validate_aes(vec["key"], vec["plaintext"], label=f"fips197-{i + 1}")
        if result.correct and result.expected != vec["ciphertext"].hex():
            result.correct = False
            result.error_detail = f"Vector mismatch: expected {vec['ciphertext'].hex()}"
        summary.add(result)

    for i, vec in enumerate(SHA256_TEST_VECTORS):
        result = validate_sha256(vec["message"], label=f"nist-sha256-{i + 1}")
        if result.correct and result.expected != vec["digest"]:
            result.correct = False
            result.error_detail = f"Vector mismatch: expected {vec['digest']}"
        summary.add(result)

    rng = random.Random(seed)
    for i in range(num_random):
        key = bytes(rng.randint(0, 255) for _ in range(16))
        pt = bytes(rng.randint(0, 255) for _ in range(16))
        summary.add(validate_aes(key, pt, label=f"random-{i + 1}"))

        # Lengths around the 55/56/64-byte padding boundaries
        length = rng.choice([0, 1, 55, 56, 63, 64, 65, 119, 120, rng.randint(0, 300)])
        msg = bytes(rng.randint(0, 255) for _ in range(length))
        summary.add(validate_sha256(msg, label=f"random-{i + 1}-len{length}"))

    return summary


# FIPS-197 Appendix B/C Test Vectors for AES-128
FIPS_197_TEST_VECTORS = [
    # Appendix B - cipher example
    {
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "plaintext": bytes.fromhex("3243f6a8885a308d313198a2e0370734"),
        "ciphertext": bytes.fromhex("3925841d02dc09fbdc118597196a0b32"),
    },
    # Appendix C.1 - AES-128
    {
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a"),
    },
    # Additional test vectors from NIST
    {
        "key": bytes.fromhex("00000000000000000000000000000000"),
        "plaintext": bytes.fromhex("00000000000000000000000000000000"),
        "ciphertext": bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e"),
    },
    {
        "key": bytes.fromhex("00000000000000000000000000000000"),
        "plaintext": bytes.fromhex("f34481ec3cc627bacd5dc3fb08f273e6"),
        "ciphertext": bytes.fromhex("0336763e966d92595a567cc9ce537f5e"),
    },
    {
        "key": bytes.fromhex("00000000000000000000000000000000"),
        "plaintext": bytes.fromhex("9798c4640bad75c7c3227db910174e72"),
        "ciphertext": bytes.fromhex("a9a1631bf4996954ebc093957b234589"),
    },
    {
        "key": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "plaintext": bytes.fromhex("00000000000000000000000000000000"),
        "ciphertext": bytes.fromhex("a1f6258c877d5fcd8964484538bfc92c"),
    },
    {
        "key": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "plaintext": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "ciphertext": bytes.fromhex("bcbf217cb280cf30b2517052193ab979"),
    },
]

# FIPS 180-2 examples and common SHA-256 known answers
SHA256_TEST_VECTORS = [
    {
        "message": b"",
        "digest": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    },
    {
        "message": b"abc",
        "digest": "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
    },
    # Two-block message (56 bytes)
    {
        "message": b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
        "digest": "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1",
    },
    {
        "message": b"The quick brown fox jumps over the lazy dog",
        "digest": "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592",
    },
]
