"""
Command-line interface for stepping through AES-128 and SHA-256.

Usage:
    python -m crypto_explore.cli aes --text "Hello World!" --key <hex32> --verbose
    python -m crypto_explore.cli aes --pt-hex <hex32> --show-keys --trace aes.jsonl
    python -m crypto_explore.cli sha256 --message "Hello World" --verbose
    python -m crypto_explore.cli avalanche "Hello World" "Hello Worle"
"""

import argparse
import sys
from typing import TextIO

from . import DEFAULT_KEY_HEX, DEFAULT_MESSAGE, DEFAULT_PLAINTEXT_TEXT
from .aes_stepper import AesStepper
from .avalanche import compare_digests, format_bit_map
from .reference import verify_ciphertext, verify_digest, aes128_encrypt, sha256_reference
from .sha256_stepper import Sha256Stepper
from .trace import TraceRecorder, print_header, print_result, print_subheader
from .utils import (
    bytes_to_hex,
    format_diff_grid,
    format_state_grid,
    format_words,
    hex_to_bytes,
    parse_key_hex,
    text_to_block,
    to_message_bytes,
)


def _open_trace(path: str | None) -> TextIO | None:
    if not path:
        return None
    return open(path, "w")


def aes_command(args: argparse.Namespace) -> int:
    """Execute the 'aes' command."""

    # Handle key
    try:
        key = parse_key_hex(args.key if args.key else DEFAULT_KEY_HEX)
    except ValueError as e:
        print(f"Error: Invalid key: {e}")
        return 1

    # Handle plaintext
    if args.pt_hex:
        try:
            plaintext = hex_to_bytes(args.pt_hex)
        except ValueError as e:
            print(f"Error: Invalid plaintext hex: {e}")
            return 1
        if len(plaintext) != 16:
            print(f"Error: Plaintext must be 32 hex chars (16 bytes), got {len(args.pt_hex)} chars")
            return 1
    else:
        text = args.text if args.text is not None else DEFAULT_PLAINTEXT_TEXT
        plaintext = text_to_block(text)

    print_header("AES-128 Encryption (stepped)")
    print(f"Key:       {bytes_to_hex(key)}")
    print(f"Plaintext: {bytes_to_hex(plaintext)}")

    try:
        trace_file = _open_trace(args.trace)
    except OSError as e:
        print(f"Error: Cannot open trace file: {e}")
        return 1

    try:
        tracer = TraceRecorder(verbose=args.verbose, trace_file=trace_file)
        stepper = AesStepper(plaintext, key, tracer=tracer)

        if args.show_keys:
            print_subheader("Round keys")
            for i, rk in enumerate(stepper.round_keys):
                print(f"RoundKey[{i}]:")
                print(format_state_grid(rk))

        print_subheader("State entering round 1")
        print(format_state_grid(stepper.snapshot.state))

        ciphertext = stepper.run_to_completion()

        if args.verbose:
            print_subheader("Final AddRoundKey")
            snap = stepper.snapshot
            print(format_diff_grid(snap.state, snap.diff))

        print_subheader("Step counts")
        print(stepper.step_counter.summary())

        passed = verify_ciphertext(ciphertext, key, plaintext)
        print_result("Ciphertext", bytes_to_hex(ciphertext), stepper.steps, passed)

        if not passed:
            print(f"Expected: {bytes_to_hex(aes128_encrypt(key, plaintext))}")
            return 1
        return 0

    finally:
        if trace_file:
            trace_file.close()


def sha256_command(args: argparse.Namespace) -> int:
    """Execute the 'sha256' command."""
    message = args.message if args.message is not None else DEFAULT_MESSAGE
    data = to_message_bytes(message)

    print_header("SHA-256 (stepped)")
    print(f"Message: {message!r} ({len(data)} bytes)")

    try:
        trace_file = _open_trace(args.trace)
    except OSError as e:
        print(f"Error: Cannot open trace file: {e}")
        return 1

    try:
        tracer = TraceRecorder(verbose=args.verbose, trace_file=trace_file)
        stepper = Sha256Stepper(data, tracer=tracer)

        snap = stepper.run_phase()
        print_subheader("Padding")
        print(f"Padded length: {len(snap.padded)} bytes, {snap.num_blocks} block(s)")
        print(f"Padded: {snap.padded.hex()}")

        digest_hex = stepper.run_to_completion()
        snap = stepper.snapshot
        print_subheader("Hash registers")
        print(format_words(snap.hash_registers))

        print_subheader("Step counts")
        print(stepper.step_counter.summary())

        passed = verify_digest(digest_hex, data)
        print_result("Digest", digest_hex, stepper.steps, passed)

        if not passed:
            print(f"Expected: {sha256_reference(data)}")
            return 1
        return 0

    finally:
        if trace_file:
            trace_file.close()


def avalanche_command(args: argparse.Namespace) -> int:
    """Execute the 'avalanche' command."""
    result = compare_digests(args.message_a, args.message_b)

    print_header("SHA-256 Avalanche")
    print(f"A: {args.message_a!r}")
    print(f"   {result.hex_a}")
    print(f"B: {args.message_b!r}")
    print(f"   {result.hex_b}")
    print_subheader("Flipped bits")
    print(format_bit_map(result.diff_mask))
    print(f"\nHamming distance: {result.distance}/{len(result.bits_a)} "
          f"({result.percent:.1f}%)")
    return 0


def _add_trace_options(parser: argparse.ArgumentParser) -> None:
    """Add options shared by 'aes' and 'sha256' subcommands."""
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print one line per step",
    )
    parser.add_argument(
        "--trace",
        metavar="FILE",
        help="Output JSON Lines trace to file",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="crypto_explore",
        description="Step-by-step AES-128 / SHA-256 explorer",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    aes_parser = subparsers.add_parser("aes", help="Step through AES-128 encryption")
    aes_parser.add_argument(
        "--key",
        help="AES-128 key as 32 hex chars (default: FIPS-197 test key)",
    )
    pt_group = aes_parser.add_mutually_exclusive_group()
    pt_group.add_argument(
        "--text",
        help=f"Plaintext text, truncated/zero-padded to 16 bytes (default: {DEFAULT_PLAINTEXT_TEXT!r})",
    )
    pt_group.add_argument(
        "--pt-hex",
        help="Plaintext as 32 hex chars",
    )
    aes_parser.add_argument(
        "--show-keys",
        action="store_true",
        help="Print all 11 round keys",
    )
    _add_trace_options(aes_parser)

    sha_parser = subparsers.add_parser("sha256", help="Step through SHA-256 hashing")
    sha_parser.add_argument(
        "--message",
        help=f"Message to hash (default: {DEFAULT_MESSAGE!r})",
    )
    _add_trace_options(sha_parser)

    aval_parser = subparsers.add_parser(
        "avalanche", help="Compare the SHA-256 digests of two messages"
    )
    aval_parser.add_argument("message_a")
    aval_parser.add_argument("message_b")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "aes":
        return aes_command(args)
    elif args.command == "sha256":
        return sha256_command(args)
    elif args.command == "avalanche":
        return avalanche_command(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
