#!/usr/bin/env python3
"""
Decimal RSA CLI – generate a key pair, then encrypt, decrypt and compare a file.

Usage:
  Interactive session (three Y/N prompts):
    python rsa_cli.py

  Non-interactive, answering Y to every prompt:
    python rsa_cli.py --yes
    python rsa_cli.py --yes --input notes.txt --cipher-out notes.enc --plain-out notes.dec
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import textwrap
import time
from typing import Callable, Optional, Sequence

# Ensure relative repo imports work even if executed from another directory.
sys.path.insert(0, str(pathlib.Path(__file__).parent.resolve()))

from decimal_rsa.block_cipher import (
    DEFAULT_GROUP_LENGTH,
    DEFAULT_PADDING_MARKER,
    BlockCipher,
    CipherParams,
)
from decimal_rsa.errors import GenerationExhaustedError, MalformedInputError
from decimal_rsa.rsa_file_io import (
    DecryptResult,
    EncryptResult,
    compare_recovered,
    decrypt_file,
    encrypt_file,
    read_text,
)
from decimal_rsa.rsa_from_scratch import KeyGenConfig, KeyPair, KeyPairGenerator
from utils import console_ui

logger = logging.getLogger("rsa_cli")

DEFAULT_INPUT = "lab2-Plaintext.txt"
DEFAULT_CIPHER_OUT = "RSAEN_lab2-Plaintext.txt"
DEFAULT_PLAIN_OUT = "RSADE_lab2-Plaintext.txt"

Reader = Callable[[str], str]


def _show_key_pair(key_pair: KeyPair) -> None:
    console_ui.section("Key Information")
    e, n = key_pair.public_key
    d, _ = key_pair.private_key
    console_ui.kv("Public key", f"(e = {e}, n = {n})")
    console_ui.kv("Private key", f"(d = {d}, n = {n})")
    console_ui.kv("Modulus n size", f"{n.bit_length()} bits")
    console_ui.kv("Ciphertext block width", f"{key_pair.modulus_digits} digits")


def generate_key_pair(config: KeyGenConfig) -> KeyPair:
    console_ui.section("Generate RSA Key Pair")
    start = time.perf_counter()
    key_pair = KeyPairGenerator(config).generate()
    console_ui.elapsed("Key generation took", time.perf_counter() - start)
    _show_key_pair(key_pair)
    return key_pair


def run_encrypt(args: argparse.Namespace, cipher: BlockCipher) -> Optional[EncryptResult]:
    console_ui.section("Encrypt")
    try:
        result = encrypt_file(args.input, args.cipher_out, cipher)
    except OSError as exc:
        logger.error("Encryption skipped: %s", exc)
        console_ui.error(f"Could not read or write file: {exc}")
        return None
    except MalformedInputError as exc:
        console_ui.error(f"Encryption failed: {exc}")
        return None

    console_ui.kv("Encoded text", console_ui.preview(result.encoded))
    console_ui.kv("Ciphertext length", f"{len(result.ciphertext)} digits")
    console_ui.success(f"Ciphertext saved to: {args.cipher_out}")
    return result


def run_decrypt(args: argparse.Namespace, cipher: BlockCipher) -> Optional[DecryptResult]:
    console_ui.section("Decrypt")
    try:
        result = decrypt_file(args.cipher_out, args.plain_out, cipher)
    except OSError as exc:
        logger.error("Decryption skipped: %s", exc)
        console_ui.error(f"Could not read or write file: {exc}")
        return None
    except MalformedInputError as exc:
        console_ui.error(f"Decryption failed: {exc}")
        return None

    console_ui.kv("Recovered text", console_ui.preview(result.text))
    console_ui.success(f"Recovered plaintext saved to: {args.plain_out}")
    return result


def run_compare(
    args: argparse.Namespace,
    encrypted: Optional[EncryptResult],
    recovered: Optional[DecryptResult],
) -> Optional[bool]:
    console_ui.section("Compare")
    if encrypted is None or recovered is None:
        console_ui.warning("Cannot compare: encrypt and decrypt in this session first.")
        return None
    try:
        original = read_text(args.input)
    except OSError as exc:
        logger.error("Comparison skipped: %s", exc)
        console_ui.error(f"Could not read file: {exc}")
        return None

    ok = compare_recovered(original, recovered.text)
    if ok:
        console_ui.success("Recovered text matches the original.")
    else:
        console_ui.error("Recovered text differs from the original.")
    return ok


def run_session(args: argparse.Namespace, reader: Optional[Reader] = None) -> int:
    """Generate keys and walk through the encrypt/decrypt/compare prompts."""

    def ask(question: str) -> bool:
        if args.yes:
            return True
        return console_ui.ask_yes_no(question, reader)

    try:
        key_pair = generate_key_pair(KeyGenConfig())
    except GenerationExhaustedError as exc:
        console_ui.error(f"Key generation failed: {exc}")
        return 1

    try:
        params = CipherParams.for_modulus(key_pair.n, args.group_length, args.padding_marker)
        cipher = BlockCipher(key_pair, params)
    except ValueError as exc:
        console_ui.error(f"Invalid cipher parameters: {exc}")
        return 2

    encrypted = None
    if ask("Encrypt the input file?"):
        encrypted = run_encrypt(args, cipher)

    recovered = None
    if ask("Decrypt the ciphertext file?"):
        recovered = run_decrypt(args, cipher)

    if ask("Compare the recovered text with the original?"):
        run_compare(args, encrypted, recovered)

    console_ui.line()
    print("Session finished.")
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Decimal RSA CLI: textbook RSA over fixed-width decimal blocks.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        Examples:
          python rsa_cli.py
          python rsa_cli.py --yes --plain
        """),
    )
    ap.add_argument("--input", default=DEFAULT_INPUT, help="Plaintext file to encrypt.")
    ap.add_argument("--cipher-out", default=DEFAULT_CIPHER_OUT, help="Ciphertext file.")
    ap.add_argument("--plain-out", default=DEFAULT_PLAIN_OUT, help="Recovered plaintext file.")
    ap.add_argument(
        "--group-length",
        type=int,
        default=DEFAULT_GROUP_LENGTH,
        help="Plaintext digits per encrypted block.",
    )
    ap.add_argument(
        "--padding-marker",
        type=int,
        default=DEFAULT_PADDING_MARKER,
        help="Two-digit value appended when the digits do not fill the last block.",
    )
    ap.add_argument("--yes", action="store_true", help="Answer Y to every prompt.")
    ap.add_argument(
        "--plain",
        action="store_true",
        help="Disable colors/banners; print plain ASCII.",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging verbosity (DEBUG, INFO, WARNING, ...)",
    )
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    console_ui.init(plain=args.plain)
    console_ui.banner("Decimal RSA")
    return run_session(args)


if __name__ == "__main__":
    sys.exit(main())
