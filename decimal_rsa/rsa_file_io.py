"""File helpers around the decimal block cipher.

The ciphertext file holds nothing but the concatenated fixed-width blocks;
key material is never written to disk.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from decimal_rsa.block_cipher import BlockCipher
from decimal_rsa.digit_codec import decode_digits, encode_text

logger = logging.getLogger(__name__)

__all__ = [
    "EncryptResult",
    "DecryptResult",
    "read_text",
    "write_text",
    "encrypt_file",
    "decrypt_file",
    "compare_recovered",
]


@dataclass(frozen=True)
class EncryptResult:
    encoded: str
    ciphertext: str


@dataclass(frozen=True)
class DecryptResult:
    digits: str
    text: str


def read_text(path: str | Path) -> str:
    """Read *path* as UTF-8; undecodable bytes become U+FFFD."""

    return Path(path).read_text(encoding="utf-8", errors="replace")


def write_text(path: str | Path, content: str) -> Path:
    """Create or overwrite *path* with *content*."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def encrypt_file(plain_path: str | Path, cipher_path: str | Path, cipher: BlockCipher) -> EncryptResult:
    """Encode and encrypt the text in *plain_path* into *cipher_path*."""

    text = read_text(plain_path)
    encoded = encode_text(text)
    logger.info("Encoded %d character(s) into %d digit(s)", len(text), len(encoded))
    ciphertext = cipher.encrypt_digits(encoded)
    write_text(cipher_path, ciphertext)
    logger.info("Wrote %d ciphertext digit(s) to %s", len(ciphertext), cipher_path)
    return EncryptResult(encoded=encoded, ciphertext=ciphertext)


def decrypt_file(cipher_path: str | Path, out_path: str | Path, cipher: BlockCipher) -> DecryptResult:
    """Decrypt *cipher_path* and write the decoded text to *out_path*."""

    # Editors commonly append a newline to the digit string.
    ciphertext = read_text(cipher_path).strip()
    logger.info("Read %d ciphertext digit(s) from %s", len(ciphertext), cipher_path)
    digits = cipher.decrypt_digits(ciphertext)
    text = decode_digits(digits)
    write_text(out_path, text)
    logger.info("Wrote %d recovered character(s) to %s", len(text), out_path)
    return DecryptResult(digits=digits, text=text)


def compare_recovered(original_text: str, recovered_text: str) -> bool:
    """Return ``True`` when the recovered text reproduces the original.

    Both sides are compared in encoded form, so characters the codec drops do
    not count, and trailing padding artefacts in the recovered text are
    tolerated.
    """

    return encode_text(recovered_text).startswith(encode_text(original_text))
