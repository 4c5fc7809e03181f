"""Fixed-width decimal block encryption with raw textbook RSA.

Plaintext digit strings are cut into groups of ``group_length`` digits, each
group is raised to the public exponent modulo ``n`` and written back as
exactly ``block_width`` digits (the decimal length of ``n``), so the
ciphertext can be re-split without separators.

A plaintext whose length is not a multiple of ``group_length`` receives the
two-digit ``padding_marker`` once.  Round trips are exact only while every
group value is below ``n``, i.e. ``n >= 10**group_length``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from decimal_rsa.digit_codec import decode_digits, encode_text
from decimal_rsa.errors import MalformedInputError
from decimal_rsa.rsa_from_scratch import KeyPair

logger = logging.getLogger(__name__)

DEFAULT_GROUP_LENGTH = 4
DEFAULT_PADDING_MARKER = 99

__all__ = [
    "DEFAULT_GROUP_LENGTH",
    "DEFAULT_PADDING_MARKER",
    "CipherParams",
    "BlockCipher",
    "encrypt_digits",
    "decrypt_digits",
]


@dataclass(frozen=True)
class CipherParams:
    block_width: int
    group_length: int = DEFAULT_GROUP_LENGTH
    padding_marker: int = DEFAULT_PADDING_MARKER

    def __post_init__(self) -> None:
        if self.group_length < 1:
            raise ValueError("group_length must be positive")
        if self.block_width < 1:
            raise ValueError("block_width must be positive")
        if not 0 <= self.padding_marker <= 99:
            raise ValueError("padding_marker must fit in two decimal digits")

    @classmethod
    def for_modulus(
        cls,
        n: int,
        group_length: int = DEFAULT_GROUP_LENGTH,
        padding_marker: int = DEFAULT_PADDING_MARKER,
    ) -> "CipherParams":
        return cls(block_width=len(str(n)), group_length=group_length, padding_marker=padding_marker)


def _ensure_digits(value: str, *, field: str) -> None:
    if value and not (value.isascii() and value.isdigit()):
        raise MalformedInputError(f"{field} may only contain decimal digits")


def _chunks(value: str, size: int) -> Iterator[str]:
    for start in range(0, len(value), size):
        yield value[start:start + size]


def encrypt_digits(digits: str, e: int, n: int, params: CipherParams) -> str:
    """Encrypt a plaintext digit string block by block."""

    _ensure_digits(digits, field="Plaintext digits")
    group = params.group_length
    if len(digits) % group:
        digits += f"{params.padding_marker:02d}"
        logger.debug("Appended padding marker %02d", params.padding_marker)
    if len(digits) % group:
        # A single two-digit marker only realigns inputs that were exactly
        # two digits short of a full group.
        raise MalformedInputError(
            f"Padded plaintext of {len(digits)} digits does not split into "
            f"groups of {group}"
        )

    blocks = [str(pow(int(chunk), e, n)).zfill(params.block_width) for chunk in _chunks(digits, group)]
    logger.debug("Encrypted %d block(s)", len(blocks))
    return "".join(blocks)


def decrypt_digits(cipher: str, d: int, n: int, params: CipherParams) -> str:
    """Invert :func:`encrypt_digits`; the padding marker is left in place."""

    _ensure_digits(cipher, field="Ciphertext")
    width = params.block_width
    if len(cipher) % width:
        raise MalformedInputError(
            f"Ciphertext length {len(cipher)} is not a multiple of the block width {width}"
        )

    groups = [str(pow(int(chunk), d, n)).zfill(params.group_length) for chunk in _chunks(cipher, width)]
    logger.debug("Decrypted %d block(s)", len(groups))
    return "".join(groups)


class BlockCipher:
    """Bind a key pair to cipher parameters and run text through both layers."""

    def __init__(self, key_pair: KeyPair, params: Optional[CipherParams] = None) -> None:
        if params is None:
            params = CipherParams.for_modulus(key_pair.n)
        if key_pair.n < 10 ** params.group_length:
            raise ValueError(
                f"Modulus {key_pair.n} is too small for {params.group_length}-digit groups"
            )
        if params.block_width < key_pair.modulus_digits:
            raise ValueError("block_width must cover every decimal digit of n")
        self.key_pair = key_pair
        self.params = params

    def encrypt_digits(self, digits: str) -> str:
        return encrypt_digits(digits, self.key_pair.e, self.key_pair.n, self.params)

    def decrypt_digits(self, cipher: str) -> str:
        return decrypt_digits(cipher, self.key_pair.d, self.key_pair.n, self.params)

    def encrypt(self, text: str) -> str:
        return self.encrypt_digits(encode_text(text))

    def decrypt(self, cipher: str) -> str:
        return decode_digits(self.decrypt_digits(cipher))
