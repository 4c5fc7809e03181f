from __future__ import annotations

from .errors import GenerationExhaustedError, MalformedInputError
from .random_source import RandomSource, default_source
from .rsa_from_scratch import (
    KeyGenConfig,
    KeyPair,
    KeyPairGenerator,
    egcd,
    gen_prime_in_range,
    generate_key,
    inv_mod,
    miller_rabin,
)
from .digit_codec import decode_digits, encode_text
from .block_cipher import BlockCipher, CipherParams, decrypt_digits, encrypt_digits

__all__ = [
    "BlockCipher",
    "CipherParams",
    "GenerationExhaustedError",
    "KeyGenConfig",
    "KeyPair",
    "KeyPairGenerator",
    "MalformedInputError",
    "RandomSource",
    "decode_digits",
    "decrypt_digits",
    "default_source",
    "egcd",
    "encode_text",
    "encrypt_digits",
    "gen_prime_in_range",
    "generate_key",
    "inv_mod",
    "miller_rabin",
]
