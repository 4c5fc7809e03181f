"""Two-digit decimal encoding of alphanumeric text.

Each ASCII digit, lowercase letter and uppercase letter maps to a fixed code:

    '0'-'9' -> 00-09
    'a'-'z' -> 10-35
    'A'-'Z' -> 36-61

Any other character is dropped by :func:`encode_text`, so the transform is
lossy for punctuation, whitespace and non-ASCII text.  Codes 62-99 decode to
nothing, which lets the block cipher's padding marker vanish on decode.
"""
from __future__ import annotations

import string

from decimal_rsa.errors import MalformedInputError

ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
_CODES = {ch: idx for idx, ch in enumerate(ALPHABET)}

__all__ = ["ALPHABET", "encode_text", "decode_digits"]


def encode_text(text: str) -> str:
    return "".join(f"{_CODES[ch]:02d}" for ch in text if ch in _CODES)


def decode_digits(digits: str) -> str:
    if len(digits) % 2:
        raise MalformedInputError("Encoded text must contain an even number of digits")
    if digits and not (digits.isascii() and digits.isdigit()):
        raise MalformedInputError("Encoded text may only contain decimal digits")

    out = []
    for start in range(0, len(digits), 2):
        code = int(digits[start:start + 2])
        if code < len(ALPHABET):
            out.append(ALPHABET[code])
    return "".join(out)
