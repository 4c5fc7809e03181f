"""Cryptographically secure integer sampling used by the key generator."""
from __future__ import annotations

from typing import Callable, Optional

from Crypto.Random.random import StrongRandom

__all__ = ["RandomSource", "default_source"]


class RandomSource:
    """Draw uniformly distributed integers.

    ``getrandbits`` defaults to pycryptodome's ``StrongRandom``, which reads
    from the operating system CSPRNG.  Tests may pass the ``getrandbits`` of a
    seeded :class:`random.Random` to make runs reproducible.
    """

    def __init__(self, getrandbits: Optional[Callable[[int], int]] = None) -> None:
        if getrandbits is None:
            getrandbits = StrongRandom().getrandbits
        self._getrandbits = getrandbits

    def random_bits(self, bits: int) -> int:
        """Return a value in ``[0, 2**bits)``."""

        if bits < 1:
            raise ValueError("bits must be at least 1")
        return self._getrandbits(bits)

    def uniform_bit_length(self, bits: int) -> int:
        """Return a value whose bit length is exactly ``bits``.

        Draws with leading zero bits are rejected rather than patched so the
        result stays uniform over ``[2**(bits-1), 2**bits)``.
        """

        while True:
            value = self.random_bits(bits)
            if value.bit_length() == bits:
                return value

    def uniform_in_range(self, lo: int, hi: int) -> int:
        """Return a value in the inclusive range ``[lo, hi]``."""

        if hi < lo:
            raise ValueError("empty range: hi must not be smaller than lo")
        size = hi - lo + 1
        bits = size.bit_length()
        while True:
            value = self.random_bits(bits)
            if value < size:
                return lo + value


_default: Optional[RandomSource] = None


def default_source() -> RandomSource:
    """Return the process-wide source, creating it on first use."""

    global _default
    if _default is None:
        _default = RandomSource()
    return _default
