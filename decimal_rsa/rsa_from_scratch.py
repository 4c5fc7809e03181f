"""Number theory for decimal textbook RSA: primes, Euclid and key pairs."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

from decimal_rsa.errors import GenerationExhaustedError
from decimal_rsa.random_source import RandomSource, default_source

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
DEFAULT_MAX_ATTEMPTS = 100_000
PREFERRED_EXPONENTS = (17, 19, 23, 29, 31, 65537)

__all__ = [
    "DEFAULT_ROUNDS",
    "PREFERRED_EXPONENTS",
    "EuclidResult",
    "KeyPair",
    "KeyGenConfig",
    "KeyPairGenerator",
    "egcd",
    "inv_mod",
    "miller_rabin",
    "gen_prime_in_range",
    "generate_key",
]


class EuclidResult(NamedTuple):
    gcd: int
    x: int
    y: int


def egcd(a: int, b: int) -> EuclidResult:
    """Extended Euclidean algorithm without recursion.

    Returns ``(g, x, y)`` with ``a*x + b*y == g``.  The loop yields the same
    coefficients as the textbook recursion ``egcd(b, a mod b)`` while keeping
    the call depth constant.  ``g`` is made non-negative for mixed-sign input.
    """

    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t

    if old_r < 0:
        return EuclidResult(-old_r, -old_s, -old_t)
    return EuclidResult(old_r, old_s, old_t)


def inv_mod(a: int, m: int) -> int:
    g, x, _ = egcd(a, m)
    if g != 1:
        raise ValueError("No modular inverse")
    return x % m


def miller_rabin(n: int, rounds: int = DEFAULT_ROUNDS, *, rng: Optional[RandomSource] = None) -> bool:
    """Return ``True`` when ``n`` is probably prime using Miller–Rabin.

    A composite passes with probability at most ``4**-rounds``.
    """

    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False

    source = rng or default_source()

    # Write n-1 as (2**s) * d with d odd.
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for _ in range(rounds):
        a = source.uniform_in_range(2, n - 2)
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == 1:
                return False
            if x == n - 1:
                break
        else:
            return False
    return True


def gen_prime_in_range(
    lo: int,
    hi: int,
    rounds: int = DEFAULT_ROUNDS,
    *,
    rng: Optional[RandomSource] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> int:
    """Draw a probable prime from the inclusive range ``[lo, hi]``."""

    if hi < lo:
        raise ValueError("empty range: hi must not be smaller than lo")

    source = rng or default_source()
    span = hi - lo

    for _ in range(max_attempts):
        offset = source.random_bits(max(1, span.bit_length()))
        if offset > span:
            offset = offset % span if span else 0
        cand = lo + offset
        if cand % 2 == 0:
            cand += 1
        cand = min(max(cand, lo), hi)
        if miller_rabin(cand, rounds, rng=source):
            return cand

    raise GenerationExhaustedError(
        f"No prime found in [{lo}, {hi}] after {max_attempts} attempts"
    )


@dataclass(frozen=True)
class KeyPair:
    n: int
    e: int
    d: int

    @property
    def public_key(self) -> Tuple[int, int]:
        return self.e, self.n

    @property
    def private_key(self) -> Tuple[int, int]:
        return self.d, self.n

    @property
    def modulus_digits(self) -> int:
        """Decimal length of ``n``; every ciphertext block has this width."""
        return len(str(self.n))


@dataclass(frozen=True)
class KeyGenConfig:
    """Bounds and policies for :class:`KeyPairGenerator`.

    The defaults draw four-digit decimal primes at least ``min_distance``
    apart, so ``n`` always exceeds ``10**4`` and a four-digit plaintext group
    fits below the modulus.
    """

    min_prime: int = 1000
    max_prime: int = 9999
    rounds: int = DEFAULT_ROUNDS
    min_distance: int = 1000
    exponent_candidates: Sequence[int] = PREFERRED_EXPONENTS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.min_prime < 2 or self.max_prime < self.min_prime:
            raise ValueError("prime bounds must satisfy 2 <= min_prime <= max_prime")
        if self.rounds < 1:
            raise ValueError("rounds must be positive")
        if self.min_distance < 1:
            raise ValueError("min_distance must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be positive")


class KeyPairGenerator:
    """Generate textbook RSA key pairs from primes in a decimal range."""

    def __init__(self, config: Optional[KeyGenConfig] = None, rng: Optional[RandomSource] = None) -> None:
        self.config = config or KeyGenConfig()
        self.rng = rng or default_source()

    def _prime(self) -> int:
        cfg = self.config
        return gen_prime_in_range(
            cfg.min_prime,
            cfg.max_prime,
            cfg.rounds,
            rng=self.rng,
            max_attempts=cfg.max_attempts,
        )

    def generate_primes(self) -> Tuple[int, int]:
        """Return distinct primes ``p, q`` with ``|p - q| >= min_distance``."""

        cfg = self.config
        logger.info("Generating prime p in [%d, %d]", cfg.min_prime, cfg.max_prime)
        p = self._prime()

        logger.info("Generating prime q at least %d away from p", cfg.min_distance)
        for _ in range(cfg.max_attempts):
            q = self._prime()
            if q != p and abs(p - q) >= cfg.min_distance:
                break
        else:
            raise GenerationExhaustedError(
                f"No prime q at distance >= {cfg.min_distance} from p={p} "
                f"after {cfg.max_attempts} attempts"
            )

        logger.info("p = %d (%d bits)", p, p.bit_length())
        logger.info("q = %d (%d bits)", q, q.bit_length())
        return p, q

    def choose_public_exponent(self, phi: int) -> int:
        """Pick ``e`` with ``1 < e < phi`` and ``gcd(e, phi) == 1``.

        The preference list is scanned first; when no entry qualifies a random
        exponent of about half the bit length of ``phi`` is drawn instead.
        """

        for cand in self.config.exponent_candidates:
            if 1 < cand < phi and egcd(cand, phi).gcd == 1:
                logger.info("Using preferred public exponent e = %d", cand)
                return cand

        logger.info("No preferred exponent fits phi=%d; drawing e at random", phi)
        bits = max(5, phi.bit_length() // 2)
        for _ in range(self.config.max_attempts):
            e = self.rng.random_bits(bits)
            if e <= 1:
                e += 2
            if e < phi and egcd(e, phi).gcd == 1:
                logger.info("Random public exponent e = %d", e)
                return e

        raise GenerationExhaustedError(
            f"No public exponent coprime to phi={phi} after {self.config.max_attempts} attempts"
        )

    def derive_key_pair(self, p: int, q: int) -> KeyPair:
        """Build ``(n, e, d)`` from two distinct primes."""

        if p == q:
            raise ValueError("p and q must be distinct")
        n = p * q
        phi = (p - 1) * (q - 1)
        logger.info("n = p * q = %d", n)
        logger.info("phi(n) = (p-1)*(q-1) = %d", phi)

        e = self.choose_public_exponent(phi)
        d = inv_mod(e, phi)
        logger.info("e = %d (%d bits)", e, e.bit_length())
        logger.info("d = %d (%d bits)", d, d.bit_length())
        return KeyPair(n=n, e=e, d=d)

    def generate(self) -> KeyPair:
        p, q = self.generate_primes()
        return self.derive_key_pair(p, q)


def generate_key(config: Optional[KeyGenConfig] = None, rng: Optional[RandomSource] = None) -> KeyPair:
    """Generate an RSA key pair with the default decimal policy."""

    return KeyPairGenerator(config, rng).generate()
