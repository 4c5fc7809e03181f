import random

import pytest

from decimal_rsa.random_source import RandomSource, default_source


def test_uniform_bit_length_is_exact(rng):
    for bits in (1, 2, 5, 14, 64, 257):
        for _ in range(20):
            assert rng.uniform_bit_length(bits).bit_length() == bits


def test_uniform_in_range_stays_inclusive(rng):
    seen = {rng.uniform_in_range(3, 7) for _ in range(500)}
    assert seen == {3, 4, 5, 6, 7}


def test_uniform_in_range_single_value(rng):
    assert rng.uniform_in_range(42, 42) == 42


def test_random_bits_bounds(rng):
    for _ in range(100):
        assert 0 <= rng.random_bits(10) < 1024


def test_invalid_arguments(rng):
    with pytest.raises(ValueError):
        rng.random_bits(0)
    with pytest.raises(ValueError):
        rng.uniform_in_range(10, 9)


def test_seeded_sources_repeat():
    a = RandomSource(random.Random(99).getrandbits)
    b = RandomSource(random.Random(99).getrandbits)
    assert [a.uniform_in_range(0, 10**9) for _ in range(5)] == [
        b.uniform_in_range(0, 10**9) for _ in range(5)
    ]


def test_default_source_is_shared_and_secure():
    src = default_source()
    assert src is default_source()
    assert src.uniform_bit_length(128).bit_length() == 128
