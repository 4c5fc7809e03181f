import pathlib
import random
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def rng():
    from decimal_rsa.random_source import RandomSource

    return RandomSource(random.Random(20240517).getrandbits)
