import pytest

from blockattack.rng import SeededRandomSource


@pytest.fixture
def rng():
    return SeededRandomSource(1337)
