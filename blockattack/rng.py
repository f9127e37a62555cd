"""
Randomness sources handed to oracle constructors.

SystemRandomSource draws from pycryptodome's secure generator and is the
default everywhere. SeededRandomSource replays a fixed sequence so tests and
`--seed` runs are reproducible.
"""

import random as _random
from typing import Optional, Sequence, TypeVar

from Crypto.Random import get_random_bytes
from Crypto.Random import random as strong_random

T = TypeVar("T")


class RandomSource:
    """Interface: random bytes, bounded integers, coin flips and choices."""

    def random_bytes(self, n: int) -> bytes:
        raise NotImplementedError

    def randint(self, a: int, b: int) -> int:
        """Random integer in [a, b], both ends included."""
        raise NotImplementedError

    def coin(self) -> bool:
        return self.randint(0, 1) == 1

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.randint(0, len(seq) - 1)]


class SystemRandomSource(RandomSource):
    def random_bytes(self, n: int) -> bytes:
        return get_random_bytes(n)

    def randint(self, a: int, b: int) -> int:
        return strong_random.randint(a, b)


class SeededRandomSource(RandomSource):
    """Deterministic source for tests. Not for anything secret."""

    def __init__(self, seed: int = 0):
        self._random = _random.Random(seed)

    def random_bytes(self, n: int) -> bytes:
        return self._random.randbytes(n)

    def randint(self, a: int, b: int) -> int:
        return self._random.randint(a, b)


def default_source(rng: Optional[RandomSource] = None) -> RandomSource:
    return rng if rng is not None else SystemRandomSource()
