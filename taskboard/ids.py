"""Identifier generators injected into the services."""

import itertools
import random
import string
from typing import Iterator, Optional, Protocol

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


class IdGenerator(Protocol):
    def __call__(self) -> str:
        ...


class RandomIdGenerator:
    """Short base36 identifiers, e.g. ``k3f9x0q2m``."""

    def __init__(self, rng: Optional[random.Random] = None, length: int = ID_LENGTH):
        self.rng = rng or random.SystemRandom()
        self.length = length

    def __call__(self) -> str:
        return "".join(self.rng.choices(ID_ALPHABET, k=self.length))


class CounterIdGenerator:
    """Monotonic identifiers: ``<prefix>1``, ``<prefix>2``..."""

    def __init__(self, prefix: str = "", start: int = 1):
        self.prefix = prefix
        self._counter: Iterator[int] = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
