"""
Random Source - The only place the engine draws randomness from.

Any object with choice() and shuffle() works; random.Random is the
default. Tests pass a seeded instance for reproducible games.
"""

from __future__ import annotations
import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Uniform choices and in-place shuffles."""

    def choice(self, seq: Sequence[T]) -> T:
        ...

    def shuffle(self, x: list) -> None:
        ...


def create_random_source(seed: int | None = None) -> RandomSource:
    """Create the default random source, seeded when a seed is given."""
    return random.Random(seed)
