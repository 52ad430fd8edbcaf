"""Seeded RNG wrapper used for every random decision in a game."""
from __future__ import annotations

from random import Random
from typing import MutableSequence, Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random so a whole game replays from its seed."""

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._random = Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def shuffle(self, seq: MutableSequence[T_co]) -> None:
        """Permute the sequence in-place."""
        self._random.shuffle(seq)
