"""Seedable uniform random source shared by generation and population.

Board generation, population counts, and tile-variant choice all draw
from the same source so a fixed seed reproduces an identical level.
"""

from __future__ import annotations

import numpy as np
from numpy.random import Generator


class RandomSource:
    """Thin wrapper over a NumPy ``Generator`` with inclusive integer draws."""

    __slots__ = ("seed", "_rng")

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng: Generator = np.random.default_rng(seed)

    def next_int(self, low: int, high: int) -> int:
        """Return a uniform integer in ``[low, high]`` inclusive."""
        if high < low:
            msg = f"empty range [{low}, {high}]"
            raise ValueError(msg)
        return int(self._rng.integers(low, high + 1))

    def choice_index(self, n: int) -> int:
        """Return a uniform index in ``[0, n)``."""
        return self.next_int(0, n - 1)
