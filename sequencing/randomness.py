"""Random sources used for answer placement and trial shuffling."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    def next_int(self, bound: int) -> int:
        """Return a uniformly distributed integer in ``[0, bound)``."""

    def next_float(self) -> float:
        """Return a uniformly distributed float in ``[0, 1)``."""


class NumpyRandomSource:
    """Random source backed by a :class:`numpy.random.Generator`.

    Parameters
    ----------
    seed : int, optional
        Seed for ``numpy.random.default_rng``. ``None`` draws fresh entropy.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}.")
        return int(self._rng.integers(bound))

    def next_float(self) -> float:
        return float(self._rng.random())

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed})"
