# utils.py
from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import numpy as np

# =========================
# Random sources
# =========================
#
# Every random draw in the engine goes through ``rand_range`` so a graph can
# be rebuilt and replayed exactly from a seed or a scripted sequence.


class RandomSource(Protocol):
    def rand_range(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]`` inclusive."""


class NumpyRandomSource:
    """Uniform integer draws backed by :func:`numpy.random.default_rng`."""

    __slots__ = ("seed", "_generator")

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def rand_range(self, low: int, high: int) -> int:
        low = int(low)
        high = int(high)
        # A single-value (or inverted) range never touches the generator.
        if high + 1 - low <= 1:
            return low
        return int(self._generator.integers(low, high, endpoint=True))


class ScriptedRandomSource:
    """Replay a fixed sequence of draws, clamped into the requested range."""

    __slots__ = ("_values", "_cursor")

    def __init__(self, values: Iterable[int]) -> None:
        self._values = [int(v) for v in values]
        self._cursor = 0

    @property
    def consumed(self) -> int:
        return self._cursor

    def rand_range(self, low: int, high: int) -> int:
        low = int(low)
        high = int(high)
        if high + 1 - low <= 1:
            return low
        if self._cursor >= len(self._values):
            raise IndexError("scripted random source exhausted")
        value = self._values[self._cursor]
        self._cursor += 1
        return min(max(value, low), high)


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""

    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


__all__ = ["RandomSource", "NumpyRandomSource", "ScriptedRandomSource", "trunc_div"]
