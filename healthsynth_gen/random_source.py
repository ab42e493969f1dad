"""Seeded pseudo-random stream used by every generator.

A 64-bit linear congruential generator:

    state = state * 2862933555777941757 + 3037000493  (mod 2**64)

Bounded draws are derived from the raw stream the same way the fixtures produced by
this engine were, so a given seed reproduces those fixtures bit for bit:
  - bounded integers use Lemire's nearly-divisionless multiply-shift,
  - closed-range doubles draw a 53-bit significand in [0, 2**53] and scale it.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from .errors import InvalidInputError

T = TypeVar("T")

_MASK64 = (1 << 64) - 1
_MULTIPLIER = 2862933555777941757
_INCREMENT = 3037000493
_MAX_SIGNIFICAND = 1 << 53
_UNIT = 2.0 ** -53


class SeededRandomGenerator:
    """Reproducible random stream. Not thread-safe; give each caller its own instance."""

    def __init__(self, seed: int = 0):
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise InvalidInputError(f"seed must be an integer, got {type(seed).__name__}")
        # negative seeds wrap to their two's complement bit pattern
        state = seed & _MASK64
        if state == 0:
            state = 1
        self._state = state

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> int:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _MASK64
        return self._state

    def next_below(self, bound: int) -> int:
        """Uniform integer in [0, bound)."""
        if bound <= 0:
            raise InvalidInputError(f"bound must be positive, got {bound}")
        m = self.next() * bound
        low = m & _MASK64
        if low < bound:
            threshold = ((1 << 64) - bound) % bound
            while low < threshold:
                m = self.next() * bound
                low = m & _MASK64
        return m >> 64

    def uniform(self, low: float, high: float) -> float:
        """Uniform double in the closed range [low, high]."""
        if not (math.isfinite(low) and math.isfinite(high)):
            raise InvalidInputError(f"range bounds must be finite, got [{low}, {high}]")
        if low > high:
            raise InvalidInputError(f"empty range [{low}, {high}]")
        rand = self.next_below(_MAX_SIGNIFICAND + 1)
        if rand == _MAX_SIGNIFICAND:
            return float(high)
        return (high - low) * (rand * _UNIT) + low

    def integers(self, low: int, high: int, endpoint: bool = False) -> int:
        """Uniform integer in [low, high), or [low, high] when endpoint is True."""
        span = high - low + (1 if endpoint else 0)
        if span <= 0:
            raise InvalidInputError(f"empty integer range [{low}, {high}{']' if endpoint else ')'}")
        return low + self.next_below(span)

    def choice(self, options: Sequence[T]) -> T:
        if len(options) == 0:
            raise InvalidInputError("cannot choose from an empty sequence")
        return options[self.next_below(len(options))]

    def boolean(self) -> bool:
        return (self.next() >> 17) & 1 == 0

    def random(self) -> float:
        """Uniform double in [0, 1)."""
        return self.next_below(_MAX_SIGNIFICAND) * _UNIT

    def __repr__(self) -> str:
        return f"SeededRandomGenerator(state={self._state})"
