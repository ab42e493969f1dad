"""Reshape heart-rate and HRV series into a different physiological pattern.

Only ``value`` changes; timestamps, source and sample order are kept. Each call owns a fresh
random stream seeded from ``seed`` and draws at most one number per sample.

Heart rate is reshaped around a 70 bpm baseline. HRV moves in the opposite direction to
stress: "amplified" (more stress) lowers HRV and "reduced" raises it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Sequence, TypeVar

import numpy as np

from .errors import InvalidInputError
from .models import HeartRateSample, HRVSample
from .presets import PatternType
from .random_source import SeededRandomGenerator


S = TypeVar("S", HeartRateSample, HRVSample)

HEART_RATE_BASELINE = 70.0
HEART_RATE_BOUNDS = (40.0, 200.0)
HRV_BOUNDS = (10.0, 200.0)


def _clamp(value: float, bounds) -> float:
    low, high = bounds
    return float(min(max(value, low), high))


def _coerce_pattern(pattern) -> PatternType:
    try:
        return PatternType(pattern)
    except ValueError as e:
        choices = ", ".join(p.value for p in PatternType)
        raise InvalidInputError(f"Unknown pattern {pattern!r}. Choose one of: {choices}") from e


def _reshape(samples: Sequence[S], fn: Callable[[float], float]) -> List[S]:
    return [replace(s, value=fn(s.value)) for s in samples]


def apply_heart_rate_pattern(pattern: PatternType, samples: Sequence[HeartRateSample],
                             seed: int = 0) -> List[HeartRateSample]:
    pattern = _coerce_pattern(pattern)
    rng = SeededRandomGenerator(seed)
    if not samples:
        return []

    base = HEART_RATE_BASELINE
    if pattern is PatternType.SIMILAR:
        return _reshape(samples, lambda v: v + rng.uniform(-2.0, 2.0))
    if pattern is PatternType.AMPLIFIED:
        return _reshape(samples, lambda v: min(HEART_RATE_BOUNDS[1], base + (v - base) * rng.uniform(1.2, 1.4)))
    if pattern is PatternType.REDUCED:
        return _reshape(samples, lambda v: max(HEART_RATE_BOUNDS[0], base + (v - base) * rng.uniform(0.6, 0.8)))
    if pattern is PatternType.INVERTED:
        mean = float(np.mean([s.value for s in samples]))
        return _reshape(samples, lambda v: _clamp(2.0 * mean - v, HEART_RATE_BOUNDS))
    if pattern is PatternType.RANDOM:
        return _reshape(samples, lambda v: _clamp(v + rng.uniform(-15.0, 15.0), HEART_RATE_BOUNDS))
    raise InvalidInputError(f"Unhandled pattern: {pattern!r}")


def apply_hrv_pattern(pattern: PatternType, samples: Sequence[HRVSample], seed: int = 0) -> List[HRVSample]:
    pattern = _coerce_pattern(pattern)
    rng = SeededRandomGenerator(seed)
    if not samples:
        return []

    if pattern is PatternType.SIMILAR:
        return _reshape(samples, lambda v: max(0.0, v + rng.uniform(-2.0, 2.0)))
    if pattern is PatternType.AMPLIFIED:
        return _reshape(samples, lambda v: max(HRV_BOUNDS[0], v * rng.uniform(0.6, 0.8)))
    if pattern is PatternType.REDUCED:
        return _reshape(samples, lambda v: min(HRV_BOUNDS[1], v * rng.uniform(1.2, 1.4)))
    if pattern is PatternType.INVERTED:
        mean = float(np.mean([s.value for s in samples]))
        return _reshape(samples, lambda v: _clamp(2.0 * mean - v, HRV_BOUNDS))
    if pattern is PatternType.RANDOM:
        return _reshape(samples, lambda v: _clamp(v + rng.uniform(-10.0, 10.0), HRV_BOUNDS))
    raise InvalidInputError(f"Unhandled pattern: {pattern!r}")


def apply_pattern(pattern: PatternType, samples: Sequence, seed: int = 0) -> list:
    """Dispatch on the sample type. An empty sequence is returned as an empty list."""
    if not samples:
        _coerce_pattern(pattern)
        return []
    first = samples[0]
    if isinstance(first, HeartRateSample):
        return apply_heart_rate_pattern(pattern, samples, seed=seed)
    if isinstance(first, HRVSample):
        return apply_hrv_pattern(pattern, samples, seed=seed)
    raise InvalidInputError(f"Patterns apply to heart rate or HRV samples, not {type(first).__name__}")
