from __future__ import annotations
from typing import List
import pandas as pd

from .models import DEFAULT_SOURCE, MenstrualFlowLevel, MenstrualFlowSample
from .random_source import SeededRandomGenerator
from .utils import add_days

PERIOD_MIN_DAYS = 3
PERIOD_MAX_DAYS = 7
CYCLE_MIN_DAYS = 28
CYCLE_MAX_DAYS = 35


def _flow_level(day: int, period_days: int, rng: SeededRandomGenerator) -> MenstrualFlowLevel:
    if day == 0 or day == period_days - 1:
        return MenstrualFlowLevel.LIGHT
    if day in (1, 2):
        return MenstrualFlowLevel.MEDIUM if rng.boolean() else MenstrualFlowLevel.HEAVY
    return MenstrualFlowLevel.MEDIUM


def generate_menstrual_flow(start_date: pd.Timestamp, end_date: pd.Timestamp,
                            rng: SeededRandomGenerator) -> List[MenstrualFlowSample]:
    """Recurring 28-35 day cycles, each opening with a 3-7 day period.

    A period started before ``end_date`` is always emitted in full, so its last days can
    fall after the range.
    """
    samples = []
    cycle_start = start_date
    while cycle_start < end_date:
        period_days = rng.integers(PERIOD_MIN_DAYS, PERIOD_MAX_DAYS, endpoint=True)
        for day in range(period_days):
            day_start = add_days(cycle_start, day)
            samples.append(MenstrualFlowSample(
                date=day_start,
                end_date=add_days(day_start, 1),
                flow_level=_flow_level(day, period_days, rng),
                is_cycle_start=day == 0,
                source=DEFAULT_SOURCE,
            ))
        cycle_start = add_days(cycle_start, rng.integers(CYCLE_MIN_DAYS, CYCLE_MAX_DAYS, endpoint=True))
    return samples
