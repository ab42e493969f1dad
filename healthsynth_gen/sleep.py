from __future__ import annotations
from typing import List
import pandas as pd

from .models import DEFAULT_SOURCE, SleepSample, SleepStage
from .presets import GenerationPreset
from .random_source import SeededRandomGenerator
from .utils import SECONDS_PER_HOUR, add_seconds, at_hour, iter_days

BEDTIME_HOUR = 22
STAGE_MIN_MINUTES = 20.0
STAGE_MAX_MINUTES = 90.0
# awake/unknown are valid stages but never synthesized
GENERATED_STAGES = [SleepStage.LIGHT, SleepStage.DEEP, SleepStage.REM]


def generate_sleep(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                   rng: SeededRandomGenerator) -> List[SleepSample]:
    """Nightly sleep windows split into consecutive stage segments.

    For each calendar day the window opens at 22:00 local time on that day and lasts a
    preset-dependent number of hours. The window is cut into 20-90 minute segments, each
    with a random stage; the last segment is clipped to the window end. Windows may run
    past ``end_date``.
    """
    low, high = preset.sleep_hours_range
    samples = []
    for day in iter_days(start_date, end_date):
        sleep_start = at_hour(day, BEDTIME_HOUR)
        sleep_end = add_seconds(sleep_start, rng.uniform(low, high) * SECONDS_PER_HOUR)

        segment_start = sleep_start
        while segment_start < sleep_end:
            stage_s = rng.uniform(STAGE_MIN_MINUTES, STAGE_MAX_MINUTES) * 60
            segment_end = min(add_seconds(segment_start, stage_s), sleep_end)
            stage = rng.choice(GENERATED_STAGES)
            samples.append(SleepSample(
                start_date=segment_start,
                end_date=segment_end,
                stage=stage,
                source=DEFAULT_SOURCE,
            ))
            segment_start = segment_end
    return samples
