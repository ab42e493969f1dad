from __future__ import annotations
from typing import List
import pandas as pd

from .models import (
    DEFAULT_SOURCE,
    ActivitySample,
    ExerciseTimeSample,
    WheelchairActivitySample,
    WorkoutSample,
)
from .presets import GenerationPreset
from .random_source import SeededRandomGenerator
from .utils import SECONDS_PER_DAY, SECONDS_PER_HOUR, add_days, add_seconds, at_hour

WORKOUT_TYPES = ["Running", "Walking", "Cycling", "Yoga", "Strength training"]
# only these carry a distance
DISTANCE_WORKOUTS = ("Running", "Cycling")

METERS_PER_STEP = 0.75
KCAL_PER_STEP = 0.05
METERS_PER_PUSH = 2.5
EXERCISE_MIN_MINUTES = 5.0


def generate_activity(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                      rng: SeededRandomGenerator) -> List[ActivitySample]:
    """Hourly step buckets; the daily step range is drawn and spread over 24 hours."""
    low, high = preset.steps_range
    samples = []
    current = start_date
    while current < end_date:
        hour_end = add_seconds(current, SECONDS_PER_HOUR)
        steps = rng.uniform(low, high) / 24
        samples.append(ActivitySample(
            date=current,
            end_date=hour_end,
            step_count=steps,
            distance=steps * METERS_PER_STEP,
            active_calories=steps * KCAL_PER_STEP,
            source=DEFAULT_SOURCE,
        ))
        current = hour_end
    return samples


def generate_workouts(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                      rng: SeededRandomGenerator) -> List[WorkoutSample]:
    """One workout every 1-3 calendar days, starting on the hour between 06:00 and 20:00."""
    hr_low, hr_high = preset.heart_rate_range
    samples = []
    current = start_date
    while current < end_date:
        workout_start = at_hour(current, rng.integers(6, 20, endpoint=True))
        duration_s = rng.uniform(20, 60) * 60
        workout_type = rng.choice(WORKOUT_TYPES)
        calories = rng.uniform(100, 500)
        distance = rng.uniform(1000, 10000) if workout_type in DISTANCE_WORKOUTS else None
        samples.append(WorkoutSample(
            start_date=workout_start,
            end_date=add_seconds(workout_start, duration_s),
            workout_type=workout_type,
            calories=calories,
            distance=distance,
            average_heart_rate=rng.uniform(hr_low, hr_high),
            source=DEFAULT_SOURCE,
        ))
        current = add_days(current, rng.integers(1, 3, endpoint=True))
    return samples


def generate_wheelchair_activity(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                                 rng: SeededRandomGenerator) -> List[WheelchairActivitySample]:
    # pushes do not depend on the preset
    samples = []
    current = start_date
    while current < end_date:
        hour_end = add_seconds(current, SECONDS_PER_HOUR)
        pushes = rng.uniform(50, 200)
        samples.append(WheelchairActivitySample(
            date=current,
            end_date=hour_end,
            push_count=pushes,
            distance=pushes * METERS_PER_PUSH,
            source=DEFAULT_SOURCE,
        ))
        current = hour_end
    return samples


def generate_exercise_time(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                           rng: SeededRandomGenerator) -> List[ExerciseTimeSample]:
    """Daily exercise minutes; days at or below the threshold are skipped, not zero-filled."""
    samples = []
    current = start_date
    while current < end_date:
        minutes = rng.uniform(0, 60)
        if minutes > EXERCISE_MIN_MINUTES:
            samples.append(ExerciseTimeSample(
                date=current,
                end_date=add_seconds(current, minutes * 60),
                minutes=minutes,
                source=DEFAULT_SOURCE,
            ))
        current = add_seconds(current, SECONDS_PER_DAY)
    return samples
