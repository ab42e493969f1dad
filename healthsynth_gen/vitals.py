"""Point-sample vital sign generators (heart rate, HRV, temperatures, respiration, SpO2).

Every generator draws from the caller's ``rng`` in a fixed order; calling them in a
different order changes every later value for the same seed.
"""

from __future__ import annotations
from typing import List
import pandas as pd

from .models import (
    DEFAULT_SOURCE,
    BodyTemperatureSample,
    HeartRateSample,
    HRVSample,
    OxygenSample,
    RespiratorySample,
    RestingHeartRateSample,
    TemperatureSample,
)
from .presets import GenerationPreset, ValueRange
from .random_source import SeededRandomGenerator
from .utils import SECONDS_PER_HOUR, iter_days, iter_every

HEART_RATE_INTERVAL_S = 300
HRV_INTERVAL_S = SECONDS_PER_HOUR
BODY_TEMPERATURE_INTERVAL_S = 12 * SECONDS_PER_HOUR

SKIN_TEMPERATURE_RANGE = ValueRange(36.0, 37.5)


def generate_heart_rate(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                        rng: SeededRandomGenerator) -> List[HeartRateSample]:
    low, high = preset.heart_rate_range
    return [
        HeartRateSample(date=ts, value=rng.uniform(low, high), source=DEFAULT_SOURCE)
        for ts in iter_every(start_date, end_date, HEART_RATE_INTERVAL_S)
    ]


def generate_hrv(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                 rng: SeededRandomGenerator) -> List[HRVSample]:
    low, high = preset.hrv_range
    return [
        HRVSample(date=ts, value=rng.uniform(low, high), source=DEFAULT_SOURCE)
        for ts in iter_every(start_date, end_date, HRV_INTERVAL_S)
    ]


def generate_resting_heart_rate(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                                rng: SeededRandomGenerator) -> List[RestingHeartRateSample]:
    """One resting value per calendar day, in a band below the preset's main HR range."""
    low, high = preset.resting_heart_rate_range
    return [
        RestingHeartRateSample(date=ts, value=rng.uniform(low, high), source=DEFAULT_SOURCE)
        for ts in iter_days(start_date, end_date)
    ]


def respiratory_range(preset: GenerationPreset) -> ValueRange:
    if preset is GenerationPreset.HIGHER_STRESS:
        return ValueRange(16.0, 20.0)
    return ValueRange(12.0, 16.0)


def generate_respiratory_rate(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                              rng: SeededRandomGenerator) -> List[RespiratorySample]:
    low, high = respiratory_range(preset)
    return [
        RespiratorySample(date=ts, value=rng.uniform(low, high))
        for ts in iter_every(start_date, end_date, SECONDS_PER_HOUR)
    ]


def oxygen_range(preset: GenerationPreset) -> ValueRange:
    if preset is GenerationPreset.EDGE_CASES:
        return ValueRange(85.0, 100.0)
    return ValueRange(95.0, 100.0)


def generate_blood_oxygen(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                          rng: SeededRandomGenerator) -> List[OxygenSample]:
    low, high = oxygen_range(preset)
    return [
        OxygenSample(date=ts, value=rng.uniform(low, high))
        for ts in iter_every(start_date, end_date, SECONDS_PER_HOUR)
    ]


def generate_skin_temperature(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                              rng: SeededRandomGenerator) -> List[TemperatureSample]:
    # preset-independent
    low, high = SKIN_TEMPERATURE_RANGE
    return [
        TemperatureSample(date=ts, value=rng.uniform(low, high))
        for ts in iter_every(start_date, end_date, SECONDS_PER_HOUR)
    ]


def body_temperature_range(preset: GenerationPreset) -> ValueRange:
    if preset is GenerationPreset.HIGHER_STRESS:
        return ValueRange(37.2, 38.0)
    return ValueRange(36.5, 37.2)


def generate_body_temperature(preset: GenerationPreset, start_date: pd.Timestamp, end_date: pd.Timestamp,
                              rng: SeededRandomGenerator) -> List[BodyTemperatureSample]:
    low, high = body_temperature_range(preset)
    return [
        BodyTemperatureSample(date=ts, value=rng.uniform(low, high), source=DEFAULT_SOURCE)
        for ts in iter_every(start_date, end_date, BODY_TEMPERATURE_INTERVAL_S)
    ]
