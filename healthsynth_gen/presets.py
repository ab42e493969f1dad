"""Physiological presets and the closed choices that drive generation.

Higher HRV indicates *lower* stress, while higher heart rate indicates *higher* stress.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple


class ValueRange(NamedTuple):
    """Closed numeric range [low, high]."""
    low: float
    high: float

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


@dataclass(frozen=True)
class PresetRanges:
    heart_rate: ValueRange        # BPM
    hrv: ValueRange               # ms SDNN
    steps: ValueRange             # steps per day
    sleep_hours: ValueRange       # hours per night
    resting_heart_rate: ValueRange


class GenerationPreset(str, Enum):
    LOWER_STRESS = "lower_stress"
    NORMAL = "normal"
    HIGHER_STRESS = "higher_stress"
    EDGE_CASES = "edge_cases"

    @property
    def ranges(self) -> PresetRanges:
        return PRESET_RANGES[self]

    @property
    def heart_rate_range(self) -> ValueRange:
        return PRESET_RANGES[self].heart_rate

    @property
    def hrv_range(self) -> ValueRange:
        return PRESET_RANGES[self].hrv

    @property
    def steps_range(self) -> ValueRange:
        return PRESET_RANGES[self].steps

    @property
    def sleep_hours_range(self) -> ValueRange:
        return PRESET_RANGES[self].sleep_hours

    @property
    def resting_heart_rate_range(self) -> ValueRange:
        return PRESET_RANGES[self].resting_heart_rate

    @property
    def label(self) -> str:
        return _PRESET_TEXT[self][0]

    @property
    def description(self) -> str:
        return _PRESET_TEXT[self][1]


PRESET_RANGES: Dict[GenerationPreset, PresetRanges] = {
    GenerationPreset.LOWER_STRESS: PresetRanges(
        heart_rate=ValueRange(55.0, 75.0),
        hrv=ValueRange(50.0, 100.0),
        steps=ValueRange(8000.0, 12000.0),
        sleep_hours=ValueRange(7.5, 9.0),
        resting_heart_rate=ValueRange(50.0, 60.0),
    ),
    GenerationPreset.NORMAL: PresetRanges(
        heart_rate=ValueRange(60.0, 85.0),
        hrv=ValueRange(30.0, 70.0),
        steps=ValueRange(5000.0, 10000.0),
        sleep_hours=ValueRange(6.5, 8.0),
        resting_heart_rate=ValueRange(55.0, 65.0),
    ),
    GenerationPreset.HIGHER_STRESS: PresetRanges(
        heart_rate=ValueRange(75.0, 110.0),
        hrv=ValueRange(15.0, 40.0),
        steps=ValueRange(2000.0, 5000.0),
        sleep_hours=ValueRange(4.0, 6.5),
        resting_heart_rate=ValueRange(60.0, 75.0),
    ),
    # widest ranges, used to probe boundary handling downstream
    GenerationPreset.EDGE_CASES: PresetRanges(
        heart_rate=ValueRange(40.0, 180.0),
        hrv=ValueRange(5.0, 150.0),
        steps=ValueRange(0.0, 30000.0),
        sleep_hours=ValueRange(2.0, 12.0),
        resting_heart_rate=ValueRange(40.0, 90.0),
    ),
}

_PRESET_TEXT = {
    GenerationPreset.LOWER_STRESS: ("Lower stress", "Healthy, relaxed patterns"),
    GenerationPreset.NORMAL: ("Normal results", "Typical daily patterns"),
    GenerationPreset.HIGHER_STRESS: ("Higher stress", "Elevated stress indicators"),
    GenerationPreset.EDGE_CASES: ("Edge cases", "Extreme values for testing"),
}


class DataManipulation(str, Enum):
    """How a generation call treats pre-existing data."""
    KEEP_ORIGINAL = "keep_original"
    GENERATE_MISSING = "generate_missing"
    SMOOTH_REPLACE = "smooth_replace"
    ACCESSIBILITY_MODE = "accessibility_mode"

    @property
    def description(self) -> str:
        return {
            DataManipulation.KEEP_ORIGINAL: "Preserve existing data patterns",
            DataManipulation.GENERATE_MISSING: "Add data for empty categories",
            DataManipulation.SMOOTH_REPLACE: "Replace with synthetic data",
            DataManipulation.ACCESSIBILITY_MODE: "Replace steps with wheelchair data",
        }[self]


class PatternType(str, Enum):
    """Perturbations applied to existing heart rate / HRV series."""
    SIMILAR = "similar"
    AMPLIFIED = "amplified"   # more stress: higher HR, lower HRV
    REDUCED = "reduced"       # less stress: lower HR, higher HRV
    INVERTED = "inverted"
    RANDOM = "random"

    @property
    def description(self) -> str:
        return {
            PatternType.SIMILAR: "Keep the same stress patterns",
            PatternType.AMPLIFIED: "Increase stress levels by 20-40%",
            PatternType.REDUCED: "Decrease stress levels by 20-40%",
            PatternType.INVERTED: "Flip high and low stress periods",
            PatternType.RANDOM: "Add random variations to the data",
        }[self]
