"""
Data model for synthetic health bundles.

- Sample types: one frozen dataclass per metric (point or start/end interval samples)
- HealthBundle: the complete dataset produced by one generation/transformation call
- SERIES: registry describing every metric series a bundle carries

Required series are always lists (possibly empty). Optional series are three-state:
``None`` (never requested), ``[]`` (requested, no data) or populated.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple, Type

import pandas as pd

DEFAULT_SOURCE = "HealthSynth"


def _time(json_key: str):
    return field(metadata={"json": json_key, "time": True})


def _value(json_key: str, enum: Optional[Type[Enum]] = None, optional: bool = False):
    return field(metadata={"json": json_key, "enum": enum, "optional": optional})


class SleepStage(str, Enum):
    AWAKE = "awake"
    LIGHT = "light"
    DEEP = "deep"
    REM = "rem"
    UNKNOWN = "unknown"


class MenstrualFlowLevel(str, Enum):
    UNSPECIFIED = "unspecified"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    NONE = "none"


class _Sample:
    """Shared behaviour for the frozen sample dataclasses below."""

    @classmethod
    def time_fields(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.metadata.get("time"))

    @property
    def start(self) -> pd.Timestamp:
        return getattr(self, self.time_fields()[0])

    @property
    def end(self) -> pd.Timestamp:
        return getattr(self, self.time_fields()[-1])

    def map_times(self, fn: Callable[[pd.Timestamp], pd.Timestamp]):
        """Return a copy with every timestamp passed through ``fn``."""
        return replace(self, **{name: fn(getattr(self, name)) for name in self.time_fields()})


@dataclass(frozen=True)
class HeartRateSample(_Sample):
    date: pd.Timestamp = _time("date")
    value: float = _value("value")  # BPM
    source: str = _value("source")


@dataclass(frozen=True)
class RestingHeartRateSample(_Sample):
    date: pd.Timestamp = _time("date")
    value: float = _value("value")  # BPM
    source: str = _value("source")


@dataclass(frozen=True)
class HRVSample(_Sample):
    """Heart rate variability as SDNN in milliseconds."""
    date: pd.Timestamp = _time("date")
    value: float = _value("value")
    source: str = _value("source")


@dataclass(frozen=True)
class ActivitySample(_Sample):
    date: pd.Timestamp = _time("date")
    end_date: pd.Timestamp = _time("endDate")
    step_count: float = _value("stepCount")
    distance: Optional[float] = _value("distance", optional=True)  # metres
    active_calories: Optional[float] = _value("activeCalories", optional=True)  # kcal
    source: str = _value("source")


@dataclass(frozen=True)
class WheelchairActivitySample(_Sample):
    date: pd.Timestamp = _time("date")
    end_date: pd.Timestamp = _time("endDate")
    push_count: float = _value("pushCount")
    distance: Optional[float] = _value("distance", optional=True)  # metres
    source: str = _value("source")


@dataclass(frozen=True)
class ExerciseTimeSample(_Sample):
    date: pd.Timestamp = _time("date")
    end_date: pd.Timestamp = _time("endDate")
    minutes: float = _value("minutes")
    source: str = _value("source")


@dataclass(frozen=True)
class SleepSample(_Sample):
    start_date: pd.Timestamp = _time("startDate")
    end_date: pd.Timestamp = _time("endDate")
    stage: SleepStage = _value("stage", enum=SleepStage)
    source: str = _value("source")


@dataclass(frozen=True)
class WorkoutSample(_Sample):
    start_date: pd.Timestamp = _time("startDate")
    end_date: pd.Timestamp = _time("endDate")
    workout_type: str = _value("type")
    calories: Optional[float] = _value("calories", optional=True)  # kcal
    distance: Optional[float] = _value("distance", optional=True)  # metres
    average_heart_rate: Optional[float] = _value("averageHeartRate", optional=True)
    source: str = _value("source")


@dataclass(frozen=True)
class RespiratorySample(_Sample):
    date: pd.Timestamp = _time("date")
    value: float = _value("value")  # breaths per minute


@dataclass(frozen=True)
class OxygenSample(_Sample):
    date: pd.Timestamp = _time("date")
    value: float = _value("value")  # percent


@dataclass(frozen=True)
class TemperatureSample(_Sample):
    date: pd.Timestamp = _time("date")
    value: float = _value("value")  # Celsius


@dataclass(frozen=True)
class BodyTemperatureSample(_Sample):
    date: pd.Timestamp = _time("date")
    value: float = _value("value")  # Celsius
    source: str = _value("source")


@dataclass(frozen=True)
class MenstrualFlowSample(_Sample):
    date: pd.Timestamp = _time("date")
    end_date: pd.Timestamp = _time("endDate")
    flow_level: MenstrualFlowLevel = _value("flowLevel", enum=MenstrualFlowLevel)
    is_cycle_start: bool = _value("isCycleStart")
    source: str = _value("source")


@dataclass(frozen=True)
class MindfulMinutesSample(_Sample):
    date: pd.Timestamp = _time("date")
    end_date: pd.Timestamp = _time("endDate")
    duration: float = _value("duration")  # minutes
    source: str = _value("source")


@dataclass(frozen=True)
class StateOfMindSample(_Sample):
    date: pd.Timestamp = _time("date")
    valence: float = _value("valence")  # -1 unpleasant .. 1 pleasant
    arousal: float = _value("arousal")  # -1 low energy .. 1 high energy
    labels: Tuple[str, ...] = _value("labels")
    source: str = _value("source")


class HealthDataType(str, Enum):
    HEART_RATE = "heart_rate"
    HRV = "hrv"
    ACTIVITY = "activity"
    SLEEP = "sleep"
    WORKOUTS = "workouts"
    RESTING_HEART_RATE = "resting_heart_rate"
    RESPIRATORY_RATE = "respiratory_rate"
    BLOOD_OXYGEN = "blood_oxygen"
    SKIN_TEMPERATURE = "skin_temperature"
    WHEELCHAIR_ACTIVITY = "wheelchair_activity"
    EXERCISE_TIME = "exercise_time"
    BODY_TEMPERATURE = "body_temperature"
    MENSTRUAL_FLOW = "menstrual_flow"
    MINDFUL_MINUTES = "mindful_minutes"
    STATE_OF_MIND = "state_of_mind"

    @property
    def is_required(self) -> bool:
        return self in _REQUIRED_TYPES

    @property
    def is_enhanced(self) -> bool:
        """Needs newer wearable sensors to be recorded natively."""
        return self in (
            HealthDataType.RESPIRATORY_RATE,
            HealthDataType.BLOOD_OXYGEN,
            HealthDataType.SKIN_TEMPERATURE,
            HealthDataType.BODY_TEMPERATURE,
            HealthDataType.MENSTRUAL_FLOW,
            HealthDataType.STATE_OF_MIND,
        )

    @property
    def is_accessibility_feature(self) -> bool:
        return self is HealthDataType.WHEELCHAIR_ACTIVITY


_REQUIRED_TYPES = (
    HealthDataType.HEART_RATE,
    HealthDataType.HRV,
    HealthDataType.ACTIVITY,
    HealthDataType.SLEEP,
    HealthDataType.WORKOUTS,
    HealthDataType.RESTING_HEART_RATE,
)


class SeriesSpec(NamedTuple):
    data_type: HealthDataType
    json_key: str
    sample_type: type

    @property
    def attr(self) -> str:
        return self.data_type.value

    @property
    def required(self) -> bool:
        return self.data_type.is_required


# Bundle field order; also the order used by the codec and the tabular export.
SERIES: Tuple[SeriesSpec, ...] = (
    SeriesSpec(HealthDataType.HEART_RATE, "heartRate", HeartRateSample),
    SeriesSpec(HealthDataType.HRV, "hrv", HRVSample),
    SeriesSpec(HealthDataType.ACTIVITY, "activity", ActivitySample),
    SeriesSpec(HealthDataType.SLEEP, "sleep", SleepSample),
    SeriesSpec(HealthDataType.WORKOUTS, "workouts", WorkoutSample),
    SeriesSpec(HealthDataType.RESTING_HEART_RATE, "restingHeartRate", RestingHeartRateSample),
    SeriesSpec(HealthDataType.RESPIRATORY_RATE, "respiratoryRate", RespiratorySample),
    SeriesSpec(HealthDataType.BLOOD_OXYGEN, "bloodOxygen", OxygenSample),
    SeriesSpec(HealthDataType.SKIN_TEMPERATURE, "skinTemperature", TemperatureSample),
    SeriesSpec(HealthDataType.WHEELCHAIR_ACTIVITY, "wheelchairActivity", WheelchairActivitySample),
    SeriesSpec(HealthDataType.EXERCISE_TIME, "exerciseTime", ExerciseTimeSample),
    SeriesSpec(HealthDataType.BODY_TEMPERATURE, "bodyTemperature", BodyTemperatureSample),
    SeriesSpec(HealthDataType.MENSTRUAL_FLOW, "menstrualFlow", MenstrualFlowSample),
    SeriesSpec(HealthDataType.MINDFUL_MINUTES, "mindfulMinutes", MindfulMinutesSample),
    SeriesSpec(HealthDataType.STATE_OF_MIND, "stateOfMind", StateOfMindSample),
)


@dataclass(frozen=True)
class HealthBundle:
    """A complete exported health dataset covering [start_date, end_date)."""
    export_date: pd.Timestamp
    start_date: pd.Timestamp
    end_date: pd.Timestamp
    heart_rate: List[HeartRateSample] = field(default_factory=list)
    hrv: List[HRVSample] = field(default_factory=list)
    activity: List[ActivitySample] = field(default_factory=list)
    sleep: List[SleepSample] = field(default_factory=list)
    workouts: List[WorkoutSample] = field(default_factory=list)
    resting_heart_rate: List[RestingHeartRateSample] = field(default_factory=list)
    respiratory_rate: Optional[List[RespiratorySample]] = None
    blood_oxygen: Optional[List[OxygenSample]] = None
    skin_temperature: Optional[List[TemperatureSample]] = None
    wheelchair_activity: Optional[List[WheelchairActivitySample]] = None
    exercise_time: Optional[List[ExerciseTimeSample]] = None
    body_temperature: Optional[List[BodyTemperatureSample]] = None
    menstrual_flow: Optional[List[MenstrualFlowSample]] = None
    mindful_minutes: Optional[List[MindfulMinutesSample]] = None
    state_of_mind: Optional[List[StateOfMindSample]] = None

    @property
    def sample_count(self) -> int:
        return sum(len(samples) for _, samples in self.iter_series())

    def series(self, data_type: HealthDataType) -> Optional[list]:
        return getattr(self, HealthDataType(data_type).value)

    def iter_series(self) -> Iterator[Tuple[SeriesSpec, list]]:
        """Yield (spec, samples) for every series that is present."""
        for spec in SERIES:
            samples = getattr(self, spec.attr)
            if samples is not None:
                yield spec, samples

    def counts(self) -> dict:
        """Per-series sample counts; absent optional series map to None."""
        out = {}
        for spec in SERIES:
            samples = getattr(self, spec.attr)
            out[spec.attr] = None if samples is None else len(samples)
        return out
