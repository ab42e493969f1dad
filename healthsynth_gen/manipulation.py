"""Builds complete bundles from presets and a manipulation strategy.

Generators share one random stream per call and are always invoked in the same order:

    heart rate, HRV, activity, sleep, workouts, resting heart rate, respiratory rate,
    blood oxygen, skin temperature, exercise time, body temperature, menstrual flow

Fill-missing mode draws its wheelchair coin-flip (and wheelchair data) between skin
temperature and exercise time; accessibility mode draws wheelchair data before anything
else. Reordering any of this changes the output for a given seed.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

import pandas as pd

from .activities import (
    generate_activity,
    generate_exercise_time,
    generate_wheelchair_activity,
    generate_workouts,
)
from .cycle import generate_menstrual_flow
from .errors import InvalidInputError
from .models import HealthBundle
from .presets import DataManipulation, GenerationPreset
from .random_source import SeededRandomGenerator
from .sleep import generate_sleep
from .utils import now_like, validate_range
from .vitals import (
    generate_blood_oxygen,
    generate_body_temperature,
    generate_heart_rate,
    generate_hrv,
    generate_resting_heart_rate,
    generate_respiratory_rate,
    generate_skin_temperature,
)

logger = logging.getLogger(__name__)


def generate_health_data(
    preset: GenerationPreset,
    manipulation: DataManipulation,
    start_date,
    end_date,
    existing_bundle: Optional[HealthBundle] = None,
    seed: int = 0,
    include_menstrual_data: bool = False,
    now: Optional[pd.Timestamp] = None,
) -> HealthBundle:
    """Generate (or adapt) a health bundle for ``[start_date, end_date)``.

    Args:
        preset: physiological profile supplying the sampling ranges
        manipulation: how ``existing_bundle`` is treated
        start_date, end_date: requested range; anything ``pandas.Timestamp`` accepts
        existing_bundle: data to keep, fill or convert; absent means generate fresh
        seed: random seed, same seed gives the same bundle
        include_menstrual_data: synthesize (or keep, in accessibility mode) menstrual flow
        now: export timestamp; defaults to the current time

    Returns:
        A new bundle, or ``existing_bundle`` itself for keep-original.
    """
    preset = _coerce_enum(GenerationPreset, preset, "preset")
    manipulation = _coerce_enum(DataManipulation, manipulation, "manipulation")
    start, end = validate_range(start_date, end_date)
    if existing_bundle is not None and not isinstance(existing_bundle, HealthBundle):
        raise InvalidInputError(f"existing_bundle must be a HealthBundle, got {type(existing_bundle).__name__}")
    rng = SeededRandomGenerator(seed)
    export_date = now if now is not None else now_like(start)

    logger.debug("generate_health_data preset=%s manipulation=%s range=[%s, %s) seed=%s",
                 preset.value, manipulation.value, start, end, seed)

    if manipulation is DataManipulation.KEEP_ORIGINAL:
        if existing_bundle is not None:
            return existing_bundle
        logger.info("keep_original without an existing bundle, generating fresh data")
        bundle = _generate_complete_bundle(preset, start, end, include_menstrual_data, rng, export_date)
    elif manipulation is DataManipulation.GENERATE_MISSING:
        bundle = _fill_missing_data(existing_bundle, preset, start, end, include_menstrual_data, rng, export_date)
    elif manipulation is DataManipulation.SMOOTH_REPLACE:
        bundle = _generate_complete_bundle(preset, start, end, include_menstrual_data, rng, export_date)
    elif manipulation is DataManipulation.ACCESSIBILITY_MODE:
        bundle = _generate_accessibility_bundle(existing_bundle, preset, start, end, include_menstrual_data,
                                                rng, export_date)
    else:
        raise InvalidInputError(f"Unhandled manipulation: {manipulation!r}")

    logger.info("Generated %d samples (%s, %s)", bundle.sample_count, preset.value, manipulation.value)
    return bundle


def _coerce_enum(enum_cls, value, name: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        choices = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(f"Unknown {name} {value!r}. Choose one of: {choices}") from e


def _generate_complete_bundle(preset: GenerationPreset, start: pd.Timestamp, end: pd.Timestamp,
                              include_menstrual_data: bool, rng: SeededRandomGenerator,
                              export_date: pd.Timestamp) -> HealthBundle:
    # Explicit statement order = random stream order.
    heart_rate = generate_heart_rate(preset, start, end, rng)
    hrv = generate_hrv(preset, start, end, rng)
    activity = generate_activity(preset, start, end, rng)
    sleep = generate_sleep(preset, start, end, rng)
    workouts = generate_workouts(preset, start, end, rng)
    resting = generate_resting_heart_rate(preset, start, end, rng)
    respiratory = generate_respiratory_rate(preset, start, end, rng)
    oxygen = generate_blood_oxygen(preset, start, end, rng)
    skin_temperature = generate_skin_temperature(preset, start, end, rng)
    exercise = generate_exercise_time(preset, start, end, rng)
    body_temperature = generate_body_temperature(preset, start, end, rng)
    menstrual = generate_menstrual_flow(start, end, rng) if include_menstrual_data else None

    return HealthBundle(
        export_date=export_date,
        start_date=start,
        end_date=end,
        heart_rate=heart_rate,
        hrv=hrv,
        activity=activity,
        sleep=sleep,
        workouts=workouts,
        resting_heart_rate=resting,
        respiratory_rate=respiratory,
        blood_oxygen=oxygen,
        skin_temperature=skin_temperature,
        wheelchair_activity=None,
        exercise_time=exercise,
        body_temperature=body_temperature,
        menstrual_flow=menstrual,
        mindful_minutes=None,
        state_of_mind=None,
    )


def _fill_missing_data(bundle: Optional[HealthBundle], preset: GenerationPreset, start: pd.Timestamp,
                       end: pd.Timestamp, include_menstrual_data: bool, rng: SeededRandomGenerator,
                       export_date: pd.Timestamp) -> HealthBundle:
    if bundle is None:
        logger.info("generate_missing without an existing bundle, generating fresh data")
        return _generate_complete_bundle(preset, start, end, include_menstrual_data, rng, export_date)

    # Required series are refilled when empty; optional ones only when absent (None).
    heart_rate = bundle.heart_rate or generate_heart_rate(preset, start, end, rng)
    hrv = bundle.hrv or generate_hrv(preset, start, end, rng)
    activity = bundle.activity or generate_activity(preset, start, end, rng)
    sleep = bundle.sleep or generate_sleep(preset, start, end, rng)
    workouts = bundle.workouts or generate_workouts(preset, start, end, rng)
    resting = bundle.resting_heart_rate or generate_resting_heart_rate(preset, start, end, rng)

    respiratory = bundle.respiratory_rate
    if respiratory is None:
        respiratory = generate_respiratory_rate(preset, start, end, rng)
    oxygen = bundle.blood_oxygen
    if oxygen is None:
        oxygen = generate_blood_oxygen(preset, start, end, rng)
    skin_temperature = bundle.skin_temperature
    if skin_temperature is None:
        skin_temperature = generate_skin_temperature(preset, start, end, rng)
    wheelchair = bundle.wheelchair_activity
    if wheelchair is None and rng.boolean():
        wheelchair = generate_wheelchair_activity(preset, start, end, rng)
    exercise = bundle.exercise_time
    if exercise is None:
        exercise = generate_exercise_time(preset, start, end, rng)
    body_temperature = bundle.body_temperature
    if body_temperature is None:
        body_temperature = generate_body_temperature(preset, start, end, rng)
    menstrual = bundle.menstrual_flow
    if menstrual is None and include_menstrual_data:
        menstrual = generate_menstrual_flow(start, end, rng)

    return HealthBundle(
        export_date=export_date,
        start_date=start,
        end_date=end,
        heart_rate=heart_rate,
        hrv=hrv,
        activity=activity,
        sleep=sleep,
        workouts=workouts,
        resting_heart_rate=resting,
        respiratory_rate=respiratory,
        blood_oxygen=oxygen,
        skin_temperature=skin_temperature,
        wheelchair_activity=wheelchair,
        exercise_time=exercise,
        body_temperature=body_temperature,
        menstrual_flow=menstrual,
        # no generators for these; carried over as-is
        mindful_minutes=bundle.mindful_minutes,
        state_of_mind=bundle.state_of_mind,
    )


def _generate_accessibility_bundle(existing: Optional[HealthBundle], preset: GenerationPreset,
                                   start: pd.Timestamp, end: pd.Timestamp, include_menstrual_data: bool,
                                   rng: SeededRandomGenerator, export_date: pd.Timestamp) -> HealthBundle:
    wheelchair = generate_wheelchair_activity(preset, start, end, rng)

    if existing is None:
        source = _generate_complete_bundle(preset, start, end, include_menstrual_data, rng, export_date)
    else:
        source = replace(existing, export_date=export_date, start_date=start, end_date=end)

    return replace(
        source,
        activity=[],
        wheelchair_activity=wheelchair,
        menstrual_flow=source.menstrual_flow if include_menstrual_data else None,
    )
