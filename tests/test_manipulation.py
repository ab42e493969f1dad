from dataclasses import replace

import pandas as pd
import pytest

from healthsynth_gen.activities import (
    generate_activity,
    generate_exercise_time,
    generate_wheelchair_activity,
    generate_workouts,
)
from healthsynth_gen.cycle import generate_menstrual_flow
from healthsynth_gen.errors import InvalidInputError
from healthsynth_gen.manipulation import generate_health_data
from healthsynth_gen.models import HealthBundle, MindfulMinutesSample
from healthsynth_gen.presets import DataManipulation, GenerationPreset
from healthsynth_gen.random_source import SeededRandomGenerator
from healthsynth_gen.sleep import generate_sleep
from healthsynth_gen.vitals import (
    generate_blood_oxygen,
    generate_body_temperature,
    generate_heart_rate,
    generate_hrv,
    generate_respiratory_rate,
    generate_resting_heart_rate,
    generate_skin_temperature,
)


SMOOTH = DataManipulation.SMOOTH_REPLACE


def _generate(manipulation=SMOOTH, preset=GenerationPreset.NORMAL, days=1, **kwargs):
    start = pd.Timestamp("2024-03-04 08:00")
    kwargs.setdefault("now", pd.Timestamp("2024-06-01 12:00"))
    return generate_health_data(preset, manipulation, start, start + pd.Timedelta(days=days), **kwargs)


def test_same_seed_same_bundle():
    assert _generate(seed=42) == _generate(seed=42)


def test_seed_changes_values():
    a, b = _generate(seed=42), _generate(seed=99)
    assert [s.value for s in a.heart_rate] != [s.value for s in b.heart_rate]
    assert _generate(seed=43) != _generate(seed=42)


def test_smooth_replace_shape(now):
    b = _generate(seed=1)
    assert b.export_date == now
    assert b.start_date == pd.Timestamp("2024-03-04 08:00")
    assert b.end_date == pd.Timestamp("2024-03-05 08:00")
    assert 200 < len(b.heart_rate) < 400
    assert 20 < len(b.hrv) < 30
    assert b.wheelchair_activity is None
    assert b.menstrual_flow is None
    assert b.mindful_minutes is None
    assert b.state_of_mind is None
    assert b.respiratory_rate and b.blood_oxygen and b.skin_temperature and b.body_temperature
    assert all(60 <= s.value <= 85 for s in b.heart_rate)
    assert all(30 <= s.value <= 70 for s in b.hrv)


def test_menstrual_only_when_requested():
    assert _generate(days=28, seed=3, include_menstrual_data=True).menstrual_flow
    assert _generate(days=28, seed=3).menstrual_flow is None


def test_keep_original_returns_same_object(sparse_bundle):
    out = _generate(DataManipulation.KEEP_ORIGINAL, existing_bundle=sparse_bundle)
    assert out is sparse_bundle


def test_keep_original_without_existing_generates():
    assert _generate(DataManipulation.KEEP_ORIGINAL, seed=5) == _generate(seed=5)


def test_generate_missing_without_existing_generates():
    assert _generate(DataManipulation.GENERATE_MISSING, seed=5) == _generate(seed=5)


def test_generate_missing_keeps_present_series(sparse_bundle):
    out = _generate(DataManipulation.GENERATE_MISSING, existing_bundle=sparse_bundle, seed=8)
    assert out.heart_rate == sparse_bundle.heart_rate
    # explicitly empty optional series is data, not a gap
    assert out.blood_oxygen == []
    assert len(out.hrv) == 24
    assert out.activity and out.sleep and out.workouts and out.resting_heart_rate
    assert out.respiratory_rate and out.skin_temperature and out.body_temperature
    assert out.menstrual_flow is None


def test_generate_missing_fills_in_complete_order(start, end, now):
    empty = HealthBundle(export_date=now, start_date=start, end_date=end)
    filled = _generate(DataManipulation.GENERATE_MISSING, existing_bundle=empty, seed=11)
    fresh = _generate(seed=11)
    for attr in ("heart_rate", "hrv", "activity", "sleep", "workouts", "resting_heart_rate",
                 "respiratory_rate", "blood_oxygen", "skin_temperature"):
        assert getattr(filled, attr) == getattr(fresh, attr)


def test_generate_missing_wheelchair_is_a_coin_flip(start, end, now):
    empty = HealthBundle(export_date=now, start_date=start, end_date=end)
    outcomes = {
        _generate(DataManipulation.GENERATE_MISSING, existing_bundle=empty, seed=s).wheelchair_activity is None
        for s in range(1, 30)
    }
    assert outcomes == {True, False}


def test_generate_missing_passes_through_mindful(sparse_bundle):
    mindful = [MindfulMinutesSample(date=sparse_bundle.start_date,
                                    end_date=sparse_bundle.start_date + pd.Timedelta(minutes=10),
                                    duration=10.0, source="test")]
    existing = replace(sparse_bundle, mindful_minutes=mindful)
    out = _generate(DataManipulation.GENERATE_MISSING, existing_bundle=existing)
    assert out.mindful_minutes == mindful
    assert out.state_of_mind is None


def test_accessibility_replaces_steps_with_pushes(start, end):
    out = _generate(DataManipulation.ACCESSIBILITY_MODE, seed=4)
    assert out.activity == []
    assert len(out.wheelchair_activity) == 24
    # wheelchair data is drawn before everything else
    expected = generate_wheelchair_activity(GenerationPreset.NORMAL, start, end, SeededRandomGenerator(4))
    assert out.wheelchair_activity == expected
    assert out.heart_rate


def test_accessibility_with_existing(sparse_bundle, now):
    with_flow = replace(sparse_bundle, activity=[], menstrual_flow=[])
    out = _generate(DataManipulation.ACCESSIBILITY_MODE, existing_bundle=with_flow)
    assert out.heart_rate == sparse_bundle.heart_rate
    assert out.blood_oxygen == []
    assert out.menstrual_flow is None
    assert out.export_date == now
    kept = _generate(DataManipulation.ACCESSIBILITY_MODE, existing_bundle=with_flow, include_menstrual_data=True)
    assert kept.menstrual_flow == []


def test_inverted_range_gives_empty_series(now):
    start = pd.Timestamp("2024-03-04")
    out = generate_health_data(GenerationPreset.NORMAL, SMOOTH, start, start - pd.Timedelta(days=1), now=now)
    assert out.heart_rate == [] and out.sleep == [] and out.workouts == []
    assert out.exercise_time == []


def test_string_enums_accepted():
    assert _generate("smooth_replace", preset="higher_stress", seed=2) == \
        _generate(SMOOTH, preset=GenerationPreset.HIGHER_STRESS, seed=2)


@pytest.mark.parametrize("kwargs", [
    {"preset": "bogus"},
    {"manipulation": "bogus"},
    {"seed": 1.5},
    {"start_date": pd.NaT},
    {"start_date": None},
    {"end_date": "not a date"},
    {"start_date": pd.Timestamp("2024-03-04", tz="UTC")},
])
def test_invalid_inputs_rejected(kwargs):
    args = {
        "preset": GenerationPreset.NORMAL,
        "manipulation": SMOOTH,
        "start_date": pd.Timestamp("2024-03-04"),
        "end_date": pd.Timestamp("2024-03-05"),
    }
    args.update(kwargs)
    with pytest.raises(InvalidInputError):
        generate_health_data(**args)


def test_existing_must_be_a_bundle():
    with pytest.raises(InvalidInputError):
        _generate(DataManipulation.KEEP_ORIGINAL, existing_bundle={"heartRate": []})


def _by_hand(preset, start, end, rng):
    # one shared stream, consumed in the documented generator order
    return {
        "heart_rate": generate_heart_rate(preset, start, end, rng),
        "hrv": generate_hrv(preset, start, end, rng),
        "activity": generate_activity(preset, start, end, rng),
        "sleep": generate_sleep(preset, start, end, rng),
        "workouts": generate_workouts(preset, start, end, rng),
        "resting_heart_rate": generate_resting_heart_rate(preset, start, end, rng),
        "respiratory_rate": generate_respiratory_rate(preset, start, end, rng),
        "blood_oxygen": generate_blood_oxygen(preset, start, end, rng),
        "skin_temperature": generate_skin_temperature(preset, start, end, rng),
        "exercise_time": generate_exercise_time(preset, start, end, rng),
        "body_temperature": generate_body_temperature(preset, start, end, rng),
        "menstrual_flow": generate_menstrual_flow(start, end, rng),
    }


@pytest.mark.parametrize("seed", [1, 42])
def test_smooth_replace_follows_generator_order(seed, start):
    end = start + pd.Timedelta(days=3)
    preset = GenerationPreset.HIGHER_STRESS
    out = generate_health_data(preset, SMOOTH, start, end, seed=seed, include_menstrual_data=True,
                               now=pd.Timestamp("2024-06-01"))
    expected = _by_hand(preset, start, end, SeededRandomGenerator(seed))
    for attr, samples in expected.items():
        assert getattr(out, attr) == samples, attr


def test_accessibility_draws_wheelchair_then_generator_order(start):
    end = start + pd.Timedelta(days=2)
    preset = GenerationPreset.NORMAL
    out = generate_health_data(preset, DataManipulation.ACCESSIBILITY_MODE, start, end, seed=42,
                               now=pd.Timestamp("2024-06-01"))
    rng = SeededRandomGenerator(42)
    assert out.wheelchair_activity == generate_wheelchair_activity(preset, start, end, rng)
    expected = _by_hand(preset, start, end, rng)
    for attr in ("heart_rate", "hrv", "sleep", "workouts", "resting_heart_rate", "respiratory_rate",
                 "blood_oxygen", "skin_temperature", "exercise_time", "body_temperature"):
        assert getattr(out, attr) == expected[attr], attr


def test_generate_missing_draws_wheelchair_between_skin_and_exercise(start, now):
    end = start + pd.Timedelta(days=2)
    preset = GenerationPreset.NORMAL
    empty = HealthBundle(export_date=now, start_date=start, end_date=end)
    for seed in range(1, 12):
        out = generate_health_data(preset, DataManipulation.GENERATE_MISSING, start, end,
                                   existing_bundle=empty, seed=seed, now=now)
        rng = SeededRandomGenerator(seed)
        for fn in (generate_heart_rate, generate_hrv, generate_activity, generate_sleep, generate_workouts,
                   generate_resting_heart_rate, generate_respiratory_rate, generate_blood_oxygen,
                   generate_skin_temperature):
            fn(preset, start, end, rng)
        wheelchair = generate_wheelchair_activity(preset, start, end, rng) if rng.boolean() else None
        assert out.wheelchair_activity == wheelchair
        assert out.exercise_time == generate_exercise_time(preset, start, end, rng)
        assert out.body_temperature == generate_body_temperature(preset, start, end, rng)
