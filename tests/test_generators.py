import pandas as pd
import pytest

from healthsynth_gen.activities import (
    EXERCISE_MIN_MINUTES,
    WORKOUT_TYPES,
    generate_activity,
    generate_exercise_time,
    generate_wheelchair_activity,
    generate_workouts,
)
from healthsynth_gen.cycle import generate_menstrual_flow
from healthsynth_gen.models import DEFAULT_SOURCE, MenstrualFlowLevel, SleepStage
from healthsynth_gen.presets import GenerationPreset
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


def test_one_day_cadence(normal, start, end, rng):
    assert len(generate_heart_rate(normal, start, end, rng)) == 288
    assert len(generate_hrv(normal, start, end, rng)) == 24
    assert len(generate_activity(normal, start, end, rng)) == 24
    assert len(generate_resting_heart_rate(normal, start, end, rng)) == 1
    assert len(generate_respiratory_rate(normal, start, end, rng)) == 24
    assert len(generate_blood_oxygen(normal, start, end, rng)) == 24
    assert len(generate_skin_temperature(normal, start, end, rng)) == 24
    assert len(generate_body_temperature(normal, start, end, rng)) == 2
    assert len(generate_wheelchair_activity(normal, start, end, rng)) == 24


def test_heart_rate_within_preset(normal, start, rng):
    samples = generate_heart_rate(normal, start, start + pd.Timedelta(days=3), rng)
    assert all(60.0 <= s.value <= 85.0 for s in samples)
    assert all(s.source == DEFAULT_SOURCE for s in samples)
    assert samples[0].date == start
    assert samples[1].date - samples[0].date == pd.Timedelta(minutes=5)


def test_hrv_within_preset(normal, start, rng):
    samples = generate_hrv(normal, start, start + pd.Timedelta(days=3), rng)
    assert all(30.0 <= s.value <= 70.0 for s in samples)


@pytest.mark.parametrize("preset", list(GenerationPreset))
def test_values_within_ranges_for_every_preset(preset, start, end):
    rng = SeededRandomGenerator(7)
    low, high = preset.heart_rate_range
    assert all(low <= s.value <= high for s in generate_heart_rate(preset, start, end, rng))
    low, high = preset.resting_heart_rate_range
    assert all(low <= s.value <= high for s in generate_resting_heart_rate(preset, start, end, rng))


def test_empty_and_inverted_ranges(normal, start, end, rng):
    assert generate_heart_rate(normal, start, start, rng) == []
    assert generate_sleep(normal, end, start, rng) == []
    assert generate_workouts(normal, end, start, rng) == []
    assert generate_menstrual_flow(start, start, rng) == []


def test_activity_spreads_daily_steps_over_hours(normal, start, end, rng):
    samples = generate_activity(normal, start, end, rng)
    for s in samples:
        assert 5000 / 24 <= s.step_count <= 10000 / 24
        assert s.distance == pytest.approx(s.step_count * 0.75)
        assert s.active_calories == pytest.approx(s.step_count * 0.05)
        assert s.end_date - s.date == pd.Timedelta(hours=1)


def test_wheelchair_pushes(normal, start, end, rng):
    for s in generate_wheelchair_activity(normal, start, end, rng):
        assert 50 <= s.push_count <= 200
        assert s.distance == pytest.approx(s.push_count * 2.5)


def test_exercise_time_skips_short_days(normal, start, rng):
    samples = generate_exercise_time(normal, start, start + pd.Timedelta(days=60), rng)
    assert 0 < len(samples) <= 60
    for s in samples:
        assert s.minutes > EXERCISE_MIN_MINUTES
        assert s.end_date - s.date == pd.Timedelta(seconds=s.minutes * 60)


def test_workouts(normal, start, rng):
    samples = generate_workouts(normal, start, start + pd.Timedelta(days=30), rng)
    assert 10 <= len(samples) <= 30
    for s in samples:
        assert 6 <= s.start_date.hour <= 20
        assert s.start_date.minute == 0
        assert s.workout_type in WORKOUT_TYPES
        assert pd.Timedelta(minutes=20) <= s.end_date - s.start_date <= pd.Timedelta(minutes=60)
        assert 100 <= s.calories <= 500
        assert 60 <= s.average_heart_rate <= 85
        if s.workout_type in ("Running", "Cycling"):
            assert 1000 <= s.distance <= 10000
        else:
            assert s.distance is None
    gaps = {(b.start_date.normalize() - a.start_date.normalize()).days for a, b in zip(samples, samples[1:])}
    assert gaps <= {1, 2, 3}


def test_sleep_segments_are_contiguous(normal, start, rng):
    samples = generate_sleep(normal, start, start + pd.Timedelta(days=2), rng)
    assert samples[0].start_date == pd.Timestamp("2024-03-04 22:00")
    for s in samples:
        assert s.stage in (SleepStage.LIGHT, SleepStage.DEEP, SleepStage.REM)
        assert s.end_date > s.start_date
        assert s.end_date - s.start_date <= pd.Timedelta(minutes=90)
    for a, b in zip(samples, samples[1:]):
        assert b.start_date == a.end_date or b.start_date.hour == 22
    second_night = [s for s in samples if s.start_date >= pd.Timestamp("2024-03-05 22:00")]
    total = second_night[-1].end_date - second_night[0].start_date
    assert pd.Timedelta(hours=6.5) <= total <= pd.Timedelta(hours=8)


def test_menstrual_single_period_in_28_days(start, rng):
    samples = generate_menstrual_flow(start, start + pd.Timedelta(days=28), rng)
    assert 3 <= len(samples) <= 7
    assert samples[0].is_cycle_start
    assert not any(s.is_cycle_start for s in samples[1:])
    assert samples[0].flow_level is MenstrualFlowLevel.LIGHT
    assert samples[-1].flow_level is MenstrualFlowLevel.LIGHT
    for s in samples[1:-1]:
        assert s.flow_level in (MenstrualFlowLevel.MEDIUM, MenstrualFlowLevel.HEAVY)
    assert [s.date for s in samples] == [start + pd.Timedelta(days=i) for i in range(len(samples))]


def test_menstrual_cycles_repeat(start, rng):
    samples = generate_menstrual_flow(start, start + pd.Timedelta(days=120), rng)
    starts = [s.date for s in samples if s.is_cycle_start]
    assert 3 <= len(starts) <= 5
    assert all(28 <= (b - a).days <= 35 for a, b in zip(starts, starts[1:]))


def test_daily_series_keep_wall_clock_across_dst(normal, rng):
    start = pd.Timestamp("2024-03-09 08:00", tz="America/New_York")
    end = pd.Timestamp("2024-03-12 08:00", tz="America/New_York")
    samples = generate_resting_heart_rate(normal, start, end, rng)
    assert [s.date.hour for s in samples] == [8, 8, 8]
    # absolute 5-minute cadence: the spring-forward day is one hour short
    hr = generate_heart_rate(normal, start, end, rng)
    assert len(hr) == 3 * 288 - 12
