import pytest

from healthsynth_gen.presets import DataManipulation, GenerationPreset, PatternType, ValueRange


def test_normal_ranges():
    p = GenerationPreset.NORMAL
    assert p.heart_rate_range == ValueRange(60.0, 85.0)
    assert p.hrv_range == ValueRange(30.0, 70.0)
    assert p.steps_range == ValueRange(5000.0, 10000.0)
    assert p.sleep_hours_range == ValueRange(6.5, 8.0)


def test_stress_ordering():
    low, high = GenerationPreset.LOWER_STRESS, GenerationPreset.HIGHER_STRESS
    # more stress: higher heart rate, lower HRV, fewer steps, less sleep
    assert high.heart_rate_range.low > low.heart_rate_range.low
    assert high.hrv_range.high < low.hrv_range.high
    assert high.steps_range.high < low.steps_range.low
    assert high.sleep_hours_range.high < low.sleep_hours_range.high


@pytest.mark.parametrize("preset", list(GenerationPreset))
def test_ranges_are_ordered(preset):
    r = preset.ranges
    for vr in (r.heart_rate, r.hrv, r.steps, r.sleep_hours, r.resting_heart_rate):
        assert vr.low <= vr.high


def test_enums_parse_from_strings():
    assert GenerationPreset("edge_cases") is GenerationPreset.EDGE_CASES
    assert DataManipulation("accessibility_mode") is DataManipulation.ACCESSIBILITY_MODE
    assert PatternType("inverted") is PatternType.INVERTED


def test_labels_and_descriptions():
    assert GenerationPreset.NORMAL.label == "Normal results"
    assert all(m.description for m in DataManipulation)
    assert all(p.description for p in PatternType)


def test_value_range_contains():
    assert ValueRange(1.0, 2.0).contains(2.0)
    assert not ValueRange(1.0, 2.0).contains(2.5)
