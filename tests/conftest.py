import pandas as pd
import pytest

from healthsynth_gen.models import HealthBundle, HeartRateSample, HRVSample
from healthsynth_gen.presets import GenerationPreset
from healthsynth_gen.random_source import SeededRandomGenerator

START = pd.Timestamp("2024-03-04 08:00")
NOW = pd.Timestamp("2024-06-01 12:00")


@pytest.fixture
def start():
    return START


@pytest.fixture
def end():
    return START + pd.Timedelta(days=1)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def rng():
    return SeededRandomGenerator(42)


@pytest.fixture
def normal():
    return GenerationPreset.NORMAL


def hr_samples(values, start=START, step_s=300):
    return [HeartRateSample(date=start + pd.Timedelta(seconds=i * step_s), value=float(v), source="test")
            for i, v in enumerate(values)]


def hrv_samples(values, start=START, step_s=3600):
    return [HRVSample(date=start + pd.Timedelta(seconds=i * step_s), value=float(v), source="test")
            for i, v in enumerate(values)]


@pytest.fixture
def sparse_bundle():
    """An 'imported' bundle: some HR, nothing else, one optional series explicitly empty."""
    return HealthBundle(
        export_date=NOW,
        start_date=START,
        end_date=START + pd.Timedelta(days=1),
        heart_rate=hr_samples([61, 62, 63]),
        blood_oxygen=[],
    )
