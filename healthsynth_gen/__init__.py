"""HealthSynth synthetic wearable health-data generator.

Produces a HealthBundle covering a date range:
- required series: heart rate, HRV, hourly activity, sleep stages, workouts, resting HR
- optional series: respiratory rate, SpO2, skin/body temperature, wheelchair pushes,
  exercise minutes, menstrual flow (plus mindful minutes / state of mind passed through)

Generation is seeded and reproducible. Existing bundles can be kept, gap-filled,
converted for wheelchair users, reshaped (HR/HRV patterns) or moved in time.
"""

__all__ = [
    "generate_dataset",
    "generate_health_data",
    "apply_pattern",
    "transpose_bundle_to_today",
    "DateTransformation",
    "GenerationPreset",
    "DataManipulation",
    "PatternType",
    "HealthBundle",
    "SeededRandomGenerator",
]
from .pipeline import generate_dataset
from .manipulation import generate_health_data
from .patterns import apply_pattern
from .transpose import DateTransformation, transpose_bundle_to_today
from .presets import DataManipulation, GenerationPreset, PatternType
from .models import HealthBundle
from .random_source import SeededRandomGenerator
