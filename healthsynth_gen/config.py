"""Generator configuration for the HealthSynth dataset CLI/pipeline."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Literal, Dict, Any, Optional, Tuple
import json

import pandas as pd

from .presets import DataManipulation, GenerationPreset, PatternType
from .utils import to_timestamp


OutputFormat = Literal["json", "csv", "parquet", "all"]


@dataclass
class GeneratorConfig:
    # ---- generation ----
    seed: int = 42
    preset: str = "normal"
    manipulation: str = "smooth_replace"
    # None => n_days ending today (start floored to midnight)
    start_date: Optional[str] = None
    n_days: int = 7
    include_menstrual_data: bool = False
    # path to a bundle JSON used by keep_original / generate_missing / accessibility_mode
    existing_bundle: Optional[str] = None

    # ---- post-processing ----
    pattern: Optional[str] = None
    pattern_seed: Optional[int] = None  # defaults to seed
    transpose_to_today: bool = False

    # ---- output ----
    out_format: OutputFormat = "json"

    def date_range(self, now: Optional[pd.Timestamp] = None) -> Tuple[pd.Timestamp, pd.Timestamp]:
        if self.start_date is None:
            now = now if now is not None else pd.Timestamp.now()
            start = now.normalize() - pd.DateOffset(days=self.n_days)
        else:
            start = to_timestamp(self.start_date, "start_date")
        return start, start + pd.DateOffset(days=self.n_days)

    def preset_enum(self) -> GenerationPreset:
        return GenerationPreset(self.preset)

    def manipulation_enum(self) -> DataManipulation:
        return DataManipulation(self.manipulation)

    def pattern_enum(self) -> Optional[PatternType]:
        return PatternType(self.pattern) if self.pattern is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @staticmethod
    def from_json(path: str) -> "GeneratorConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return GeneratorConfig(**data)
