"""Move a bundle in time, either by a fixed offset or by proportional remapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from fractions import Fraction
from typing import Callable, Optional

import pandas as pd

from .errors import InvalidInputError
from .models import SERIES, HealthBundle
from .utils import now_like, require_same_tz_kind, to_timestamp

logger = logging.getLogger(__name__)


def _ns(delta: pd.Timedelta) -> int:
    return delta.as_unit("ns").value


def _remap_bundle(bundle: HealthBundle, fn: Callable[[pd.Timestamp], pd.Timestamp],
                  export_date: pd.Timestamp, start_date: pd.Timestamp, end_date: pd.Timestamp) -> HealthBundle:
    # Absent optional series stay absent, empty ones stay empty.
    changes = {}
    for spec in SERIES:
        samples = getattr(bundle, spec.attr)
        if samples is not None:
            changes[spec.attr] = [s.map_times(fn) for s in samples]
    return replace(bundle, export_date=export_date, start_date=start_date, end_date=end_date, **changes)


def transpose_bundle_to_today(bundle: HealthBundle, now: Optional[pd.Timestamp] = None) -> HealthBundle:
    """Shift every timestamp so the bundle's range ends at ``now``; duration is kept."""
    now = to_timestamp(now, "now") if now is not None else now_like(bundle.end_date)
    require_same_tz_kind(now=now, end_date=bundle.end_date)
    offset = now - bundle.end_date
    duration = bundle.end_date - bundle.start_date
    logger.debug("Transposing bundle by %s", offset)
    return _remap_bundle(bundle, lambda ts: ts + offset, export_date=now,
                         start_date=now - duration, end_date=now)


@dataclass(frozen=True)
class DateTransformation:
    """Linear map from ``[original_start, original_end]`` onto ``[target_start, target_end]``."""
    original_start: pd.Timestamp
    original_end: pd.Timestamp
    target_start: pd.Timestamp
    target_end: pd.Timestamp

    def __post_init__(self):
        for name in ("original_start", "original_end", "target_start", "target_end"):
            object.__setattr__(self, name, to_timestamp(getattr(self, name), name))
        require_same_tz_kind(original_start=self.original_start, original_end=self.original_end,
                             target_start=self.target_start, target_end=self.target_end)
        if self.original_end == self.original_start:
            raise InvalidInputError("original range has zero length")

    def transform(self, date) -> pd.Timestamp:
        date = to_timestamp(date)
        require_same_tz_kind(date=date, original_start=self.original_start)
        # exact rational scaling to the nanosecond
        scaled = Fraction(_ns(date - self.original_start) * _ns(self.target_end - self.target_start),
                          _ns(self.original_end - self.original_start))
        return self.target_start + pd.Timedelta(round(scaled), unit="ns")

    def apply(self, bundle: HealthBundle, now: Optional[pd.Timestamp] = None) -> HealthBundle:
        export_date = to_timestamp(now, "now") if now is not None else now_like(self.target_end)
        require_same_tz_kind(now=export_date, target_end=self.target_end)
        return _remap_bundle(bundle, self.transform, export_date=export_date,
                             start_date=self.target_start, end_date=self.target_end)
