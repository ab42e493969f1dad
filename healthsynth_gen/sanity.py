from __future__ import annotations
from typing import Optional
import numpy as np
import pandas as pd

from .activities import EXERCISE_MIN_MINUTES
from .io import bundle_to_frames
from .models import HealthBundle
from .presets import GenerationPreset


def _values(samples) -> pd.Series:
    return pd.Series([s.value for s in samples], dtype=float)


def run_sanity_checks(bundle: HealthBundle, preset: Optional[GenerationPreset] = None) -> dict:
    """Lightweight sanity checks designed to catch obvious generator regressions.

    Returns a JSON-serializable dict with metrics + pass/fail flags.
    """
    report = {"summary": {}, "checks": []}

    report["summary"]["start_date"] = bundle.start_date.isoformat()
    report["summary"]["end_date"] = bundle.end_date.isoformat()
    report["summary"]["counts"] = bundle.counts()
    report["summary"]["samples"] = int(bundle.sample_count)

    def add_check(name, ok, details):
        report["checks"].append({"name": name, "ok": bool(ok), "details": details})

    # ranges (only meaningful for unpatterned, generated data)
    if preset is not None:
        preset = GenerationPreset(preset)
        for label, samples, (low, high) in (
            ("HR range", bundle.heart_rate, preset.heart_rate_range),
            ("HRV range", bundle.hrv, preset.hrv_range),
        ):
            vals = _values(samples)
            add_check(label, (vals.between(low, high).all()), {
                "expected": [low, high],
                "min": float(vals.min()) if len(vals) else None,
                "max": float(vals.max()) if len(vals) else None,
                "pct_in_range": float(vals.between(low, high).mean()) if len(vals) else None,
            })

    frames = bundle_to_frames(bundle)
    lo, hi = bundle.start_date, bundle.end_date
    for name, df in frames.items():
        if not len(df):
            continue
        start_col = df.columns[0]
        starts = df[start_col]
        add_check(f"Ordered: {name}", starts.is_monotonic_increasing, {"n": int(len(df))})

        end_col = "end_date" if "end_date" in df.columns else None
        if end_col is None:
            inside = starts.between(lo, hi)
            add_check(f"Inside range: {name}", inside.all(), {"n_outside": int((~inside).sum())})
        else:
            bad = df[end_col] < starts
            add_check(f"Interval end >= start: {name}", not bad.any(), {"n_bad": int(bad.sum())})

    if bundle.exercise_time:
        minutes = np.array([s.minutes for s in bundle.exercise_time], dtype=float)
        add_check("Exercise minutes above threshold", (minutes > EXERCISE_MIN_MINUTES).all(), {
            "min": float(minutes.min()),
            "threshold": EXERCISE_MIN_MINUTES,
        })

    report["summary"]["ok"] = bool(all(c["ok"] for c in report["checks"]))
    return report
