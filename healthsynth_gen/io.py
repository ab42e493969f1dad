"""Bundle serialization (JSON document) and tabular export (CSV / parquet).

The JSON document uses camelCase keys and ISO-8601 timestamps. Absent optional series and
``None`` sample fields are omitted; an empty series is written as ``[]`` so the
absent/empty distinction survives a round trip.
"""

from __future__ import annotations

import json
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd

from .config import GeneratorConfig
from .errors import BundleFormatError, InvalidInputError
from .models import SERIES, HealthBundle
from .utils import to_timestamp

PathLike = Union[str, Path]


def _encode_value(value: Any) -> Any:
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _sample_to_dict(sample) -> Dict[str, Any]:
    out = {}
    for f in fields(sample):
        value = getattr(sample, f.name)
        if value is None:
            continue
        out[f.metadata["json"]] = _encode_value(value)
    return out


def bundle_to_dict(bundle: HealthBundle) -> Dict[str, Any]:
    doc = {
        "exportDate": bundle.export_date.isoformat(),
        "startDate": bundle.start_date.isoformat(),
        "endDate": bundle.end_date.isoformat(),
    }
    for spec, samples in bundle.iter_series():
        doc[spec.json_key] = [_sample_to_dict(s) for s in samples]
    return doc


def _decode_time(raw: Any, where: str) -> pd.Timestamp:
    # ISO-8601 strings only; pandas would read a bare number as epoch nanoseconds
    if not isinstance(raw, str):
        raise BundleFormatError(f"{where}: expected an ISO-8601 string, got {raw!r}")
    try:
        return to_timestamp(raw, where)
    except InvalidInputError as e:
        raise BundleFormatError(str(e)) from e


def _decode_scalar(f, raw: Any, where: str) -> Any:
    meta = f.metadata
    if meta.get("time"):
        return _decode_time(raw, where)
    if meta.get("enum") is not None:
        try:
            return meta["enum"](raw)
        except ValueError as e:
            raise BundleFormatError(f"{where}: unknown value {raw!r}") from e
    if f.name == "labels":
        if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
            raise BundleFormatError(f"{where}: expected a list of strings")
        return tuple(raw)
    if f.name == "is_cycle_start":
        if not isinstance(raw, bool):
            raise BundleFormatError(f"{where}: expected a boolean")
        return raw
    if f.name in ("source", "workout_type"):
        if not isinstance(raw, str):
            raise BundleFormatError(f"{where}: expected a string")
        return raw
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise BundleFormatError(f"{where}: expected a number, got {raw!r}")
    return float(raw)


def _sample_from_dict(sample_type: type, raw: Any, where: str):
    if not isinstance(raw, dict):
        raise BundleFormatError(f"{where}: expected an object")
    kwargs = {}
    for f in fields(sample_type):
        key = f.metadata["json"]
        if key not in raw or raw[key] is None:
            if f.metadata.get("optional"):
                kwargs[f.name] = None
                continue
            raise BundleFormatError(f"{where}: missing '{key}'")
        kwargs[f.name] = _decode_scalar(f, raw[key], f"{where}.{key}")
    return sample_type(**kwargs)


def bundle_from_dict(doc: Any) -> HealthBundle:
    if not isinstance(doc, dict):
        raise BundleFormatError("bundle document must be a JSON object")
    header = {}
    for key, name in (("exportDate", "export_date"), ("startDate", "start_date"), ("endDate", "end_date")):
        if key not in doc:
            raise BundleFormatError(f"missing '{key}'")
        header[name] = _decode_time(doc[key], key)

    series = {}
    for spec in SERIES:
        raw = doc.get(spec.json_key)
        if raw is None:
            if spec.required:
                raise BundleFormatError(f"missing required series '{spec.json_key}'")
            series[spec.attr] = None
            continue
        if not isinstance(raw, list):
            raise BundleFormatError(f"'{spec.json_key}' must be a list")
        series[spec.attr] = [
            _sample_from_dict(spec.sample_type, item, f"{spec.json_key}[{i}]") for i, item in enumerate(raw)
        ]
    return HealthBundle(**header, **series)


def dumps_bundle(bundle: HealthBundle, indent: int = 2) -> str:
    return json.dumps(bundle_to_dict(bundle), indent=indent)


def loads_bundle(text: str) -> HealthBundle:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise BundleFormatError(f"invalid JSON: {e}") from e
    return bundle_from_dict(doc)


def save_bundle(bundle: HealthBundle, path: PathLike) -> Path:
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_bundle(bundle))
    return path


def load_bundle(path: PathLike) -> HealthBundle:
    with open(path, "r", encoding="utf-8") as f:
        return loads_bundle(f.read())


def _cell(value: Any) -> Any:
    # timestamps stay as Timestamps so pandas keeps a datetime dtype
    if isinstance(value, pd.Timestamp):
        return value
    return _encode_value(value)


def bundle_to_frames(bundle: HealthBundle) -> Dict[str, pd.DataFrame]:
    """One DataFrame per present series, columns named after the sample fields."""
    frames = {}
    for spec, samples in bundle.iter_series():
        columns = [f.name for f in fields(spec.sample_type)]
        rows = [{name: _cell(getattr(s, name)) for name in columns} for s in samples]
        frames[spec.attr] = pd.DataFrame.from_records(rows, columns=columns)
    return frames


def _write_csv(df: pd.DataFrame, path: Path):
    df.to_csv(path, index=False)


def _write_parquet(df: pd.DataFrame, path: Path):
    # Try pyarrow; if missing, raise a clear error
    try:
        df.to_parquet(path, index=False)
    except ImportError as e:
        raise RuntimeError(
            "Parquet write failed. Install pyarrow (pip install 'healthsynth-gen[parquet]') or use --format csv."
        ) from e


def write_outputs(bundle: HealthBundle, out_dir: Path, cfg: GeneratorConfig) -> dict:
    written = {}
    out_dir = Path(out_dir)

    fmt = cfg.out_format
    if fmt not in ("json", "csv", "parquet", "all"):
        raise InvalidInputError(f"Unknown out_format {fmt!r}")

    if fmt in ("json", "all"):
        written["bundle_json"] = str(save_bundle(bundle, out_dir / "bundle.json"))

    if fmt in ("csv", "parquet", "all"):
        frames = bundle_to_frames(bundle)
        if fmt in ("csv", "all"):
            for name, df in frames.items():
                p = out_dir / f"{name}.csv"
                _write_csv(df, p)
                written[f"{name}_csv"] = str(p)
        if fmt in ("parquet", "all"):
            for name, df in frames.items():
                p = out_dir / f"{name}.parquet"
                _write_parquet(df, p)
                written[f"{name}_parquet"] = str(p)

    return written
