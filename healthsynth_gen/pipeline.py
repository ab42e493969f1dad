from __future__ import annotations
import json, hashlib, platform, datetime, sys
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import pandas as pd

from .config import GeneratorConfig
from .errors import InvalidInputError
from .io import load_bundle, write_outputs
from .manipulation import generate_health_data
from .patterns import apply_heart_rate_pattern, apply_hrv_pattern
from .presets import DataManipulation
from .sanity import run_sanity_checks
from .transpose import transpose_bundle_to_today

logger = logging.getLogger(__name__)


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024*1024), b""):
            h.update(chunk)
    return h.hexdigest()


def generate_dataset(cfg: GeneratorConfig, out_dir: str, run_checks: bool = True,
                     now: Optional[pd.Timestamp] = None) -> dict:
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    try:
        preset = cfg.preset_enum()
        manipulation = cfg.manipulation_enum()
        pattern = cfg.pattern_enum()
    except ValueError as e:
        raise InvalidInputError(f"Invalid config: {e}") from e

    start, end = cfg.date_range(now=now)

    # 1) existing data (optional)
    existing = None
    if cfg.existing_bundle:
        existing = load_bundle(cfg.existing_bundle)
        logger.info("Loaded existing bundle %s (%d samples)", cfg.existing_bundle, existing.sample_count)

    # 2) generate / manipulate
    bundle = generate_health_data(
        preset,
        manipulation,
        start,
        end,
        existing_bundle=existing,
        seed=cfg.seed,
        include_menstrual_data=cfg.include_menstrual_data,
        now=now,
    )

    # 3) reshape HR / HRV
    if pattern is not None:
        pattern_seed = cfg.pattern_seed if cfg.pattern_seed is not None else cfg.seed
        bundle = replace(
            bundle,
            heart_rate=apply_heart_rate_pattern(pattern, bundle.heart_rate, seed=pattern_seed),
            hrv=apply_hrv_pattern(pattern, bundle.hrv, seed=pattern_seed),
        )
        logger.info("Applied %s pattern (seed=%s)", pattern.value, pattern_seed)

    # 4) move to today
    if cfg.transpose_to_today:
        bundle = transpose_bundle_to_today(bundle, now=now)

    # 5) write outputs + metadata
    written = write_outputs(bundle, out_path, cfg)

    meta = {
        "generated_at_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds"),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "config": cfg.to_dict(),
        "range": {
            "start_date": bundle.start_date.isoformat(),
            "end_date": bundle.end_date.isoformat(),
            "export_date": bundle.export_date.isoformat(),
        },
        "counts": bundle.counts(),
        "files": {},
    }

    for name, path in written.items():
        meta["files"][name] = {
            "path": str(path),
            "sha256": _sha256_file(Path(path)),
        }

    meta_path = out_path / "metadata.json"
    with open(meta_path, "w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    if run_checks:
        # preset ranges only hold for freshly generated, unpatterned HR/HRV
        fresh = pattern is None and (existing is None or manipulation is DataManipulation.SMOOTH_REPLACE)
        report = run_sanity_checks(bundle, preset=preset if fresh else None)
        report_path = out_path / "sanity_report.json"
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        if not report["summary"]["ok"]:
            failed = [c["name"] for c in report["checks"] if not c["ok"]]
            logger.warning("Sanity checks failed: %s", ", ".join(failed))

    logger.info("Wrote %d files to %s", len(written), out_path)
    return {"metadata_path": str(meta_path), "outputs": written, "bundle": bundle}
