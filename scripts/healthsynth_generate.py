#!/usr/bin/env python3
"""CLI: HealthSynth synthetic health bundle generator.

Examples:
  python healthsynth_generate.py --out ./out --preset higher_stress --n-days 14 --seed 42
  python healthsynth_generate.py --out ./out --existing ./export.json --manipulation generate_missing
  python healthsynth_generate.py --out ./out --config ./config.json --format all
"""
from __future__ import annotations
import argparse
import logging
from healthsynth_gen.config import GeneratorConfig
from healthsynth_gen.pipeline import generate_dataset
from healthsynth_gen.presets import DataManipulation, GenerationPreset, PatternType

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--out", required=True, help="Output directory")
    p.add_argument("--config", default=None, help="Optional config JSON (overrides defaults)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--preset", type=str, default=None, choices=[m.value for m in GenerationPreset])
    p.add_argument("--manipulation", type=str, default=None, choices=[m.value for m in DataManipulation])
    p.add_argument("--start-date", type=str, default=None)
    p.add_argument("--n-days", type=int, default=None)
    p.add_argument("--include-menstrual", action="store_true", help="Generate menstrual flow samples")
    p.add_argument("--existing", type=str, default=None, help="Existing bundle JSON to keep/fill/convert")
    p.add_argument("--pattern", type=str, default=None, choices=[m.value for m in PatternType])
    p.add_argument("--pattern-seed", type=int, default=None)
    p.add_argument("--transpose-to-today", action="store_true", help="Shift the result so it ends now")
    p.add_argument("--format", type=str, default=None, choices=["json", "csv", "parquet", "all"])
    p.add_argument("--no-checks", action="store_true", help="Skip sanity checks")
    return p.parse_args()


def main():
    args = parse_args()
    cfg = GeneratorConfig()
    if args.config:
        cfg = GeneratorConfig.from_json(args.config)

    # apply CLI overrides
    for key, val in {
        "seed": args.seed,
        "preset": args.preset,
        "manipulation": args.manipulation,
        "start_date": args.start_date,
        "n_days": args.n_days,
        "existing_bundle": args.existing,
        "pattern": args.pattern,
        "pattern_seed": args.pattern_seed,
        "out_format": args.format,
    }.items():
        if val is not None:
            setattr(cfg, key, val)
    if args.include_menstrual:
        cfg.include_menstrual_data = True
    if args.transpose_to_today:
        cfg.transpose_to_today = True

    res = generate_dataset(cfg, out_dir=args.out, run_checks=not args.no_checks)
    logger.info("Done.")
    logger.info("metadata.json: %s", res["metadata_path"])
    for k, v in res["outputs"].items():
        logger.info("%s: %s", k, v)


if __name__ == "__main__":
    main()
