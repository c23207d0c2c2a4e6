"""Command line entry point for training perceptron networks."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from perceptron.core.errors import capture
from perceptron.training import pipelines


def _format_result(result) -> str:
    summary = result.summary
    payload = {
        "iterations": summary.iterations,
        "stop_reason": summary.stop_reason.value,
        "total_error": summary.total_error,
        "run_dir": result.run_dir,
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
        "weights": result.weights_path,
    }
    if result.summary_path:
        payload["summary"] = result.summary_path
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor-2-2-1",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON/YAML config override, or a legacy line-oriented .txt config",
    )
    parser.add_argument("--seed", type=int, help="Seed used for random weight initialisation")
    parser.add_argument("--lr", type=float, help="Learning rate (lambda)")
    parser.add_argument("--max-iterations", type=int, help="Iteration cap")
    parser.add_argument("--stopping-error", type=float, help="Total error threshold")
    parser.add_argument("--run-dir", type=Path, help="Directory receiving run artifacts")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Save an error curve to the run directory"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def _resolve_config(args: argparse.Namespace) -> dict:
    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = json.loads(json.dumps(pipelines.load_config_file(args.config)))
        if {"data", "model", "train"} <= set(override.keys()):
            config = override
        else:
            config = _merge(config, override)

    train = config.setdefault("train", {})
    if args.seed is not None:
        train["seed"] = int(args.seed)
    if args.lr is not None:
        train["lr"] = float(args.lr)
    if args.max_iterations is not None:
        train["max_iterations"] = int(args.max_iterations)
    if args.stopping_error is not None:
        train["stopping_error"] = float(args.stopping_error)
    if args.run_dir is not None:
        train["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train["enable_plots"] = True
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    resolved = capture(_resolve_config, args)
    if resolved.ok:
        config = resolved.value
        if args.dump_config:
            args.dump_config.parent.mkdir(parents=True, exist_ok=True)
            args.dump_config.write_text(json.dumps(config, indent=2))
        resolved = capture(pipelines.run_pipeline, config)

    if not resolved.ok:
        print(f"error[{resolved.kind.value}]: {resolved.error}", file=sys.stderr)
        raise SystemExit(2)

    print(_format_result(resolved.value))


if __name__ == "__main__":
    main()
