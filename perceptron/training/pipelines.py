"""Pipeline assembly: config mapping in, trained network and run artifacts out."""

from __future__ import annotations

import json
import math
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping, Sequence

import numpy as np

from ..core.errors import ConfigurationError, DataFormatError, ResourceNotFoundError
from ..core.network import NetworkState, build_network
from ..core.types import RunResult
from ..core.weights import load_weights, randomize_weights, weight_count
from ..data import registry
from ..data.textfiles import DEFAULT_STOPPING_ERROR, read_legacy_config, read_weights
from ..reporting.artifacts import write_manifest, write_run_outputs
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from ..reporting.summary import write_summary
from .dataset import build_training_set
from .trainer import Trainer

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-2-2-1": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "d_in": 2,
            "hidden": [2],
            "d_out": 1,
            "weights": {"mode": "randomize", "low": -1.5, "high": 1.5},
        },
        "train": {
            "lr": 0.5,
            "max_iterations": 100000,
            "stopping_error": 0.001,
            "seed": 0,
            "log_every": 1000,
            "run_dir": "runs/xor-2-2-1",
            "enable_plots": False,
        },
    },
    "and-2-2-1": {
        "data": {"name": "and", "options": {}},
        "model": {
            "d_in": 2,
            "hidden": [2],
            "d_out": 1,
            "weights": {"mode": "randomize", "low": -1.5, "high": 1.5},
        },
        "train": {
            "lr": 0.5,
            "max_iterations": 20000,
            "stopping_error": 0.01,
            "seed": 0,
            "log_every": 500,
            "run_dir": "runs/and-2-2-1",
            "enable_plots": False,
        },
    },
    "or-2-2-1": {
        "data": {"name": "or", "options": {}},
        "model": {
            "d_in": 2,
            "hidden": [2],
            "d_out": 1,
            "weights": {"mode": "randomize", "low": -1.5, "high": 1.5},
        },
        "train": {
            "lr": 0.5,
            "max_iterations": 20000,
            "stopping_error": 0.01,
            "seed": 0,
            "log_every": 500,
            "run_dir": "runs/or-2-2-1",
            "enable_plots": False,
        },
    },
    "xor-2-4-3-1": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "d_in": 2,
            "hidden": [4, 3],
            "d_out": 1,
            "weights": {"mode": "randomize", "low": -1.0, "high": 1.0},
        },
        "train": {
            "lr": 1.0,
            "max_iterations": 50000,
            "stopping_error": 0.001,
            "seed": 3,
            "log_every": 1000,
            "run_dir": "runs/xor-2-4-3-1",
            "enable_plots": False,
        },
    },
}

_DEFAULT_LOG_EVERY = 100


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Mapping[str, object]:
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise ConfigurationError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def load_config_file(path: str | Path) -> Mapping[str, object]:
    """Read a JSON, YAML or legacy line-oriented (``.txt``) config file."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return read_legacy_config(path)
    if not path.exists():
        raise ResourceNotFoundError(f"The configuration file could not be found: {path}")
    text = path.read_text()
    if suffix in {".yaml", ".yml"}:
        import yaml

        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise DataFormatError(f"Could not parse {path.name} as YAML") from exc
    elif suffix == ".json":
        try:
            data = json.loads(text or "{}")
        except json.JSONDecodeError as exc:
            raise DataFormatError(f"Could not parse {path.name} as JSON") from exc
    else:
        raise ConfigurationError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Config {path.name} must decode to a mapping")
    return data


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Build, initialise and train a network as described by ``config``."""

    missing = {"data", "model", "train"} - set(config)
    if missing:
        raise ConfigurationError(f"Config is missing required sections: {', '.join(sorted(missing))}")
    data_cfg = _section(config["data"], "data")
    model_cfg = _section(config["model"], "model")
    train_cfg = _section(config["train"], "train")

    options = _section(data_cfg.get("options", {}), "data.options")
    dataset = registry.get_dataset(str(data_cfg.get("name", "")), **options)
    hidden = model_cfg.get("hidden", [])
    if not isinstance(hidden, (list, tuple)):
        raise ConfigurationError(f"model.hidden must be a list of layer sizes, got {hidden!r}")
    state = build_network(
        model_cfg.get("d_in", dataset.d_in),
        list(hidden),
        model_cfg.get("d_out", dataset.d_out),
    )
    cases = build_training_set(state.topology, dataset.pairs)

    seed = _integer(train_cfg, "seed", 0)
    weights_cfg = _section(model_cfg.get("weights", {"mode": "randomize"}), "model.weights")
    _initialise_weights(state, weights_cfg, seed)

    lr = _number(train_cfg, "lr", 0.5)
    max_iterations = _integer(train_cfg, "max_iterations", 100000)
    stopping_error = _number(train_cfg, "stopping_error", DEFAULT_STOPPING_ERROR)
    log_every = _integer(train_cfg, "log_every", _DEFAULT_LOG_EVERY)

    run_dir = _resolve_run_dir(train_cfg, dataset.name, state)
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        dataset_name=dataset.name,
        dims=state.layer_sizes,
        cases=len(cases),
        lr=lr,
        max_iterations=max_iterations,
        stopping_error=stopping_error,
        param_count=weight_count(state.topology),
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", seed=seed)
    csv_sink = CsvSink(run_dir / "metrics.csv")
    plots = PlotAdapter(
        run_dir,
        enable_plots=bool(train_cfg.get("enable_plots", False)),
        stopping_error=stopping_error,
    )
    trainer = Trainer(
        state,
        lr=lr,
        max_iterations=max_iterations,
        stopping_error=stopping_error,
        callbacks=[jsonl, csv_sink, plots],
        log_every=log_every,
    )
    summary = trainer.run(cases)
    plots.close(summary)

    outputs = write_run_outputs(run_dir, state, summary)
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=_safe_config(config),
        dataset_provenance=dataset.provenance,
    )
    deterministic = {k: v for k, v in summary.to_dict().items() if k != "elapsed_seconds"}
    summary_path = write_summary(jsonl.path, run_dir / "summary.json", training=deterministic)

    return RunResult(
        summary=summary,
        run_dir=str(run_dir),
        metrics_path=str(jsonl.path),
        manifest_path=manifest,
        summary_path=summary_path,
        weights_path=outputs["weights"],
    )


def _number(cfg: Mapping[str, object], key: str, default: float) -> float:
    value = cfg.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be numeric, got {value!r}")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be numeric, got {value!r}") from exc
    if math.isnan(number):
        raise ConfigurationError(f"{key} must not be NaN")
    return number


def _integer(cfg: Mapping[str, object], key: str, default: int) -> int:
    number = _number(cfg, key, default)
    if not math.isfinite(number) or not number.is_integer():
        raise ConfigurationError(f"{key} must be a whole number, got {cfg.get(key, default)!r}")
    return int(number)


def _section(value: object, name: str) -> Dict[str, object]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{name} must be a mapping, got {value!r}")
    return dict(value)


def _initialise_weights(state: NetworkState, weights_cfg: Mapping[str, object], seed: int) -> None:
    mode = str(weights_cfg.get("mode", "randomize"))
    if mode == "randomize":
        low = _number(weights_cfg, "low", -1.0)
        high = _number(weights_cfg, "high", 1.0)
        randomize_weights(state, low, high, rng=np.random.default_rng(seed))
    elif mode == "load":
        if "values" in weights_cfg:
            values: Sequence[object] = list(weights_cfg["values"])  # type: ignore[arg-type]
        elif "path" in weights_cfg:
            values = read_weights(str(weights_cfg["path"]))
        else:
            raise ConfigurationError("Weight mode 'load' requires either 'values' or 'path'")
        load_weights(state, values)
    else:
        raise ConfigurationError(f"Unknown weight mode {mode!r}; expected 'randomize' or 'load'")


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str, state: NetworkState) -> Path:
    if "run_dir" in train_cfg:
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / f"{dataset}-{state.topology}"


def _safe_config(config: Mapping[str, object]) -> Mapping[str, object]:
    return json.loads(json.dumps(config))


def _print_startup_summary(
    *,
    dataset_name: str,
    dims: Sequence[int],
    cases: int,
    lr: float,
    max_iterations: int,
    stopping_error: float,
    param_count: int,
) -> None:
    print("=== Perceptron run ===")
    print(f"Dataset        : {dataset_name} ({cases} cases)")
    print(f"Layer sizes    : {list(dims)}")
    print(f"Learning rate  : {lr}")
    print(f"Max iterations : {max_iterations}")
    print(f"Stopping error : {stopping_error}")
    print(f"Weights        : {param_count}")
    print("======================")


__all__ = ["run_pipeline", "load_preset", "load_config_file", "presets"]
