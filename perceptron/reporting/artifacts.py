"""Run artifact helpers: manifest and trained outputs."""

from __future__ import annotations

import json
import platform
import time
from pathlib import Path
from typing import Dict, Mapping

from ..core.network import NetworkState
from ..core.types import TrainingSummary
from ..data.textfiles import write_vectors, write_weights
from ._git import git_sha


def write_manifest(
    path: str | Path,
    *,
    config: Mapping[str, object],
    dataset_provenance: Mapping[str, object],
) -> str:
    """Write a manifest JSON file capturing reproducibility metadata."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "dataset": dict(dataset_provenance),
        "environment": {"python": platform.python_version()},
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)


def write_run_outputs(run_dir: str | Path, state: NetworkState, summary: TrainingSummary) -> Dict[str, str]:
    """Persist trained weights, per-case outputs and the training summary."""

    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "weights": write_weights(run_dir / "weights.txt", state),
        "outputs": write_vectors(run_dir / "outputs.txt", [case.actual for case in summary.cases]),
    }
    cases_path = run_dir / "cases.json"
    cases_path.write_text(json.dumps([case.to_dict() for case in summary.cases], indent=2))
    paths["cases"] = str(cases_path)
    result_path = run_dir / "result.json"
    result_path.write_text(json.dumps(summary.to_dict(), indent=2))
    paths["result"] = str(result_path)
    return paths


__all__ = ["write_manifest", "write_run_outputs"]
