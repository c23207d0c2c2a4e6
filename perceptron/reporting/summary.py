"""Deterministic summary of a metrics JSONL history."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Mapping

import numpy as np

_SKIP = {"iteration", "seed"}


def _extract_numeric(records: Iterable[Mapping[str, object]]) -> Mapping[str, list[float]]:
    metrics: dict[str, list[float]] = {}
    for record in records:
        for key, value in record.items():
            if key in _SKIP or isinstance(value, bool):
                continue
            if isinstance(value, (int, float)):
                metrics.setdefault(key, []).append(float(value))
    return metrics


def build_summary(records: list[Mapping[str, object]], training: Mapping[str, object]) -> Mapping[str, object]:
    summary_metrics: dict[str, Mapping[str, float]] = {}
    for name, values in _extract_numeric(records).items():
        arr = np.asarray(values, dtype=np.float64)
        summary_metrics[name] = {
            "min": float(np.min(arr)),
            "max": float(np.max(arr)),
            "first": float(arr[0]),
            "last": float(arr[-1]),
        }
    return {
        "version": 1,
        "records": len(records),
        "metrics": summary_metrics,
        "training": dict(training),
    }


def write_summary(
    metrics_jsonl: str | Path,
    out_summary_json: str | Path,
    *,
    training: Mapping[str, object] | None = None,
) -> str:
    """Write a summary for ``metrics_jsonl``; ``training`` is embedded verbatim."""

    metrics_path = Path(metrics_jsonl)
    out_path = Path(out_summary_json)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    records: list[Mapping[str, object]] = []
    if metrics_path.exists():
        for line in metrics_path.read_text().splitlines():
            line = line.strip()
            if line:
                records.append(json.loads(line))

    summary = build_summary(records, training or {})
    out_path.write_text(json.dumps(summary, sort_keys=True, indent=2))
    return str(out_path)


__all__ = ["build_summary", "write_summary"]
