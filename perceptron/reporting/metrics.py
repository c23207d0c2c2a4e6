"""Per-epoch metrics sinks used as :class:`~perceptron.training.trainer.Trainer` callbacks."""

from __future__ import annotations

import csv
import json
import math
from pathlib import Path
from typing import Mapping

from ._git import git_sha


def _numeric(metrics: Mapping[str, float]) -> dict:
    return {
        k: float(v)
        for k, v in metrics.items()
        if isinstance(v, (int, float)) and math.isfinite(float(v))
    }


class JsonlSink:
    """Append-only JSONL writer; one record per emitted epoch."""

    def __init__(self, path: str | Path, *, seed: int | None = None, sha: str | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.seed = seed
        self.sha = sha or git_sha()

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = {"iteration": int(epoch), "seed": self.seed, "sha": self.sha}
        record.update(_numeric(metrics))
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_epoch


class CsvSink:
    """Write ``iteration,total_error`` rows with a stable header."""

    fieldnames = ("iteration", "total_error")

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        row = {"iteration": int(epoch)}
        row.update({k: v for k, v in _numeric(metrics).items() if k in self.fieldnames})
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=list(self.fieldnames))
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(row)


__all__ = ["JsonlSink", "CsvSink"]
