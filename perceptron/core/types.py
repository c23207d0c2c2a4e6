"""Core typing contracts for the perceptron trainer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class Topology:
    """Ordered layer sizes: input, hidden layers in order, output."""

    layer_sizes: Tuple[int, ...]

    @property
    def layer_count(self) -> int:
        return len(self.layer_sizes)

    @property
    def max_nodes(self) -> int:
        return max(self.layer_sizes)

    @property
    def d_in(self) -> int:
        return self.layer_sizes[0]

    @property
    def d_out(self) -> int:
        return self.layer_sizes[-1]

    def connectivity(self) -> List[Tuple[int, int]]:
        """Return ``(prev, next)`` sizes for every connectivity layer."""

        sizes = self.layer_sizes
        return list(zip(sizes[:-1], sizes[1:]))

    def __str__(self) -> str:
        return "-".join(str(size) for size in self.layer_sizes)


@dataclass(frozen=True)
class TrainingCase:
    """A single (input vector, target vector) pair."""

    inputs: Array
    targets: Array


class StopReason(str, enum.Enum):
    ERROR_THRESHOLD_REACHED = "ERROR_THRESHOLD_REACHED"
    MAX_ITERATIONS_REACHED = "MAX_ITERATIONS_REACHED"


@dataclass(frozen=True)
class CaseReport:
    """Final (input, target, actual) triple reported for one case."""

    inputs: Array
    targets: Array
    actual: Array

    def to_dict(self) -> dict:
        return {
            "inputs": [float(v) for v in self.inputs],
            "targets": [float(v) for v in self.targets],
            "actual": [float(v) for v in self.actual],
        }


@dataclass(frozen=True)
class TrainingSummary:
    """Summary returned by :meth:`perceptron.training.trainer.Trainer.run`."""

    iterations: int
    stop_reason: StopReason
    total_error: float
    elapsed_seconds: float
    cases: List[CaseReport] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "iterations": self.iterations,
            "stop_reason": self.stop_reason.value,
            "total_error": self.total_error,
            "elapsed_seconds": self.elapsed_seconds,
        }


@dataclass(frozen=True)
class RunResult:
    """Paths and summary produced by :func:`perceptron.training.pipelines.run_pipeline`."""

    summary: TrainingSummary
    run_dir: str
    metrics_path: str
    manifest_path: str
    summary_path: str = ""
    weights_path: str = ""
