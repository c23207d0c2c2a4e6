"""Gradient-descent training loop for a :class:`NetworkState`."""

from __future__ import annotations

import logging
import math
import numbers
import time
from typing import Iterable, List, Mapping, Sequence

import numpy as np

from ..core.errors import ConfigurationError
from ..core.network import NetworkState
from ..core.propagation import backward, forward
from ..core.types import Array, CaseReport, StopReason, TrainingCase, TrainingSummary

logger = logging.getLogger(__name__)


def case_error(target: Array, actual: Array) -> float:
    """Half the sum of squared differences for one case."""

    diff = np.asarray(target, dtype=np.float64) - np.asarray(actual, dtype=np.float64)
    return float(0.5 * np.dot(diff, diff))


def total_error(case_errors: Iterable[float]) -> float:
    """Root-sum-square of the per-case errors (not their mean or sum)."""

    errors = np.asarray(list(case_errors), dtype=np.float64)
    return float(math.sqrt(float(np.dot(errors, errors))))


class Trainer:
    """Run online gradient descent until the error threshold or iteration cap.

    Cases are visited in their given order every epoch and each case's
    weight update is visible to the next case's forward pass.
    """

    def __init__(
        self,
        state: NetworkState,
        *,
        lr: float,
        max_iterations: int,
        stopping_error: float,
        callbacks: Sequence[object] | None = None,
        log_every: int = 1,
    ) -> None:
        if not math.isfinite(lr) or lr <= 0:
            raise ConfigurationError(f"Learning rate must be positive, got {lr}")
        if (
            isinstance(max_iterations, bool)
            or not isinstance(max_iterations, numbers.Real)
            or not math.isfinite(max_iterations)
            or int(max_iterations) != max_iterations
            or max_iterations < 0
        ):
            raise ConfigurationError(f"max_iterations must be a non-negative integer, got {max_iterations}")
        if math.isnan(stopping_error) or stopping_error < 0:
            raise ConfigurationError(f"stopping_error must be non-negative, got {stopping_error}")
        self.state = state
        self.lr = float(lr)
        self.max_iterations = int(max_iterations)
        self.stopping_error = float(stopping_error)
        self.callbacks = list(callbacks or [])
        self.log_every = max(1, int(log_every))

    def run_epoch(self, cases: Sequence[TrainingCase]) -> float:
        """One forward/backward sweep over ``cases``; returns the epoch's total error."""

        errors: List[float] = []
        for case in cases:
            actual = forward(self.state, case.inputs)
            backward(self.state, case.targets, actual, self.lr)
            errors.append(case_error(case.targets, actual))
        return total_error(errors)

    def run(self, cases: Sequence[TrainingCase]) -> TrainingSummary:
        logger.info(
            "Training %s network on %d cases (lr=%s, max_iterations=%d, stopping_error=%s)",
            self.state.topology,
            len(cases),
            self.lr,
            self.max_iterations,
            self.stopping_error,
        )
        start = time.perf_counter()
        iterations = 0
        error = math.inf
        while error >= self.stopping_error and iterations < self.max_iterations:
            error = self.run_epoch(cases)
            iterations += 1
            if iterations % self.log_every == 0:
                self._emit_epoch(iterations, {"total_error": error})

        if iterations == self.max_iterations:
            reason = StopReason.MAX_ITERATIONS_REACHED
        else:
            reason = StopReason.ERROR_THRESHOLD_REACHED
        if iterations % self.log_every != 0:
            self._emit_epoch(iterations, {"total_error": error})

        reports = self.report(cases)
        final_error = total_error(case_error(r.targets, r.actual) for r in reports)
        elapsed = time.perf_counter() - start
        logger.info("Stopped after %d iterations: %s (total error %.6g)", iterations, reason.value, final_error)
        return TrainingSummary(
            iterations=iterations,
            stop_reason=reason,
            total_error=final_error,
            elapsed_seconds=elapsed,
            cases=reports,
        )

    def report(self, cases: Sequence[TrainingCase]) -> List[CaseReport]:
        """Forward each case once more and collect (inputs, targets, actual)."""

        return [
            CaseReport(inputs=case.inputs.copy(), targets=case.targets.copy(), actual=forward(self.state, case.inputs))
            for case in cases
        ]

    # ------------------------------------------------------------------
    # Internal helpers

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["Trainer", "case_error", "total_error"]
