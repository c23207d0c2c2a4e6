"""Headless-safe plotting of the training error curve."""

from __future__ import annotations

import math
from pathlib import Path
from typing import List, Tuple

from ..core.types import TrainingSummary


class PlotAdapter:
    """Collect ``total_error`` per emitted iteration and save ``error.png``.

    The figure shows the in-loop error curve, the stopping threshold as a
    dashed line and, when a :class:`TrainingSummary` is passed to
    :meth:`close`, the error recomputed after training as a marked point.
    """

    def __init__(self, run_dir: str | Path, enable_plots: bool = False, stopping_error: float | None = None):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.stopping_error = stopping_error
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_epoch(self, epoch: int, metrics) -> None:
        if not self.enable_plots:
            return
        error = float(metrics.get("total_error", math.nan))
        if math.isfinite(error):
            self._history.append((epoch, error))

    @property
    def history(self) -> List[Tuple[int, float]]:
        return list(self._history)

    def close(self, summary: TrainingSummary | None = None) -> Path | None:
        if not self.enable_plots or (not self._history and summary is None):
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        fig, ax = plt.subplots()
        values = [error for _, error in self._history]
        if self._history:
            iterations, errors = zip(*self._history)
            ax.plot(iterations, errors, label="total error")
        if self.stopping_error is not None and self.stopping_error > 0:
            ax.axhline(self.stopping_error, linestyle="--", color="grey", label="stopping error")
            values.append(self.stopping_error)
        title = "Training Curve"
        if summary is not None:
            ax.plot([summary.iterations], [summary.total_error], marker="o", linestyle="", label="final")
            values.append(summary.total_error)
            title = f"{title} ({summary.stop_reason.value}, {summary.iterations} iterations)"
        # log scale needs strictly positive values, e.g. not a zero final error
        if values and min(values) > 0:
            ax.set_yscale("log")
        ax.set_xlabel("Iteration")
        ax.set_ylabel("Total error")
        ax.set_title(title)
        ax.legend()
        plot_path = self.run_dir / "error.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path

    __call__ = on_epoch
