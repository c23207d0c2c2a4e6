"""Training-set validation against a network topology."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from ..core.errors import ConfigurationError, DataFormatError, DataShapeError
from ..core.types import Array, Topology, TrainingCase


def _vector(values: Sequence[float] | Array, index: int, what: str) -> Array:
    try:
        vec = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise DataFormatError(f"Case {index}: {what} vector is not numeric: {values!r}") from exc
    if vec.ndim != 1:
        raise DataShapeError(f"Case {index}: {what} must be a flat vector, got shape {vec.shape}")
    return vec


def build_training_set(
    topology: Topology,
    cases: Iterable[Tuple[Sequence[float] | Array, Sequence[float] | Array]],
) -> List[TrainingCase]:
    """Validate ``(inputs, targets)`` pairs and return them in their given order.

    Input widths that differ from the input layer raise :class:`DataShapeError`;
    target widths that differ from the output layer raise
    :class:`ConfigurationError`. Nothing is truncated or padded.
    """

    out: List[TrainingCase] = []
    for index, pair in enumerate(cases):
        try:
            inputs, targets = pair
        except (TypeError, ValueError) as exc:
            raise DataShapeError(f"Case {index} must be an (inputs, targets) pair") from exc
        x = _vector(inputs, index, "input")
        y = _vector(targets, index, "target")
        if x.shape[0] != topology.d_in:
            raise DataShapeError(
                f"Case {index}: expected {topology.d_in} inputs for topology {topology}, got {x.shape[0]}"
            )
        if y.shape[0] != topology.d_out:
            raise ConfigurationError(
                f"Case {index}: topology {topology} has {topology.d_out} outputs "
                f"but the target vector has {y.shape[0]}"
            )
        out.append(TrainingCase(inputs=x, targets=y))
    if not out:
        raise DataShapeError("Training set must contain at least one case")
    return out


def pair_vectors(
    inputs: Sequence[Sequence[float]], targets: Sequence[Sequence[float]]
) -> List[Tuple[Sequence[float], Sequence[float]]]:
    """Zip separately stored input and target vectors, checking the counts agree."""

    if len(inputs) != len(targets):
        raise DataShapeError(f"Found {len(inputs)} input vectors but {len(targets)} target vectors")
    return list(zip(inputs, targets))


__all__ = ["build_training_set", "pair_vectors"]
