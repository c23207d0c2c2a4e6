"""Weight initialisation policies: load from a flat sequence or randomise."""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from typing import Iterable, List

import numpy as np

from .errors import ConfigurationError, DataFormatError, DataShapeError
from .network import NetworkState
from .types import Topology

logger = logging.getLogger(__name__)


def weight_count(topology: Topology) -> int:
    """Number of meaningful weights, ``sum(sizes[m] * sizes[m + 1])``."""

    return int(sum(prev * nxt for prev, nxt in topology.connectivity()))


def _to_float(value: object, position: int) -> float:
    if isinstance(value, bool):
        raise DataFormatError(f"Weight value #{position} is not numeric: {value!r}")
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, (str, bytes)):
        try:
            return float(value)
        except ValueError as exc:
            raise DataFormatError(f"Weight value #{position} is not numeric: {value!r}") from exc
    raise DataFormatError(f"Weight value #{position} is not numeric: {value!r}")


def load_weights(state: NetworkState, values: Iterable[object]) -> NetworkState:
    """Assign ``values`` to ``state.weights`` in canonical ``m, prev, next`` order."""

    required = weight_count(state.topology)
    flat: List[float] = []
    surplus = 0
    for position, value in enumerate(values):
        if len(flat) == required:
            surplus += 1
            continue
        flat.append(_to_float(value, position))

    if len(flat) < required:
        raise DataShapeError(
            f"Topology {state.topology} requires {required} weights but only {len(flat)} were supplied"
        )
    if surplus:
        warnings.warn(
            f"Ignoring {surplus} surplus weight value(s) beyond the {required} required",
            RuntimeWarning,
            stacklevel=2,
        )

    offset = 0
    for m, (prev, nxt) in enumerate(state.topology.connectivity()):
        block = np.asarray(flat[offset : offset + prev * nxt], dtype=np.float64)
        state.weights[m][:, :] = block.reshape(prev, nxt)
        offset += prev * nxt
    logger.debug("Loaded %d weights into %s network", required, state.topology)
    return state


def randomize_weights(
    state: NetworkState,
    low: float,
    high: float,
    rng: np.random.Generator | None = None,
) -> NetworkState:
    """Draw every weight independently from the uniform range ``[low, high)``."""

    low = float(low)
    high = float(high)
    if not (math.isfinite(low) and math.isfinite(high)) or low >= high:
        raise ConfigurationError(f"Random weight bounds must satisfy low < high, got [{low}, {high})")
    rng = rng if rng is not None else np.random.default_rng()
    for m, (prev, nxt) in enumerate(state.topology.connectivity()):
        state.weights[m][:, :] = rng.uniform(low, high, size=(prev, nxt))
    logger.debug("Randomised %s network weights in [%s, %s)", state.topology, low, high)
    return state


def flatten_weights(state: NetworkState) -> List[float]:
    """Inverse of :func:`load_weights`: the weights in canonical order."""

    return [float(v) for w in state.weights for v in w.reshape(-1)]


__all__ = ["weight_count", "load_weights", "randomize_weights", "flatten_weights"]
