"""Forward propagation and generalised backpropagation over a :class:`NetworkState`."""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from .activations import sigmoid, sigmoid_deriv
from .errors import DataShapeError
from .network import NetworkState
from .types import Array


def _as_vector(values: Sequence[float] | Array, size: int, what: str) -> Array:
    vec = np.asarray(values, dtype=np.float64).reshape(-1)
    if vec.shape[0] != size:
        raise DataShapeError(f"Expected {size} {what} values, got {vec.shape[0]}")
    return vec


def forward(state: NetworkState, inputs: Sequence[float] | Array) -> Array:
    """Compute every layer's activations for ``inputs`` and return the outputs.

    The input layer is copied into both the raw and transformed slots. Each
    later layer ``l`` is ``raw[l] = transformed[l - 1] @ weights[l - 1]``
    followed by ``transformed[l] = sigmoid(raw[l])``.
    """

    x = _as_vector(inputs, state.layer_sizes[0], "input")
    state.raw[0][:] = x
    state.transformed[0][:] = x
    for layer in range(1, state.topology.layer_count):
        np.matmul(state.transformed[layer - 1], state.weights[layer - 1], out=state.raw[layer])
        state.transformed[layer][:] = sigmoid(state.raw[layer])
    return state.outputs()


def backward(
    state: NetworkState,
    target: Sequence[float] | Array,
    actual: Sequence[float] | Array,
    lr: float,
) -> List[Array]:
    """Backpropagate one case's error and update ``state.weights`` in place.

    Must follow a :func:`forward` call on the same inputs, since the raw and
    transformed activations it left behind are read here. Returns the per-layer
    ``psi`` terms (``omega`` scaled by the local sigmoid derivative).
    """

    d_out = state.layer_sizes[-1]
    target = _as_vector(target, d_out, "target")
    actual = _as_vector(actual, d_out, "output")
    last = state.topology.layer_count - 1

    psi: List[Array] = [np.empty(0)] * (last + 1)
    omega = target - actual
    psi[last] = omega * sigmoid_deriv(state.raw[last])

    for layer in range(last - 1, -1, -1):
        weights = state.weights[layer]
        # omega for this layer reads weights[layer] before it is updated below
        omega = weights @ psi[layer + 1]
        psi[layer] = omega * sigmoid_deriv(state.raw[layer])
        weights += lr * np.outer(state.transformed[layer], psi[layer + 1])
    return psi


def evaluate(state: NetworkState, inputs: Iterable[Sequence[float] | Array]) -> List[Array]:
    """Run :func:`forward` over each input vector, without touching the weights."""

    return [forward(state, x) for x in inputs]


__all__ = ["forward", "backward", "evaluate"]
