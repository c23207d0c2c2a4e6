"""Topology validation and per-layer storage for a feed-forward network."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from .errors import ConfigurationError
from .types import Array, Topology


@dataclass
class NetworkState:
    """Explicit network state handed to the propagation functions.

    Attributes
    ----------
    topology:
        Immutable layer sizes the containers below are sized against.
    weights:
        One array per connectivity layer ``m`` of shape
        ``(layer_sizes[m], layer_sizes[m + 1])``; ``weights[m][prev, next]``
        connects node ``prev`` of layer ``m`` to node ``next`` of layer ``m + 1``.
    raw:
        Pre-activation values per layer, rewritten by every forward pass.
    transformed:
        Post-sigmoid values per layer; the input layer holds the inputs as-is.
    """

    topology: Topology
    weights: List[Array] = field(repr=False)
    raw: List[Array] = field(repr=False)
    transformed: List[Array] = field(repr=False)

    @property
    def layer_sizes(self) -> Sequence[int]:
        return self.topology.layer_sizes

    @property
    def max_nodes(self) -> int:
        return self.topology.max_nodes

    def outputs(self) -> Array:
        return self.transformed[-1].copy()

    def copy(self) -> "NetworkState":
        """Return an independent state, e.g. as scratch space for another worker."""

        return NetworkState(
            topology=self.topology,
            weights=[w.copy() for w in self.weights],
            raw=[r.copy() for r in self.raw],
            transformed=[t.copy() for t in self.transformed],
        )

    def parameter_count(self) -> int:
        return int(sum(int(w.size) for w in self.weights))


def _validate_size(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer layer size, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return int(value)


def validate_topology(d_in: int, hidden: Sequence[int], d_out: int) -> Topology:
    sizes = [_validate_size("input count", d_in)]
    sizes.extend(_validate_size(f"hidden layer {idx}", h) for idx, h in enumerate(hidden))
    sizes.append(_validate_size("output count", d_out))
    return Topology(layer_sizes=tuple(sizes))


def build_network(d_in: int, hidden: Sequence[int], d_out: int) -> NetworkState:
    """Allocate zeroed activation and weight storage for the given topology."""

    topology = validate_topology(d_in, list(hidden), d_out)
    weights = [np.zeros((prev, nxt), dtype=np.float64) for prev, nxt in topology.connectivity()]
    raw = [np.zeros(size, dtype=np.float64) for size in topology.layer_sizes]
    transformed = [np.zeros(size, dtype=np.float64) for size in topology.layer_sizes]
    return NetworkState(topology=topology, weights=weights, raw=raw, transformed=transformed)


__all__ = ["NetworkState", "build_network", "validate_topology"]
