"""Activation utilities for the perceptron trainer."""

from __future__ import annotations

import numpy as np

from .types import Array


def sigmoid(x: Array) -> Array:
    """Return ``1 / (1 + e^-x)`` without overflowing ``exp`` for large ``|x|``."""

    x = np.asarray(x, dtype=np.float64)
    z = np.exp(-np.abs(x))
    return np.where(x >= 0, 1.0 / (1.0 + z), z / (1.0 + z))


def sigmoid_deriv(x: Array) -> Array:
    """Derivative of :func:`sigmoid` evaluated at the raw value ``x``."""

    s = sigmoid(x)
    return s * (1.0 - s)


__all__ = ["sigmoid", "sigmoid_deriv"]
