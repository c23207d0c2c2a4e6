"""Core numerical primitives for the perceptron trainer."""

from . import activations, errors, network, propagation, types, weights

__all__ = ["activations", "errors", "network", "propagation", "types", "weights"]
