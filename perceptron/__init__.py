"""Feed-forward perceptron trainer with generalised backpropagation."""

from .core import activations, errors, network, propagation, types, weights  # noqa: F401
from .core.errors import (
    ConfigurationError,
    DataFormatError,
    DataShapeError,
    ErrorKind,
    PerceptronError,
    ResourceNotFoundError,
    Result,
    capture,
)
from .core.network import NetworkState, build_network
from .core.propagation import backward, evaluate, forward
from .core.types import StopReason, Topology, TrainingSummary
from .core.weights import load_weights, randomize_weights
from .training.dataset import build_training_set
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import Trainer, case_error, total_error

__all__ = [
    "ConfigurationError",
    "DataFormatError",
    "DataShapeError",
    "ErrorKind",
    "NetworkState",
    "PerceptronError",
    "ResourceNotFoundError",
    "Result",
    "StopReason",
    "Topology",
    "Trainer",
    "TrainingSummary",
    "backward",
    "build_network",
    "build_training_set",
    "capture",
    "case_error",
    "evaluate",
    "forward",
    "load_preset",
    "load_weights",
    "presets",
    "randomize_weights",
    "run_pipeline",
    "total_error",
]
