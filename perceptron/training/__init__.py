"""Training loop and pipeline assembly."""

from .dataset import build_training_set
from .trainer import Trainer, case_error, total_error

__all__ = ["Trainer", "build_training_set", "case_error", "total_error"]
