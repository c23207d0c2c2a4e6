"""Training sets stored as paired input/target vector files."""

from __future__ import annotations

from pathlib import Path

from ..core.errors import ConfigurationError
from ..training.dataset import pair_vectors
from .registry import DatasetSpec, register_dataset
from .textfiles import read_vectors


@register_dataset("files")
def _factory(inputs: str | Path | None = None, targets: str | Path | None = None, **_: object) -> DatasetSpec:
    if inputs is None or targets is None:
        raise ConfigurationError("The 'files' dataset requires both 'inputs' and 'targets' paths")
    pairs = pair_vectors(read_vectors(inputs), read_vectors(targets))
    return DatasetSpec(
        name="files",
        pairs=pairs,
        provenance={"type": "files", "inputs": str(inputs), "targets": str(targets)},
    )


__all__ = ["_factory"]
