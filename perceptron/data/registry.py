"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, MutableMapping, Sequence, Tuple

from ..core.errors import ConfigurationError

Pair = Tuple[Sequence[float], Sequence[float]]


@dataclass(frozen=True)
class DatasetSpec:
    """An ordered list of raw ``(inputs, targets)`` pairs plus provenance.

    Attributes
    ----------
    name:
        Registry identifier the dataset was created under.
    pairs:
        Cases in the order they must be visited every epoch. They are not yet
        validated against a topology; see
        :func:`perceptron.training.dataset.build_training_set`.
    provenance:
        Free-form metadata recorded in the run manifest.
    """

    name: str
    pairs: List[Pair]
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def d_in(self) -> int:
        return len(self.pairs[0][0]) if self.pairs else 0

    @property
    def d_out(self) -> int:
        return len(self.pairs[0][1]) if self.pairs else 0


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory, either directly or as a decorator::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    return _decorator


def get_dataset(name: str, /, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` registered under ``name``."""

    if name not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise ConfigurationError(f"Unknown dataset {name!r}. Available datasets: {available}")
    return _REGISTRY[name](**options)


def available_datasets() -> Iterable[str]:
    return sorted(_REGISTRY)


__all__ = ["DatasetSpec", "Pair", "available_datasets", "get_dataset", "register_dataset"]
