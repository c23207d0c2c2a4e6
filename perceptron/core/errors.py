"""Error taxonomy shared by the core and its collaborators."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    CONFIGURATION = "configuration"
    DATA_FORMAT = "data_format"
    DATA_SHAPE = "data_shape"
    RESOURCE_NOT_FOUND = "resource_not_found"


class PerceptronError(Exception):
    """Base class for all fatal construction and validation errors."""

    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigurationError(PerceptronError, ValueError):
    """Invalid topology or hyperparameters."""

    kind = ErrorKind.CONFIGURATION


class DataFormatError(PerceptronError, ValueError):
    """A supplied value is not numeric."""

    kind = ErrorKind.DATA_FORMAT


class DataShapeError(PerceptronError, ValueError):
    """A vector or weight sequence does not match the topology."""

    kind = ErrorKind.DATA_SHAPE


class ResourceNotFoundError(PerceptronError, FileNotFoundError):
    """A required external data source is unavailable."""

    kind = ErrorKind.RESOURCE_NOT_FOUND


@dataclass(frozen=True)
class Result(Generic[T]):
    """Explicit success-or-error value returned by :func:`capture`."""

    value: Optional[T] = None
    error: Optional[PerceptronError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def capture(fn: Callable[..., T], *args, **kwargs) -> Result[T]:
    """Call ``fn`` and fold any :class:`PerceptronError` into a :class:`Result`."""

    try:
        return Result(value=fn(*args, **kwargs))
    except PerceptronError as exc:
        return Result(error=exc)


__all__ = [
    "ErrorKind",
    "PerceptronError",
    "ConfigurationError",
    "DataFormatError",
    "DataShapeError",
    "ResourceNotFoundError",
    "Result",
    "capture",
]
