"""Line-oriented text formats for weights, vectors and legacy config files.

Weights files hold one line per connectivity layer ``m`` with the weights in
``prev``-major, ``next``-minor order, e.g. for a 2-2-1 network::

    w000 w001 w010 w011
    w100 w110

Vector files (inputs, targets, outputs) hold one whitespace-delimited vector
per line. Blank lines are skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from ..core.errors import ConfigurationError, DataFormatError, ResourceNotFoundError
from ..core.network import NetworkState

DEFAULT_STOPPING_ERROR = 0.001


def _read_text(path: str | Path, what: str) -> str:
    path = Path(path)
    try:
        return path.read_text()
    except FileNotFoundError as exc:
        raise ResourceNotFoundError(f"The {what} file could not be found: {path}") from exc


def _parse_float(token: str, path: Path | str, lineno: int) -> float:
    try:
        return float(token)
    except ValueError as exc:
        raise DataFormatError(f"{path}:{lineno}: could not parse {token!r} as a number") from exc


def read_vectors(path: str | Path) -> List[List[float]]:
    """Read one numeric vector per non-blank line."""

    text = _read_text(path, "vector")
    vectors: List[List[float]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        tokens = line.split()
        if not tokens:
            continue
        vectors.append([_parse_float(tok, path, lineno) for tok in tokens])
    return vectors


def write_vectors(path: str | Path, vectors: Sequence[Sequence[float]]) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [" ".join(repr(float(v)) for v in vec) for vec in vectors]
    path.write_text("\n".join(lines) + ("\n" if lines else ""))
    return str(path)


def read_weights(path: str | Path) -> List[str]:
    """Return the raw weight tokens in file order.

    Tokens are left unparsed so that
    :func:`perceptron.core.weights.load_weights` reports non-numeric values
    as :class:`DataFormatError` against their position in the sequence.
    """

    return _read_text(path, "weights").split()


def write_weights(path: str | Path, state: NetworkState) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [" ".join(repr(float(v)) for v in w.reshape(-1)) for w in state.weights]
    path.write_text("\n".join(lines) + "\n")
    return str(path)


def _int_line(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise DataFormatError(f"Configuration {what} must be an integer, got {value!r}") from exc


def _float_line(value: str, what: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise DataFormatError(f"Configuration {what} must be a number, got {value!r}") from exc


def read_legacy_config(path: str | Path) -> Dict[str, object]:
    """Convert a line-oriented configuration file into the pipeline mapping.

    Expected lines: input count; hidden layer sizes (space separated, blank
    for none); output
    count; learning rate; max iterations; weights file or ``randomize``;
    inputs file; targets file; ``low high`` random bounds; and optionally
    the stopping error. Relative file names resolve against the config's
    directory.
    """

    path = Path(path)
    lines = [line.strip() for line in _read_text(path, "configuration").splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if len(lines) < 9:
        raise ConfigurationError(f"{path}: expected at least 9 configuration lines, found {len(lines)}")
    # line 2 may be empty for a network with no hidden layers
    for index, line in enumerate(lines[:9]):
        if not line and index != 1:
            raise ConfigurationError(f"{path}:{index + 1}: required configuration line is blank")

    base = path.parent

    def _resolve(name: str) -> str:
        candidate = Path(name)
        return str(candidate if candidate.is_absolute() else base / candidate)

    hidden = [_int_line(tok, "hidden layer size") for tok in lines[1].split()]
    bounds = lines[8].split()
    if len(bounds) != 2:
        raise ConfigurationError(f"{path}: random bounds line must hold 'low high', got {lines[8]!r}")
    low, high = (_float_line(tok, "random bound") for tok in bounds)

    if lines[5].lower() == "randomize":
        weights: Dict[str, object] = {"mode": "randomize", "low": low, "high": high}
    else:
        weights = {"mode": "load", "path": _resolve(lines[5])}

    stopping_error = (
        _float_line(lines[9], "stopping error") if len(lines) > 9 and lines[9] else DEFAULT_STOPPING_ERROR
    )
    return {
        "data": {
            "name": "files",
            "options": {"inputs": _resolve(lines[6]), "targets": _resolve(lines[7])},
        },
        "model": {
            "d_in": _int_line(lines[0], "input count"),
            "hidden": hidden,
            "d_out": _int_line(lines[2], "output count"),
            "weights": weights,
        },
        "train": {
            "lr": _float_line(lines[3], "learning rate"),
            "max_iterations": _int_line(lines[4], "max iterations"),
            "stopping_error": stopping_error,
        },
    }


__all__ = [
    "DEFAULT_STOPPING_ERROR",
    "read_legacy_config",
    "read_vectors",
    "read_weights",
    "write_vectors",
    "write_weights",
]
