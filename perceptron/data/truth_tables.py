"""Two-input boolean truth tables used as toy training sets."""

from __future__ import annotations

from typing import Callable, Dict

from .registry import DatasetSpec, register_dataset

_INPUTS = [(0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)]

_TABLES: Dict[str, Callable[[int, int], int]] = {
    "and": lambda a, b: a & b,
    "or": lambda a, b: a | b,
    "xor": lambda a, b: a ^ b,
}


def truth_table(name: str) -> DatasetSpec:
    op = _TABLES[name]
    pairs = [
        (list(inputs), [float(op(int(inputs[0]), int(inputs[1])))])
        for inputs in _INPUTS
    ]
    return DatasetSpec(name=name, pairs=pairs, provenance={"type": "truth_table", "op": name})


def _make_factory(name: str):
    def _factory(**_: object) -> DatasetSpec:
        return truth_table(name)

    return _factory


for _name in _TABLES:
    register_dataset(_name, _make_factory(_name))


__all__ = ["truth_table"]
