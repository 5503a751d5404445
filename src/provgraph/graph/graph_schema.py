from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterator, List, Literal, Mapping, Sequence, Tuple, Union

import numpy as np

Value = Union[bool, int, float, str]
Direction = Literal["out", "in"]

NO_VERTEX = 0


def normalize_value(value: Any) -> Value:
    """
    Coerce an attribute value into the scalar variant stored on vertices.

    numpy scalars are unwrapped to the equivalent Python scalar so that
    records built from arrays compare equal to hand-written ones.
    """
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (bool, int, float, str)):
        return value
    raise TypeError(
        f"attribute values must be bool, int, float or str, got {type(value).__name__}"
    )


class Record(Mapping[str, Value]):
    """
    Immutable attribute record held by a vertex.

    Keys keep their insertion order (index resolution depends on it), while
    equality and hashing are structural over the (key, value) pairs.
    """

    __slots__ = ("_items", "_lookup")

    def __init__(self, data: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        merged: Dict[str, Value] = {}
        for source in (data or {}, kwargs):
            for key, value in source.items():
                merged[str(key)] = normalize_value(value)
        self._items: Tuple[Tuple[str, Value], ...] = tuple(merged.items())
        self._lookup: Dict[str, Value] = merged

    @classmethod
    def of(cls, value: Mapping[str, Any]) -> "Record":
        if isinstance(value, Record):
            return value
        return cls(value)

    def __getitem__(self, key: str) -> Value:
        return self._lookup[key]

    def __iter__(self) -> Iterator[str]:
        return (k for k, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._lookup == other._lookup
        if isinstance(other, Mapping):
            return self._lookup == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._items))

    def __repr__(self) -> str:
        return "(" + ", ".join(f"{k}={v!r}" for k, v in self._items) + ")"


Chain = List[Record]


def as_chain(chain: Sequence[Mapping[str, Any]]) -> Chain:
    if isinstance(chain, Mapping):
        raise TypeError("a chain is a sequence of records, not a single record")
    return [Record.of(r) for r in chain]


@dataclass(frozen=True)
class EdgeView:
    """
    Read-only snapshot of an edge and the paths running along it.
    """

    source: int
    target: int
    path_ids: FrozenSet[int]

    def label(self) -> List[int]:
        return sorted(self.path_ids)
