from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from provgraph.errors import LookupMiss
from provgraph.graph.graph_schema import NO_VERTEX, Record, Value


class VertexIndex:
    """
    Secondary indices mapping the value of a declared attribute key to the
    vertices carrying it.

    Used opportunistically: a record with no declared key is resolved by the
    caller's full scan instead.
    """

    def __init__(self) -> None:
        self._keys: List[str] = []
        self._tables: Dict[str, Dict[Value, List[int]]] = {}

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(self._keys)

    def declare(self, key: str, existing: Iterable[Tuple[int, Record]] = ()) -> bool:
        """
        Register ``key``; vertices already in the graph are back-filled.

        Returns False when the key was already declared.
        """
        if key in self._tables:
            return False
        self._keys.append(key)
        self._tables[key] = {}
        for vertex, record in existing:
            if key in record:
                self._tables[key].setdefault(record[key], []).append(vertex)
        return True

    def add(self, vertex: int, record: Record) -> None:
        for key in self._keys:
            if key in record:
                self._tables[key].setdefault(record[key], []).append(vertex)

    def key_for(self, record: Record) -> Optional[str]:
        # first declared key in the record's own key order
        for key in record:
            if key in self._tables:
                return key
        return None

    def candidates(self, key: str, value: Value) -> List[int]:
        if key not in self._tables:
            raise LookupMiss(f"attribute {key!r} is not indexed")
        return list(self._tables[key].get(value, ()))

    def find(self, record: Record, attrs_of: Callable[[int], Record]) -> int:
        """
        Resolve ``record`` through its first indexed key.

        A vertex sharing only the indexed value is not a match.
        """
        key = self.key_for(record)
        if key is None:
            return NO_VERTEX
        for vertex in self._tables[key].get(record[key], ()):
            if attrs_of(vertex) == record:
                return vertex
        return NO_VERTEX

    def copy(self) -> "VertexIndex":
        idx = VertexIndex()
        idx._keys = list(self._keys)
        idx._tables = {
            key: {value: list(vs) for value, vs in table.items()}
            for key, table in self._tables.items()
        }
        return idx
