from __future__ import annotations

import logging
import networkx as nx
from typing import Iterable, Iterator, List, Dict, Any, FrozenSet, Mapping, Tuple

from provgraph.errors import LookupMiss
from provgraph.graph.graph_schema import NO_VERTEX, EdgeView, Record
from provgraph.graph.graph_index import VertexIndex


class PathIdCounter:
    """
    Source of path identifiers for one graph.

    Holds the next unused id; starts at 1.
    """

    __slots__ = ("_next",)

    def __init__(self, start: int = 1) -> None:
        self._next = int(start)

    def peek_id(self) -> int:
        return self._next

    def next_id(self) -> int:
        current = self._next
        self._next += 1
        return current

    def set_id(self, value: int) -> None:
        self._next = int(value)

    def reserve_after(self, path_id: int) -> None:
        """Make sure ``path_id`` is never handed out again; never moves backwards."""
        if path_id >= self._next:
            self._next = path_id + 1


class GraphStore:
    """
    Attributed directed graph whose edges carry sets of path ids.

    Vertices are numbered from 1 in creation order; an edge between an ordered
    pair is unique and accumulates the ids of every path running along it.
    """

    def __init__(self, indices: Iterable[str] = ()) -> None:
        self._graph = nx.DiGraph()
        self._last_vertex = NO_VERTEX
        self._index = VertexIndex()
        self.counter = PathIdCounter()
        self.metadata: Dict[str, Any] = {}
        for key in indices:
            self.declare_index(key)

    # -------------------- Vertices --------------------

    def add_vertex(self, attrs: Mapping[str, Any]) -> int:
        record = Record.of(attrs)
        self._last_vertex += 1
        vertex = self._last_vertex
        self._graph.add_node(vertex, data=record)
        self._index.add(vertex, record)
        return vertex

    def has_vertex(self, vertex: int) -> bool:
        return vertex != NO_VERTEX and self._graph.has_node(vertex)

    def get_attrs(self, vertex: int) -> Record:
        if not self.has_vertex(vertex):
            raise LookupMiss(f"vertex {vertex} not found")
        return self._graph.nodes[vertex]["data"]

    def vertices(self) -> Iterator[Tuple[int, Record]]:
        for vertex, data in self._graph.nodes(data=True):
            yield vertex, data["data"]

    # -------------------- Index --------------------

    def declare_index(self, key: str) -> None:
        if self._index.declare(key, self.vertices()):
            logging.getLogger("provgraph.store").debug("index declared on %r", key)

    @property
    def indices(self) -> Tuple[str, ...]:
        return self._index.keys

    def lookup(self, attrs: Mapping[str, Any]) -> int:
        """
        Return the vertex holding exactly ``attrs``, or ``NO_VERTEX``.

        The first indexed key of the record is used when there is one;
        otherwise every vertex is compared.
        """
        record = Record.of(attrs)
        if self._index.key_for(record) is not None:
            return self._index.find(record, self.get_attrs)
        for vertex, data in self.vertices():
            if data == record:
                return vertex
        return NO_VERTEX

    def get_or_create(self, attrs: Mapping[str, Any]) -> int:
        vertex = self.lookup(attrs)
        if vertex == NO_VERTEX:
            logging.getLogger("provgraph.store").debug("node not found: %r", attrs)
            vertex = self.add_vertex(attrs)
        return vertex

    def vertex_by_key(self, key: str, value: Any) -> int:
        found = self._index.candidates(key, Record({key: value})[key])
        return found[0] if found else NO_VERTEX

    # -------------------- Edges --------------------

    def add_edge(self, source: int, target: int, path_id: int) -> None:
        for vertex in (source, target):
            if not self.has_vertex(vertex):
                raise LookupMiss(f"vertex {vertex} not found")
        if self._graph.has_edge(source, target):
            self._graph.edges[source, target]["ids"].add(path_id)
        else:
            self._graph.add_edge(source, target, ids={path_id})

    def has_edge(self, source: int, target: int) -> bool:
        return self._graph.has_edge(source, target)

    def path_ids_of(self, source: int, target: int) -> FrozenSet[int]:
        if not self._graph.has_edge(source, target):
            raise LookupMiss(f"edge {source} -> {target} not found")
        return frozenset(self._graph.edges[source, target]["ids"])

    def edges(self) -> Iterable[EdgeView]:
        for u, v, data in self._graph.edges(data=True):
            yield EdgeView(source=u, target=v, path_ids=frozenset(data["ids"]))

    # -------------------- Traversal --------------------

    def out_neighbors(self, vertex: int) -> List[int]:
        if not self.has_vertex(vertex):
            return []
        return list(self._graph.successors(vertex))

    def in_neighbors(self, vertex: int) -> List[int]:
        if not self.has_vertex(vertex):
            return []
        return list(self._graph.predecessors(vertex))

    # -------------------- Analytics --------------------

    def vertex_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    # -------------------- Cloning --------------------

    def clone(self) -> "GraphStore":
        g = GraphStore()
        g._graph = self._graph.copy()
        for u, v in g._graph.edges():
            g._graph.edges[u, v]["ids"] = set(self._graph.edges[u, v]["ids"])
        g._last_vertex = self._last_vertex
        g._index = self._index.copy()
        g.counter.set_id(self.counter.peek_id())
        g.metadata = dict(self.metadata)
        return g
