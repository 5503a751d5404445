from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Set

from provgraph.graph.graph_schema import NO_VERTEX, Direction, EdgeView, Value
from provgraph.graph.graph_store import GraphStore
from provgraph.graph.path_algebra import as_path_set, chain_end


@dataclass(frozen=True)
class PathSubgraph:
    """
    Vertices and edges tagged with a set of path ids.
    """

    vertices: Set[int]
    edges: List[EdgeView]


def final_neighbors(
    store: GraphStore,
    chain: Sequence[Mapping[str, Any]],
    direction: Direction = "out",
) -> List[int]:
    """
    Return the neighbors of the vertex at the end of the dependency chain.
    """
    v = store.lookup(chain_end(chain))
    if v == NO_VERTEX:
        return []
    return store.out_neighbors(v) if direction == "out" else store.in_neighbors(v)


def find_nodes(store: GraphStore, name: str) -> List[int]:
    return [v for v, record in store.vertices() if name in record]


def extract_values(records: Iterable[Mapping[str, Any]], name: str) -> List[Value]:
    return [r[name] for r in records]


def node_values(store: GraphStore, name: str) -> List[Value]:
    """
    Values of ``name`` over every vertex that has it, in vertex order.
    """
    return extract_values((store.get_attrs(v) for v in find_nodes(store, name)), name)


def chain_values(
    store: GraphStore,
    chain: Sequence[Mapping[str, Any]],
    name: str,
) -> List[Value]:
    """
    Values of ``name`` on the records that directly follow ``chain``.

    Neighbors without the attribute are skipped.
    """
    records = [store.get_attrs(v) for v in final_neighbors(store, chain)]
    return extract_values((r for r in records if name in r), name)


def path_members(store: GraphStore, paths: Any) -> PathSubgraph:
    """
    Collect every edge carrying one of ``paths`` and the vertices it joins.

    ``paths`` is a single id or a collection of ids.
    """
    wanted = as_path_set(paths)
    vertices: Set[int] = set()
    edges: List[EdgeView] = []
    for edge in store.edges():
        if edge.path_ids.isdisjoint(wanted):
            continue
        edges.append(edge)
        vertices.add(edge.source)
        vertices.add(edge.target)
    return PathSubgraph(vertices=vertices, edges=edges)
