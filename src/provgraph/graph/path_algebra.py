"""
Set algebra over the path ids carried by edges.

A vertex belongs to a path exactly when one of its in-edges carries that
path's id; out-edges never decide membership.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Mapping, Sequence, Union

from provgraph.graph.graph_schema import NO_VERTEX, Chain, Direction, Record, as_chain
from provgraph.graph.graph_store import GraphStore

Target = Union[int, Mapping[str, Any], Sequence[Mapping[str, Any]]]
PathSet = Union[int, Iterable[int]]


def as_path_set(paths: PathSet) -> FrozenSet[int]:
    if isinstance(paths, int):
        return frozenset((paths,))
    return frozenset(paths)


def resolve_vertex(store: GraphStore, node: Union[int, Mapping[str, Any]]) -> int:
    if isinstance(node, int):
        return node
    return store.lookup(node)


def _vertex_paths(store: GraphStore, vertex: int, direction: Direction) -> FrozenSet[int]:
    if vertex == NO_VERTEX:
        return frozenset()
    ids: set = set()
    if direction == "out":
        for n in store.out_neighbors(vertex):
            ids |= store.path_ids_of(vertex, n)
    elif direction == "in":
        for n in store.in_neighbors(vertex):
            ids |= store.path_ids_of(n, vertex)
    else:
        raise ValueError(f"direction must be 'out' or 'in', got {direction!r}")
    return frozenset(ids)


def paths_through(store: GraphStore, target: Target, direction: Direction = "out") -> FrozenSet[int]:
    """
    Return the ids of the paths going through ``target``.

    ``target`` is a vertex id, an attribute record, or a dependency chain.
    For a chain, only the ids common to every element are returned.
    """
    if isinstance(target, int):
        return _vertex_paths(store, target, direction)
    if isinstance(target, Mapping):
        return _vertex_paths(store, store.lookup(target), direction)

    chain = as_chain(target)
    if not chain:
        return frozenset()
    if len(chain) == 1:
        return paths_through(store, chain[0], direction)
    return paths_through(store, chain[1:], direction) & paths_through(store, chain[0], direction)


def paths_through_key(store: GraphStore, key: str, value: Any, direction: Direction = "out") -> FrozenSet[int]:
    return _vertex_paths(store, store.vertex_by_key(key, value), direction)


def on_path(store: GraphStore, node: Union[int, Mapping[str, Any]], paths: PathSet) -> bool:
    return not paths_through(store, resolve_vertex(store, node), "in").isdisjoint(as_path_set(paths))


def chain_end(chain: Sequence[Mapping[str, Any]]) -> Record:
    records: Chain = as_chain(chain)
    if not records:
        raise ValueError("empty dependency chain")
    return records[-1]
