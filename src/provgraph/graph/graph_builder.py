from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from provgraph.errors import AmbiguousContinuation
from provgraph.graph.graph_schema import NO_VERTEX, Chain, Record, as_chain
from provgraph.graph.graph_store import GraphStore
from provgraph.graph.path_algebra import on_path, paths_through


def _elementwise(values: Mapping[str, Sequence[Any]]) -> List[Record]:
    """
    Split a mapping of equal-length columns into one record per position.
    """
    if not values:
        raise ValueError("at least one attribute column is required")

    columns = {}
    for key, col in values.items():
        if isinstance(col, np.ndarray):
            if col.ndim != 1:
                raise ValueError(f"attribute {key!r} must be one-dimensional, got shape {col.shape}")
            columns[key] = col.tolist()
        elif isinstance(col, (str, bytes)) or not isinstance(col, Sequence):
            raise ValueError(f"attribute {key!r} must be a sequence, got {type(col).__name__}")
        else:
            columns[key] = list(col)

    lengths = {key: len(col) for key, col in columns.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"attribute columns differ in length: {lengths}")

    n = next(iter(lengths.values()))
    return [Record({key: col[i] for key, col in columns.items()}) for i in range(n)]


def ordered_dependency(
    a: Mapping[str, Sequence[Any]],
    b: Mapping[str, Sequence[Any]],
    *inner: Mapping[str, Any],
) -> List[Chain]:
    """
    Return one chain ``a_i -> inner... -> b_i`` per position, keeping the
    element order of ``a`` and ``b``.
    """
    heads = _elementwise(a)
    tails = _elementwise(b)
    if len(heads) != len(tails):
        raise ValueError(
            f"cannot pair {len(heads)} base values with {len(tails)} derived values"
        )
    middle = as_chain(inner)
    return [[head, *middle, tail] for head, tail in zip(heads, tails)]


class ChainBuilder:
    """
    Inserts dependency chains into a GraphStore and decides which path id
    each chain runs on.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Single chains
    # ------------------------------------------------------------------

    def add_path(
        self,
        source: Mapping[str, Any],
        dest: Mapping[str, Any],
        path_id: Optional[int] = None,
    ) -> None:
        if path_id is None:
            path_id = self.store.counter.peek_id()
        sv = self.store.get_or_create(source)
        dv = self.store.get_or_create(dest)
        self.store.add_edge(sv, dv, path_id)
        self.store.counter.reserve_after(path_id)

    def add_nodes(
        self,
        chain: Sequence[Mapping[str, Any]],
        path_id: Optional[int] = None,
        *,
        continue_path: bool = False,
    ) -> Record:
        """
        Add the dependency chain, creating missing records, and tag every
        link with ``path_id``.

        Without an explicit id a new path is started, or, with
        ``continue_path``, the path ending at the chain's attachment point
        is extended (see ``next_id``). Returns the root record.
        """
        records = as_chain(chain)
        if len(records) < 2:
            raise ValueError("a dependency chain needs at least two records")

        if path_id is None:
            if continue_path:
                path_id = self.resolve_id(records)
            else:
                path_id = self.store.counter.peek_id()

        for source, dest in zip(records, records[1:]):
            self.add_path(source, dest, path_id)

        logging.getLogger("provgraph.builder").debug(
            "path %s: %s", path_id, " => ".join(repr(r) for r in records)
        )
        return records[0]

    # ------------------------------------------------------------------
    # Continuation
    # ------------------------------------------------------------------

    def walk_dependency(self, chain: Sequence[Mapping[str, Any]]) -> Tuple[Record, FrozenSet[int]]:
        """
        Follow the chain over existing edges only and return the last record
        reached together with the paths compatible with every step so far.
        """
        records = as_chain(chain)
        if not records:
            raise ValueError("empty dependency chain")

        current = records[0]
        compatible = paths_through(self.store, current)
        for node in records[1:]:
            step = compatible & paths_through(self.store, current)
            linked = self.store.has_edge(self.store.lookup(current), self.store.lookup(node))
            if not (linked and on_path(self.store, node, step)):
                return current, compatible
            compatible = step
            current = node
        return current, compatible

    def next_id(self, chain: Sequence[Mapping[str, Any]]) -> FrozenSet[int]:
        """
        Candidate path ids for adding ``chain``.

        A chain attaching to a dead end continues the path that ends there;
        anything else gets the next unused id. More than one candidate means
        several paths converge on the dead end.
        """
        records = as_chain(chain)
        dep_end, compatible = self.walk_dependency(records)
        fresh = frozenset((self.store.counter.peek_id(),))

        v = self.store.lookup(dep_end)
        if v == NO_VERTEX or self.store.out_neighbors(v):
            return fresh

        candidates: set = set()
        for prev in self.store.in_neighbors(v):
            ids = self.store.path_ids_of(prev, v)
            if not compatible:
                candidates |= ids
            elif not ids.isdisjoint(compatible):
                candidates |= ids & compatible
        return frozenset(candidates) if candidates else fresh

    def resolve_id(self, chain: Sequence[Mapping[str, Any]]) -> int:
        candidates = self.next_id(chain)
        if len(candidates) != 1:
            raise AmbiguousContinuation(candidates, as_chain(chain))
        return next(iter(candidates))

    def _continuation_or_fresh(self, chain: Sequence[Mapping[str, Any]]) -> int:
        candidates = self.next_id(chain)
        if len(candidates) == 1:
            return next(iter(candidates))
        return self.store.counter.peek_id()

    # ------------------------------------------------------------------
    # Bulk insertion
    # ------------------------------------------------------------------

    def add_quantity(
        self,
        chain: Sequence[Mapping[str, Any]],
        values: Mapping[str, Sequence[Any]],
    ) -> List[int]:
        """
        Attach one leaf per element of ``values`` to the end of ``chain``.

        Each leaf gets its own path. The first one continues the chain's
        path if the chain ends at a dead end with a single candidate id;
        otherwise every leaf starts a new path.
        """
        prefix = as_chain(chain)
        ids: List[int] = []
        for leaf in _elementwise(values):
            path_id = self._continuation_or_fresh(prefix)
            self.add_nodes([*prefix, leaf], path_id)
            ids.append(path_id)

        logging.getLogger("provgraph.builder").info(
            "added %s values of %s after %r", len(ids), sorted(values), prefix[-1]
        )
        return ids

    add_bulk = add_quantity

    def add_derived_values(
        self,
        base_values: Mapping[str, Sequence[Any]],
        values: Mapping[str, Sequence[Any]],
        *inner: Mapping[str, Any],
        base_chain: Sequence[Mapping[str, Any]] = (),
    ) -> List[int]:
        """
        Add ``values`` derived element-wise from ``base_values``.

        The i-th base record is linked to the i-th derived record (through
        ``inner``), each pair on its own path. With ``base_chain``, the base
        records are looked up as continuations of that chain.
        """
        prefix = as_chain(base_chain)
        ids: List[int] = []
        for dep in ordered_dependency(base_values, values, *inner):
            full = [*prefix, *dep]
            path_id = self._continuation_or_fresh(full)
            self.add_nodes(full, path_id)
            ids.append(path_id)

        logging.getLogger("provgraph.builder").info(
            "added %s derived values of %s from %s", len(ids), sorted(values), sorted(base_values)
        )
        return ids
