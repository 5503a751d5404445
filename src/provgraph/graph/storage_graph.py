from __future__ import annotations

from typing import Any, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from provgraph.config.settings import GraphConfig
from provgraph.graph.graph_builder import ChainBuilder
from provgraph.graph.graph_query import chain_values, final_neighbors
from provgraph.graph.graph_schema import Direction, Record
from provgraph.graph.graph_store import GraphStore
from provgraph.graph.path_algebra import PathSet, Target, on_path, paths_through
from provgraph.graph.path_walker import IndexedWalkAction, PathWalker, StopCondition, WalkAction


class StorageGraph:
    """
    Provenance graph: records as vertices, dependency chains as paths.

    Thin front over GraphStore, ChainBuilder and PathWalker sharing one
    store. Mutating calls must come from a single writer.
    """

    def __init__(self, config: Optional[GraphConfig] = None) -> None:
        self.config = config or GraphConfig()
        self.store = GraphStore(indices=self.config.indices)
        self.builder = ChainBuilder(self.store)
        self.walker = PathWalker(self.store, max_workers=self.config.walk_workers)

    # -------------------- Store --------------------

    def add_vertex(self, attrs: Mapping[str, Any]) -> int:
        return self.store.add_vertex(attrs)

    def get_attrs(self, vertex: int) -> Record:
        return self.store.get_attrs(vertex)

    def index_by(self, key: str) -> None:
        self.store.declare_index(key)

    def vertex_of(self, attrs: Mapping[str, Any]) -> int:
        return self.store.lookup(attrs)

    @property
    def nv(self) -> int:
        return self.store.vertex_count()

    @property
    def ne(self) -> int:
        return self.store.edge_count()

    def max_id(self) -> int:
        return self.store.counter.peek_id()

    # -------------------- Chains --------------------

    def add_nodes(
        self,
        chain: Sequence[Mapping[str, Any]],
        path_id: Optional[int] = None,
        *,
        continue_path: bool = False,
    ) -> Record:
        return self.builder.add_nodes(chain, path_id, continue_path=continue_path)

    def next_id(self, chain: Sequence[Mapping[str, Any]]) -> FrozenSet[int]:
        return self.builder.next_id(chain)

    def walk_dependency(self, chain: Sequence[Mapping[str, Any]]) -> Tuple[Record, FrozenSet[int]]:
        return self.builder.walk_dependency(chain)

    def add_quantity(self, chain: Sequence[Mapping[str, Any]], values: Mapping[str, Sequence[Any]]) -> List[int]:
        return self.builder.add_quantity(chain, values)

    add_bulk = add_quantity

    def add_derived_values(
        self,
        base_values: Mapping[str, Sequence[Any]],
        values: Mapping[str, Sequence[Any]],
        *inner: Mapping[str, Any],
        base_chain: Sequence[Mapping[str, Any]] = (),
    ) -> List[int]:
        return self.builder.add_derived_values(base_values, values, *inner, base_chain=base_chain)

    # -------------------- Paths --------------------

    def paths_through(self, target: Target, direction: Optional[Direction] = None) -> FrozenSet[int]:
        return paths_through(self.store, target, direction or self.config.default_direction)

    def on_path(self, node: Any, paths: PathSet) -> bool:
        return on_path(self.store, node, paths)

    def walk_path(
        self,
        path_id: int,
        start: int,
        direction: Optional[Direction] = None,
        stop_cond: Optional[StopCondition] = None,
        action: Optional[WalkAction] = None,
    ) -> int:
        return self.walker.walk_path(
            path_id, start, direction or self.config.default_direction, stop_cond, action
        )

    def walk_paths(
        self,
        path_ids: Sequence[int],
        start: int,
        direction: Optional[Direction] = None,
        stop_cond: Optional[StopCondition] = None,
        action: Optional[IndexedWalkAction] = None,
    ) -> List[int]:
        return self.walker.walk_paths(
            path_ids, start, direction or self.config.default_direction, stop_cond, action
        )

    def final_neighbors(self, chain: Sequence[Mapping[str, Any]], direction: Optional[Direction] = None) -> List[int]:
        return final_neighbors(self.store, chain, direction or self.config.default_direction)

    def chain_values(self, chain: Sequence[Mapping[str, Any]], name: str) -> List[Any]:
        return chain_values(self.store, chain, name)
