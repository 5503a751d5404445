from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, List, Optional, Sequence

from provgraph.graph.graph_schema import Direction
from provgraph.graph.graph_store import GraphStore
from provgraph.graph.path_algebra import on_path

StopCondition = Callable[[GraphStore, int], bool]
WalkAction = Callable[[GraphStore, int, List[int]], None]
# receives the position of the path in the walked id list first
IndexedWalkAction = Callable[[int, GraphStore, int, List[int]], None]


def _never(store: GraphStore, vertex: int) -> bool:
    return False


def _noop(store: GraphStore, vertex: int, neighbors: List[int]) -> None:
    return None


class PathWalker:
    """
    Follows individual paths through a GraphStore.

    Walks only read the graph. An ``action`` may record what it sees, but
    must write to state owned by the caller and keyed by path, never to the
    graph itself; that is what lets several paths be walked at once.
    """

    def __init__(self, store: GraphStore, *, max_workers: int = 4) -> None:
        self.store = store
        self.max_workers = max_workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def walk_path(
        self,
        path_id: int,
        start: int,
        direction: Direction = "out",
        stop_cond: Optional[StopCondition] = None,
        action: Optional[WalkAction] = None,
    ) -> int:
        """
        Walk along ``path_id`` from ``start`` and return the last vertex.

        The walk ends when ``stop_cond`` holds or when no neighbor continues
        the path.
        """
        stop_cond = stop_cond or _never
        action = action or _noop
        step = self._step_fn(direction)

        vertex = start
        while not stop_cond(self.store, vertex):
            neighbors = self._neighbors(vertex, direction)
            action(self.store, vertex, neighbors)
            nxt = next((n for n in neighbors if step(vertex, n, path_id)), None)
            if nxt is None:
                return vertex
            vertex = nxt
        return vertex

    def walk_paths(
        self,
        path_ids: Sequence[int],
        start: int,
        direction: Direction = "out",
        stop_cond: Optional[StopCondition] = None,
        action: Optional[IndexedWalkAction] = None,
    ) -> List[int]:
        """
        Walk every path in ``path_ids`` from ``start`` concurrently.

        Results are in the order of ``path_ids``. ``action`` is called with
        the position of the path being walked, so it can fill one slot per
        path.
        """
        ids = list(path_ids)
        if not ids:
            return []

        logging.getLogger("provgraph.walker").debug(
            "walking %s paths from vertex %s (%s)", len(ids), start, direction
        )
        workers = max(1, min(self.max_workers, len(ids)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(
                executor.map(
                    lambda i: self.walk_path(
                        ids[i],
                        start,
                        direction,
                        stop_cond,
                        partial(action, i) if action is not None else None,
                    ),
                    range(len(ids)),
                )
            )

    def path_vertices(self, path_id: int, start: int, direction: Direction = "out") -> List[int]:
        """
        Vertices visited along ``path_id`` from ``start``, in walk order.
        """
        visited: List[int] = []
        self.walk_path(
            path_id,
            start,
            direction,
            action=lambda g, v, neighbors: visited.append(v),
        )
        return visited

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _neighbors(self, vertex: int, direction: Direction) -> List[int]:
        if direction == "out":
            return self.store.out_neighbors(vertex)
        if direction == "in":
            return self.store.in_neighbors(vertex)
        raise ValueError(f"direction must be 'out' or 'in', got {direction!r}")

    def _step_fn(self, direction: Direction) -> Callable[[int, int, int], bool]:
        if direction == "out":
            return lambda v, n, path_id: on_path(self.store, n, path_id)
        if direction != "in":
            raise ValueError(f"direction must be 'out' or 'in', got {direction!r}")
        # roots have no in-edges, so going backwards checks the edge itself
        return lambda v, n, path_id: path_id in self.store.path_ids_of(n, v)
