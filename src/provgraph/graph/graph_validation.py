from __future__ import annotations

from provgraph.errors import StructuralInvariantViolation
from provgraph.graph.graph_schema import NO_VERTEX
from provgraph.graph.graph_store import GraphStore


def check_invariants(store: GraphStore) -> None:
    """
    Raise StructuralInvariantViolation if the graph breaks a structural rule.

    - every edge carries at least one path id
    - the path id counter is ahead of every id in use
    - every indexed vertex can be found again through its index
    """
    highest = 0
    for edge in store.edges():
        if not edge.path_ids:
            raise StructuralInvariantViolation(
                f"edge {edge.source} -> {edge.target} has no path ids"
            )
        highest = max(highest, max(edge.path_ids))

    if store.counter.peek_id() <= highest:
        raise StructuralInvariantViolation(
            f"path id counter {store.counter.peek_id()} is not above the highest id in use ({highest})"
        )

    for vertex, record in store.vertices():
        if any(key in record for key in store.indices) and store.lookup(record) == NO_VERTEX:
            raise StructuralInvariantViolation(f"vertex {vertex} {record!r} is missing from its index")
