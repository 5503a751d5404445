from __future__ import annotations

from typing import Any, Dict

import numpy as np

from provgraph.graph.graph_schema import Record
from provgraph.graph.graph_store import GraphStore


def format_record(record: Record) -> str:
    return "(" + ", ".join(f"{k}={v}" for k, v in record.items()) + ")"


def vertex_labels(store: GraphStore) -> Dict[int, str]:
    return {v: format_record(record) for v, record in store.vertices()}


def edge_labels(store: GraphStore) -> Dict[tuple, str]:
    # one label per ordered pair, however many paths share the edge
    return {(e.source, e.target): ", ".join(str(i) for i in e.label()) for e in store.edges()}


def _to_json_safe(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict):
        return {k: _to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json_safe(v) for v in value]
    return value


def to_payload(store: GraphStore) -> Dict[str, Any]:
    """
    JSON-safe export of the whole graph for plotting and reporting tools.
    """
    nodes = [
        {"id": v, "label": format_record(record), "attributes": _to_json_safe(dict(record))}
        for v, record in store.vertices()
    ]
    edges = [
        {"source": e.source, "target": e.target, "paths": e.label()}
        for e in store.edges()
    ]
    return {
        "nodes": nodes,
        "edges": edges,
        "metadata": _to_json_safe(store.metadata),
    }
