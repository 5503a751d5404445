from __future__ import annotations

import pytest

from provgraph.graph.graph_store import GraphStore
from provgraph.graph.graph_builder import ChainBuilder
from provgraph.graph.storage_graph import StorageGraph

SIM_CHAIN = [{"P": 1}, {"alg": "alg1"}]


@pytest.fixture()
def store() -> GraphStore:
    return GraphStore()


@pytest.fixture()
def builder(store: GraphStore) -> ChainBuilder:
    return ChainBuilder(store)


@pytest.fixture()
def squares() -> StorageGraph:
    """
    Vertices (x=1), (x=2), (x=3) added by hand, then (y=x^2) derived from
    them: one path per pair.
    """
    g = StorageGraph()
    for x in (1, 2, 3):
        g.add_vertex({"x": x})
    g.add_derived_values({"x": [1, 2, 3]}, {"y": [1, 4, 9]})
    return g


@pytest.fixture()
def simulation() -> StorageGraph:
    """
    (P=1) -> (alg="alg1") followed by three initial conditions, each on
    its own path.
    """
    g = StorageGraph()
    g.add_nodes(SIM_CHAIN)
    g.add_bulk(SIM_CHAIN, {"x": [10.0, 20.0, 30.0]})
    return g
