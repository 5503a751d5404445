"""
provgraph
=========

A path-indexed attributed graph for recording provenance chains of derived
data: every inserted record becomes a vertex, every dependency chain a walk
tagged end-to-end with a shared path id.

Core idea:
- Ask "what belongs to run N" by following path ids, not by re-deriving
  the dependency logic.

Public API:
- StorageGraph
- GraphStore
- ChainBuilder
- PathWalker
- Record
"""

from provgraph.graph.graph_schema import Record
from provgraph.graph.graph_store import GraphStore
from provgraph.graph.graph_builder import ChainBuilder
from provgraph.graph.path_walker import PathWalker
from provgraph.graph.storage_graph import StorageGraph

__all__ = [
    "StorageGraph",
    "GraphStore",
    "ChainBuilder",
    "PathWalker",
    "Record",
]

__version__ = "0.1.0"
