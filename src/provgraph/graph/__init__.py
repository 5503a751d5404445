"""
Graph subsystem for provgraph.

Defines the path-indexed storage graph used to record provenance chains:
- attribute records as vertices
- dependency chains as paths tagged with a shared id
- path algebra, continuation and walking over those ids
"""

from provgraph.graph.graph_schema import NO_VERTEX, Record, EdgeView
from provgraph.graph.graph_store import GraphStore, PathIdCounter
from provgraph.graph.graph_builder import ChainBuilder, ordered_dependency
from provgraph.graph.path_algebra import paths_through, paths_through_key, on_path
from provgraph.graph.path_walker import PathWalker
from provgraph.graph.storage_graph import StorageGraph

__all__ = [
    "NO_VERTEX",
    "Record",
    "EdgeView",
    "GraphStore",
    "PathIdCounter",
    "ChainBuilder",
    "ordered_dependency",
    "paths_through",
    "paths_through_key",
    "on_path",
    "PathWalker",
    "StorageGraph",
]
