"""
mutagraph
=========

An in-memory, mutable, directed multigraph store.

Nodes are addressed either by their auto-assigned integer id or by
their label; deleting a node removes every edge touching it in the same
atomic step.

Public API:
- GraphMutator
- GraphBuilder
- StoreConfig / load_config
"""

from mutagraph.config.settings import StoreConfig, load_config
from mutagraph.graph.graph_builder import GraphBuilder
from mutagraph.graph.graph_mutator import ALL, GraphMutator

__all__ = [
    "ALL",
    "GraphMutator",
    "GraphBuilder",
    "StoreConfig",
    "load_config",
]

__version__ = "0.1.0"
