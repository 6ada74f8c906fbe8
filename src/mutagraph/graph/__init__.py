"""
Graph subsystem for mutagraph.

Defines the mutable multigraph store:
- node and edge tables with a label index
- id/label address resolution
- atomic mutation with cascading deletion
"""

from mutagraph.graph.graph_schema import Node, Edge
from mutagraph.graph.graph_store import GraphStore
from mutagraph.graph.identity import IdentityAllocator
from mutagraph.graph.label_index import LabelIndex
from mutagraph.graph.address import Address, ById, ByLabel, AddressResolver, parse_address
from mutagraph.graph.graph_query import GraphQueryEngine
from mutagraph.graph.graph_log import GraphAction, GraphLog
from mutagraph.graph.graph_mutator import ALL, GraphMutator, NodeDeletion
from mutagraph.graph.graph_builder import GraphBuilder

__all__ = [
    "Node",
    "Edge",
    "GraphStore",
    "IdentityAllocator",
    "LabelIndex",
    "Address",
    "ById",
    "ByLabel",
    "AddressResolver",
    "parse_address",
    "GraphQueryEngine",
    "GraphAction",
    "GraphLog",
    "ALL",
    "GraphMutator",
    "NodeDeletion",
    "GraphBuilder",
]
