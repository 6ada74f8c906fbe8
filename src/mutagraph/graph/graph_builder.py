from __future__ import annotations

import logging
from typing import Iterable, List

from mutagraph.errors import DuplicateId, UnknownId
from mutagraph.graph.graph_schema import Node, Edge
from mutagraph.graph.graph_mutator import GraphMutator


logger = logging.getLogger("mutagraph.builder")


def _is_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_ids(ids: List[int], kind: str) -> None:
    seen = set()
    for identifier in ids:
        if not _is_id(identifier) or identifier < 1:
            raise ValueError(f"{kind} ids must be positive integers, got {identifier!r}")
        if identifier in seen:
            raise DuplicateId(identifier, kind)
        seen.add(identifier)


def _check_node(node: object) -> None:
    if not isinstance(node, Node):
        raise TypeError(f"Expected a Node, got {type(node).__name__}")
    if not isinstance(node.label, str):
        raise TypeError(f"Node {node.id} label must be a string, got {node.label!r}")
    if node.type is not None and not isinstance(node.type, str):
        raise TypeError(f"Node {node.id} type must be a string, got {node.type!r}")


def _check_edge(edge: object) -> None:
    if not isinstance(edge, Edge):
        raise TypeError(f"Expected an Edge, got {type(edge).__name__}")
    for endpoint in (edge.source, edge.target):
        if not _is_id(endpoint):
            raise TypeError(f"Edge {edge.id} endpoints must be ints, got {endpoint!r}")
    if edge.rel is not None and not isinstance(edge.rel, str):
        raise TypeError(f"Edge {edge.id} rel must be a string, got {edge.rel!r}")


class GraphBuilder:
    """
    Pre-populates a graph from already-built Node and Edge records.

    Records keep their own ids. Each batch is validated as a whole (record
    types, ids, duplicates, endpoints) before anything is inserted, and the
    graph's allocators are moved past every injected id so later additions
    never reuse one.
    """

    def __init__(self, graph: GraphMutator) -> None:
        self.graph = graph

    def add_nodes(self, nodes: Iterable[Node]) -> List[int]:
        nodes = list(nodes)
        for node in nodes:
            _check_node(node)
        ids = [n.id for n in nodes]

        with self.graph.lock:
            store = self.graph.store

            _check_ids(ids, "node")
            for node_id in ids:
                if store.has_node(node_id):
                    raise DuplicateId(node_id, "node")

            for node in nodes:
                store.insert_node(node)
            if ids:
                self.graph.node_allocator.advance_past(max(ids))
                self.graph.history.record(
                    "inject_nodes",
                    node_count=store.node_count(),
                    edge_count=store.edge_count(),
                )

        logger.info("injected %s nodes", len(ids))
        return ids

    def add_edges(self, edges: Iterable[Edge]) -> List[int]:
        edges = list(edges)
        for edge in edges:
            _check_edge(edge)
        ids = [e.id for e in edges]

        with self.graph.lock:
            store = self.graph.store

            _check_ids(ids, "edge")
            for edge in edges:
                if store.has_edge(edge.id):
                    raise DuplicateId(edge.id, "edge")
                for endpoint in (edge.source, edge.target):
                    if not store.has_node(endpoint):
                        raise UnknownId(endpoint, "node")

            for edge in edges:
                store.insert_edge(edge)
            if ids:
                self.graph.edge_allocator.advance_past(max(ids))
                self.graph.history.record(
                    "inject_edges",
                    node_count=store.node_count(),
                    edge_count=store.edge_count(),
                )

        logger.info("injected %s edges", len(ids))
        return ids
