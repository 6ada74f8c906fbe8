from __future__ import annotations

import networkx as nx
from typing import Any, Dict, Iterable, List, Literal, Sequence

from mutagraph.errors import DuplicateId, LengthMismatch, UnknownId
from mutagraph.graph.graph_schema import Node, Edge
from mutagraph.graph.label_index import LabelIndex
from mutagraph.utils.helpers import is_sequence_value


EntityKind = Literal["node", "edge"]


class GraphStore:
    """
    Node table and edge table of one graph.

    Nodes are keyed by id in a networkx MultiDiGraph; each edge is a
    multigraph edge keyed by its own id, so parallel edges never collide.
    A separate dict keeps the edge table in insertion order. The label
    index is maintained alongside the node table.

    The store enforces referential integrity (edges only between present
    nodes) but performs no address resolution and allocates no ids.
    """

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._edges: Dict[int, Edge] = {}
        self.labels = LabelIndex()

    # -------------------- Nodes --------------------

    def insert_node(self, node: Node) -> None:
        if node.id in self._graph:
            raise DuplicateId(node.id, "node")
        self._graph.add_node(node.id, data=node)
        self.labels.add(node.label, node.id)

    def has_node(self, node_id: int) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: int) -> Node:
        if node_id not in self._graph:
            raise UnknownId(node_id, "node")
        return self._graph.nodes[node_id]["data"]

    def get_nodes(self) -> List[Node]:
        return [data["data"] for _, data in self._graph.nodes(data=True)]

    def node_ids(self) -> List[int]:
        return list(self._graph.nodes)

    def replace_node(self, node: Node) -> None:
        old = self.get_node(node.id)
        self.labels.relabel(node.id, old.label, node.label)
        self._graph.nodes[node.id]["data"] = node

    def remove_node(self, node_id: int) -> bool:
        """
        Remove a node and every edge touching it.

        Returns False when the node was not present.
        """
        if node_id not in self._graph:
            return False

        for edge in self.incident_edges(node_id):
            del self._edges[edge.id]

        node = self._graph.nodes[node_id]["data"]
        self.labels.discard(node.label, node_id)
        self._graph.remove_node(node_id)
        return True

    # -------------------- Edges --------------------

    def insert_edge(self, edge: Edge) -> None:
        if edge.id in self._edges:
            raise DuplicateId(edge.id, "edge")
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._graph:
                raise UnknownId(endpoint, "node")

        self._graph.add_edge(edge.source, edge.target, key=edge.id, data=edge)
        self._edges[edge.id] = edge

    def has_edge(self, edge_id: int) -> bool:
        return edge_id in self._edges

    def get_edge(self, edge_id: int) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise UnknownId(edge_id, "edge") from None

    def get_edges(self) -> List[Edge]:
        return list(self._edges.values())

    def edge_ids(self) -> List[int]:
        return list(self._edges)

    def edges(self) -> Iterable[Edge]:
        yield from self._edges.values()

    def replace_edge(self, edge: Edge) -> None:
        old = self.get_edge(edge.id)
        if (old.source, old.target) != (edge.source, edge.target):
            raise ValueError("Edge endpoints are immutable")
        self._graph.edges[edge.source, edge.target, edge.id]["data"] = edge
        self._edges[edge.id] = edge

    def remove_edge(self, edge_id: int) -> bool:
        edge = self._edges.pop(edge_id, None)
        if edge is None:
            return False
        self._graph.remove_edge(edge.source, edge.target, key=edge_id)
        return True

    def edges_between(self, source: int, target: int) -> List[Edge]:
        """Edges on the ordered pair (source, target), oldest first."""
        if not self._graph.has_edge(source, target):
            return []
        keys = self._graph[source][target]
        return [self._edges[k] for k in sorted(keys)]

    def incident_edges(self, node_id: int) -> List[Edge]:
        """Edges having `node_id` as source or target (self-loops once)."""
        if node_id not in self._graph:
            return []
        keys = {k for _, _, k in self._graph.out_edges(node_id, keys=True)}
        keys.update(k for _, _, k in self._graph.in_edges(node_id, keys=True))
        return [self._edges[k] for k in sorted(keys)]

    # -------------------- Attributes --------------------

    def assign_attribute(
        self,
        kind: EntityKind,
        name: str,
        keys: Sequence[int],
        values: Any,
    ) -> int:
        """
        Set attribute `name` on every key in `keys`.

        `values` is either one scalar broadcast to all keys or a sequence
        matched positionally to `keys`. Everything is validated before the
        first record is replaced.
        """
        if kind == "node":
            getter, setter = self.get_node, self.replace_node
        elif kind == "edge":
            getter, setter = self.get_edge, self.replace_edge
        else:
            raise ValueError(f"Unknown entity kind: {kind!r}")

        if is_sequence_value(values):
            values = list(values)
            if len(values) != len(keys):
                raise LengthMismatch(expected=len(keys), actual=len(values))
        else:
            values = [values] * len(keys)

        updated = [getter(key).with_attribute(name, value) for key, value in zip(keys, values)]

        for record in updated:
            setter(record)

        return len(updated)

    # -------------------- Analytics --------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return len(self._edges)

    def integrity_violations(self) -> List[str]:
        """
        Describe every edge that references a missing node or is out of
        sync with the adjacency structure. Empty when consistent.
        """
        problems: List[str] = []
        for edge in self._edges.values():
            if edge.source not in self._graph:
                problems.append(f"edge {edge.id}: dangling source {edge.source}")
            if edge.target not in self._graph:
                problems.append(f"edge {edge.id}: dangling target {edge.target}")
            elif not self._graph.has_edge(edge.source, edge.target, key=edge.id):
                problems.append(f"edge {edge.id}: missing from adjacency")
        if self._graph.number_of_edges() != len(self._edges):
            problems.append(
                f"adjacency holds {self._graph.number_of_edges()} edges, "
                f"edge table holds {len(self._edges)}"
            )
        for node_id, data in self._graph.nodes(data=True):
            if node_id not in self.labels.lookup(data["data"].label):
                problems.append(f"node {node_id}: label not indexed")
        return problems

    # -------------------- Cloning --------------------

    def clone(self) -> "GraphStore":
        g = GraphStore()
        g._graph = self._graph.copy()
        g._edges = dict(self._edges)
        g.labels = self.labels.copy()
        return g
