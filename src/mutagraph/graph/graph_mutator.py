from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from mutagraph.config.settings import StoreConfig
from mutagraph.errors import (
    AddressError,
    GraphError,
    LengthMismatch,
    NoSuchEdge,
    UnknownId,
    UnresolvedAddress,
)
from mutagraph.graph.address import AddressResolver, ById, parse_address
from mutagraph.graph.graph_log import GraphLog
from mutagraph.graph.graph_query import EdgeShape, EdgeValues, GraphQueryEngine
from mutagraph.graph.graph_schema import Edge, Node
from mutagraph.graph.graph_store import EntityKind, GraphStore
from mutagraph.graph.identity import IdentityAllocator
from mutagraph.utils.helpers import as_token_list, is_sequence_value, unique_in_order
from mutagraph.utils.text import split_edge_token


logger = logging.getLogger("mutagraph.graph")


class _AllEntities:
    def __repr__(self) -> str:
        return "ALL"


ALL = _AllEntities()


@dataclass(frozen=True)
class NodeDeletion:
    """
    Outcome of delete_node: the removed node and the edges removed with it.
    """

    node_id: int
    edge_ids: Tuple[int, ...]

    @property
    def edges_removed(self) -> int:
        return len(self.edge_ids)


class GraphMutator:
    """
    Mutable directed multigraph with id and label addressing.

    Every public operation runs under the instance lock and validates all
    of its inputs before touching a table: it is either applied in full or
    rejected with no visible effect (no node, edge, identifier or history
    entry consumed).
    """

    def __init__(self, config: Optional[StoreConfig] = None) -> None:
        self.config = config or StoreConfig()
        self.store = GraphStore()
        self.resolver = AddressResolver(self.store)
        self.query = GraphQueryEngine(
            self.store,
            edge_separator=self.config.edge_separator,
        )
        self.node_allocator = IdentityAllocator()
        self.edge_allocator = IdentityAllocator()
        self.history = GraphLog(limit=self.config.history_limit)
        self.lock = threading.RLock()

    def __repr__(self) -> str:
        return (
            f"GraphMutator(nodes={self.store.node_count()}, "
            f"edges={self.store.edge_count()})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, function: str) -> None:
        self.history.record(
            function,
            node_count=self.store.node_count(),
            edge_count=self.store.edge_count(),
        )

    def _resolve(self, token: Any, operation: str) -> int:
        try:
            return self.resolver.resolve(token)
        except AddressError as exc:
            logger.debug("%s rejected: %s", operation, exc)
            raise

    def _resolve_many(self, tokens: Any, operation: str) -> List[int]:
        try:
            return self.resolver.resolve_many(tokens)
        except UnresolvedAddress as exc:
            logger.debug("%s rejected: %s", operation, exc)
            raise

    def _node_type(
        self,
        type: Optional[str],
        attributes: Optional[Dict[str, Any]],
    ) -> Optional[str]:
        if type is not None:
            return type
        if attributes and attributes.get("type") is not None:
            return attributes["type"]
        return self.config.default_node_type

    def _resolve_endpoints(
        self,
        from_: Any,
        to: Any,
    ) -> Tuple[List[int], List[int]]:
        errors: List[AddressError] = []
        resolved: List[List[int]] = []

        for tokens in (from_, to):
            try:
                resolved.append(self.resolver.resolve_many(tokens))
            except UnresolvedAddress as exc:
                errors.extend(exc.errors)
                resolved.append([])

        if errors:
            exc = UnresolvedAddress(errors)
            logger.debug("add_node rejected: %s", exc)
            raise exc
        return resolved[0], resolved[1]

    def _new_edge(
        self,
        source: int,
        target: int,
        rel: Optional[str],
        attributes: Optional[Dict[str, Any]],
    ) -> Edge:
        edge = Edge.create(
            id=self.edge_allocator.peek(),
            source=source,
            target=target,
            rel=rel,
            attributes=attributes,
        )
        self.edge_allocator.next_id()
        self.store.insert_edge(edge)
        return edge

    def _select(self, kind: EntityKind, selector: Any) -> List[int]:
        if selector is None or selector is ALL:
            if kind == "node":
                return self.store.node_ids()
            return self.store.edge_ids()

        if kind == "node":
            return unique_in_order(self._resolve_many(selector, "set_attribute"))

        edge_ids = unique_in_order(int(k) for k in as_token_list(selector))
        for edge_id in edge_ids:
            if not self.store.has_edge(edge_id):
                raise UnknownId(edge_id, "edge")
        return edge_ids

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(
        self,
        type: Optional[str] = None,
        label: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
        *,
        from_: Any = None,
        to: Any = None,
        rel: Optional[str] = None,
    ) -> int:
        """
        Add one node, optionally wired to existing nodes.

        `from_` nodes get an edge into the new node, `to` nodes an edge out
        of it. The label defaults to the string form of the new id.

        Raises UnresolvedAddress if any `from_`/`to` address fails; the
        node id is not consumed in that case.
        """
        with self.lock:
            sources, targets = self._resolve_endpoints(from_, to)

            node = Node.create(
                id=self.node_allocator.peek(),
                label=label,
                type=self._node_type(type, attributes),
                attributes=attributes,
            )

            self.node_allocator.next_id()
            self.store.insert_node(node)

            for source in sources:
                self._new_edge(source, node.id, rel, None)
            for target in targets:
                self._new_edge(node.id, target, rel, None)

            logger.debug(
                "added node %s (label=%r) with %s in / %s out edges",
                node.id,
                node.label,
                len(sources),
                len(targets),
            )
            self._commit("add_node")
            return node.id

    def add_n_nodes(
        self,
        n: int,
        type: Optional[str] = None,
        label: Any = None,
    ) -> List[int]:
        """
        Add `n` unconnected nodes. `label` may be one value for all of them
        or a sequence of `n` labels.
        """
        if n < 0:
            raise ValueError("n must be >= 0")

        with self.lock:
            if is_sequence_value(label):
                labels = list(label)
                if len(labels) != n:
                    raise LengthMismatch(expected=n, actual=len(labels))
            else:
                labels = [label] * n

            first = self.node_allocator.peek()
            nodes = [
                Node.create(
                    id=first + offset,
                    label=node_label,
                    type=self._node_type(type, None),
                )
                for offset, node_label in enumerate(labels)
            ]

            ids: List[int] = []
            for node in nodes:
                self.node_allocator.next_id()
                self.store.insert_node(node)
                ids.append(node.id)

            logger.debug("added %s nodes: %s", n, ids)
            if ids:
                self._commit("add_n_nodes")
            return ids

    def delete_node(self, address: Any) -> NodeDeletion:
        """
        Remove a node and every edge that has it as source or target.
        """
        with self.lock:
            node_id = self._resolve(address, "delete_node")
            edge_ids = tuple(e.id for e in self.store.incident_edges(node_id))

            self.store.remove_node(node_id)

            logger.debug(
                "deleted node %s and %s incident edges",
                node_id,
                len(edge_ids),
            )
            self._commit("delete_node")
            return NodeDeletion(node_id=node_id, edge_ids=edge_ids)

    def get_node(self, address: Any) -> Node:
        with self.lock:
            return self.store.get_node(self.resolver.resolve(address))

    def get_node_ids(self) -> List[int]:
        with self.lock:
            return self.query.node_ids()

    def is_node_present(self, address: Any) -> bool:
        """
        True when the id exists, or when at least one node bears the label.
        """
        with self.lock:
            parsed = parse_address(address)
            if isinstance(parsed, ById):
                return self.store.has_node(parsed.id)
            return parsed.label in self.store.labels

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(
        self,
        from_: Any,
        to: Any,
        rel: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Add a directed edge between two existing nodes.

        Each endpoint must resolve to exactly one node; endpoints are never
        created implicitly.
        """
        with self.lock:
            source = self._resolve(from_, "add_edge")
            target = self._resolve(to, "add_edge")

            edge = self._new_edge(source, target, rel, attributes)

            logger.debug("added edge %s: %s -> %s", edge.id, source, target)
            self._commit("add_edge")
            return edge.id

    def add_edges_from_string(self, edges: str, rel: Optional[str] = None) -> List[int]:
        """
        Add edges written as "1->2 2->3 a->b" (whitespace separated).

        All tokens are parsed and resolved before any edge is created.
        """
        with self.lock:
            pairs: List[Tuple[int, int]] = []
            errors: List[AddressError] = []

            for token in edges.split():
                left, right = split_edge_token(token, self.config.edge_separator)
                try:
                    pairs.append((self.resolver.resolve(left), self.resolver.resolve(right)))
                except AddressError as exc:
                    errors.append(exc)

            if errors:
                exc = UnresolvedAddress(errors)
                logger.debug("add_edges_from_string rejected: %s", exc)
                raise exc

            ids = [self._new_edge(s, t, rel, None).id for s, t in pairs]

            logger.debug("added %s edges from string", len(ids))
            if ids:
                self._commit("add_edges_from_string")
            return ids

    def delete_edge(self, from_: Any, to: Any) -> List[int]:
        """
        Remove edges on the ordered pair (from_, to).

        With the "all" policy every parallel edge goes; with "first" only
        the oldest one. Nodes are never removed.
        """
        with self.lock:
            source = self._resolve(from_, "delete_edge")
            target = self._resolve(to, "delete_edge")

            matches = self.store.edges_between(source, target)
            if not matches:
                logger.debug("delete_edge rejected: no edge %s -> %s", source, target)
                raise NoSuchEdge(source, target)

            if self.config.delete_edge_policy == "first":
                matches = matches[:1]

            removed = [e.id for e in matches]
            for edge_id in removed:
                self.store.remove_edge(edge_id)

            logger.debug("deleted edges %s (%s -> %s)", removed, source, target)
            self._commit("delete_edge")
            return removed

    def delete_edge_by_id(self, edge_id: int) -> int:
        with self.lock:
            if not self.store.remove_edge(edge_id):
                raise UnknownId(edge_id, "edge")

            logger.debug("deleted edge %s", edge_id)
            self._commit("delete_edge_by_id")
            return edge_id

    def get_edge(self, edge_id: int) -> Edge:
        with self.lock:
            return self.store.get_edge(edge_id)

    def get_edge_ids(self) -> List[int]:
        with self.lock:
            return self.query.edge_ids()

    def is_edge_present(self, from_: Any, to: Any) -> bool:
        with self.lock:
            try:
                source = self.resolver.resolve(from_)
                target = self.resolver.resolve(to)
            except AddressError:
                return False
            return bool(self.store.edges_between(source, target))

    def get_edges(
        self,
        shape: EdgeShape = "vector",
        values: EdgeValues = "id",
    ) -> Union[List[str], pd.DataFrame, Dict[str, List[Any]]]:
        with self.lock:
            return self.query.get_edges(shape=shape, values=values)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_attribute(
        self,
        kind: EntityKind,
        name: str,
        values: Any,
        selector: Any = ALL,
    ) -> int:
        """
        Assign attribute `name` to the selected nodes or edges.

        selector: ALL, or explicit keys (node addresses / edge ids).
        values:   one value for every target, or a sequence matched to the
                  selector's order (LengthMismatch if the lengths differ).

        Returns the number of entities updated.
        """
        if kind not in ("node", "edge"):
            raise ValueError(f"Unknown entity kind: {kind!r}")

        with self.lock:
            keys = self._select(kind, selector)
            try:
                count = self.store.assign_attribute(kind, name, keys, values)
            except (GraphError, TypeError, ValueError) as exc:
                logger.debug("set_attribute rejected: %s", exc)
                raise

            logger.debug("set %s attribute %r on %s entities", kind, name, count)
            if count:
                self._commit("set_attribute")
            return count

    def get_attribute(self, kind: EntityKind, name: str) -> Dict[Union[int, str], Any]:
        with self.lock:
            return self.query.get_attribute(kind, name)

    # ------------------------------------------------------------------
    # Counts & snapshots
    # ------------------------------------------------------------------

    def count_nodes(self) -> int:
        with self.lock:
            return self.store.node_count()

    def count_edges(self) -> int:
        with self.lock:
            return self.store.edge_count()

    def node_info(self) -> pd.DataFrame:
        with self.lock:
            return self.query.node_frame()

    def edge_info(self) -> pd.DataFrame:
        with self.lock:
            return self.query.edge_frame()

    def get_nodes(self) -> List[Node]:
        with self.lock:
            return self.store.get_nodes()

    def get_edge_records(self) -> List[Edge]:
        with self.lock:
            return self.store.get_edges()

    # ------------------------------------------------------------------
    # Cloning
    # ------------------------------------------------------------------

    def clone(self) -> "GraphMutator":
        with self.lock:
            g = GraphMutator(self.config)
            g.store = self.store.clone()
            g.resolver = AddressResolver(g.store)
            g.query = GraphQueryEngine(g.store, edge_separator=self.config.edge_separator)
            g.node_allocator = self.node_allocator.copy()
            g.edge_allocator = self.edge_allocator.copy()
            g.history = self.history.copy()
            return g
