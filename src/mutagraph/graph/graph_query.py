from __future__ import annotations

from typing import Any, Dict, List, Literal, Union

import pandas as pd

from mutagraph.graph.graph_store import EntityKind, GraphStore
from mutagraph.utils.helpers import edge_key


EdgeShape = Literal["vector", "frame", "lists"]
EdgeValues = Literal["id", "label"]

NODE_COLUMNS = ["id", "type", "label"]
EDGE_COLUMNS = ["id", "from", "to", "rel"]


def _frame(records: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
    if not records:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame.from_records(records)
    ordered = columns + [c for c in df.columns if c not in columns]
    return df[ordered]


class GraphQueryEngine:
    """
    Read-only projections over a GraphStore.

    Nothing here mutates the store, and nothing fails on an empty graph.
    """

    def __init__(self, store: GraphStore, *, edge_separator: str = "->") -> None:
        self.store = store
        self.edge_separator = edge_separator

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def get_edges(
        self,
        shape: EdgeShape = "vector",
        values: EdgeValues = "id",
    ) -> Union[List[str], pd.DataFrame, Dict[str, List[Any]]]:
        """
        Project the edge table's (from, to) pairs.

        shape:
        - "vector": ["1->2", ...]
        - "frame":  DataFrame with `from` and `to` columns
        - "lists":  {"from": [...], "to": [...]}

        values selects whether endpoints are rendered as ids or labels.
        """
        if values not in ("id", "label"):
            raise ValueError(f"values must be 'id' or 'label', got {values!r}")

        sources: List[Any] = []
        targets: List[Any] = []
        for edge in self.store.edges():
            if values == "label":
                sources.append(self.store.get_node(edge.source).label)
                targets.append(self.store.get_node(edge.target).label)
            else:
                sources.append(edge.source)
                targets.append(edge.target)

        if shape == "vector":
            return [
                edge_key(s, t, self.edge_separator)
                for s, t in zip(sources, targets)
            ]
        if shape == "frame":
            return pd.DataFrame({"from": sources, "to": targets})
        if shape == "lists":
            return {"from": sources, "to": targets}

        raise ValueError(f"Unknown edge shape: {shape!r}")

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def get_attribute(self, kind: EntityKind, name: str) -> Dict[Union[int, str], Any]:
        """
        Attribute values keyed by node id or by "src->dst" for edges.

        Entities without the attribute are left out.
        """
        result: Dict[Union[int, str], Any] = {}

        if kind == "node":
            for node in self.store.get_nodes():
                if node.has(name):
                    result[node.id] = node.get(name)
            return result

        if kind == "edge":
            for edge in self.store.edges():
                if edge.has(name):
                    key = edge_key(edge.source, edge.target, self.edge_separator)
                    # re-insert so parallel edges keep the latest position
                    result.pop(key, None)
                    result[key] = edge.get(name)
            return result

        raise ValueError(f"Unknown entity kind: {kind!r}")

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def node_frame(self) -> pd.DataFrame:
        return _frame([n.to_dict() for n in self.store.get_nodes()], NODE_COLUMNS)

    def edge_frame(self) -> pd.DataFrame:
        return _frame([e.to_dict() for e in self.store.get_edges()], EDGE_COLUMNS)

    def node_ids(self) -> List[int]:
        return self.store.node_ids()

    def edge_ids(self) -> List[int]:
        return self.store.edge_ids()
