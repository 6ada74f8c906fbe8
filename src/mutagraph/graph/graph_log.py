from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List


@dataclass(frozen=True)
class GraphAction:
    """
    One successful mutation, with the graph size it left behind.
    """

    version: int
    function: str
    timestamp: datetime
    node_count: int
    edge_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "function": self.function,
            "timestamp": self.timestamp.isoformat(),
            "node_count": self.node_count,
            "edge_count": self.edge_count,
        }


class GraphLog:
    """
    Append-only history of graph mutations.

    Keeps at most `limit` entries (oldest dropped first); a limit of 0
    records nothing. Versions keep counting even when entries are dropped.
    """

    def __init__(self, limit: int = 1000) -> None:
        self.limit = limit
        self._actions: Deque[GraphAction] = deque(maxlen=limit or None)
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def record(self, function: str, *, node_count: int, edge_count: int) -> None:
        self._version += 1
        if self.limit == 0:
            return
        self._actions.append(
            GraphAction(
                version=self._version,
                function=function,
                timestamp=datetime.now(timezone.utc),
                node_count=node_count,
                edge_count=edge_count,
            )
        )

    def all(self) -> List[GraphAction]:
        return list(self._actions)

    def last(self) -> GraphAction | None:
        return self._actions[-1] if self._actions else None

    def filter(self, *, function: str | None = None) -> List[GraphAction]:
        results = list(self._actions)

        if function is not None:
            results = [a for a in results if a.function == function]

        return results

    def copy(self) -> "GraphLog":
        clone = GraphLog(limit=self.limit)
        clone._actions.extend(self._actions)
        clone._version = self._version
        return clone

    def __len__(self) -> int:
        return len(self._actions)
