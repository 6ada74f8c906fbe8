from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Set, Tuple


class LabelIndex:
    """
    Maps a label to the set of node ids currently bearing it.

    Labels are not unique; callers decide what to do with several matches.
    """

    def __init__(self) -> None:
        self._ids: Dict[str, Set[int]] = defaultdict(set)

    def add(self, label: str, node_id: int) -> None:
        self._ids[label].add(node_id)

    def discard(self, label: str, node_id: int) -> None:
        ids = self._ids.get(label)
        if ids is None:
            return
        ids.discard(node_id)
        if not ids:
            del self._ids[label]

    def relabel(self, node_id: int, old: str, new: str) -> None:
        if old == new:
            return
        self.discard(old, node_id)
        self.add(new, node_id)

    def lookup(self, label: str) -> Set[int]:
        return set(self._ids.get(label, ()))

    def labels(self) -> Iterable[str]:
        return list(self._ids)

    def duplicates(self) -> Dict[str, Tuple[int, ...]]:
        """Labels borne by more than one node."""
        return {
            label: tuple(sorted(ids))
            for label, ids in self._ids.items()
            if len(ids) > 1
        }

    def __contains__(self, label: object) -> bool:
        return label in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def copy(self) -> "LabelIndex":
        clone = LabelIndex()
        for label, ids in self._ids.items():
            clone._ids[label] = set(ids)
        return clone
