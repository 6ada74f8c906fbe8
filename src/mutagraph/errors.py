from __future__ import annotations

from typing import Any, List, Sequence


class GraphError(Exception):
    """Base exception for graph operations."""


class AddressError(GraphError):
    """Raised when an address token cannot be resolved to a single node."""


class UnknownId(AddressError):
    def __init__(self, identifier: int, kind: str = "node") -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"Unknown {kind} id: {identifier}")


class UnknownLabel(AddressError):
    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"No node bears the label {label!r}")


class AmbiguousLabel(AddressError):
    def __init__(self, label: str, node_ids: Sequence[int]) -> None:
        self.label = label
        self.node_ids = sorted(node_ids)
        super().__init__(
            f"Label {label!r} is borne by {len(self.node_ids)} nodes: {self.node_ids}"
        )


class UnresolvedAddress(AddressError):
    """
    Aggregate failure of a bulk resolution.

    Carries every individual resolution error, not only the first one.
    """

    def __init__(self, errors: List[AddressError]) -> None:
        self.errors = list(errors)
        details = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{len(self.errors)} address(es) could not be resolved: {details}")


class NoSuchEdge(GraphError):
    def __init__(self, source: Any, target: Any) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Edge not found: {source} -> {target}")


class LengthMismatch(GraphError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Got {actual} values for {expected} targets"
        )


class DuplicateId(GraphError):
    def __init__(self, identifier: int, kind: str = "node") -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"{kind.capitalize()} already exists: {identifier}")
