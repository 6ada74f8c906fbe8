from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from mutagraph.utils.helpers import to_scalar


_MISSING = object()

# Attribute names that map onto record fields rather than the free mapping.
NODE_FIELDS = ("label", "type")
EDGE_FIELDS = ("rel",)

# Attribute names that can never be assigned.
RESERVED_NODE_ATTRIBUTES = ("id",)
RESERVED_EDGE_ATTRIBUTES = ("id", "from", "to")


def _clean_attributes(attributes: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {str(k): to_scalar(v) for k, v in (attributes or {}).items()}


@dataclass(frozen=True)
class Node:
    """
    Vertex record of the node table.

    `label` is always set; `type` is optional. Any other attribute lives in
    `attributes`, in insertion order.
    """

    id: int
    label: str
    type: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def create(
        id: int,
        label: Optional[str] = None,
        type: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> "Node":
        attrs = _clean_attributes(attributes)
        if label is None:
            label = attrs.get("label")
        if type is None:
            type = attrs.get("type")
        for name in RESERVED_NODE_ATTRIBUTES + NODE_FIELDS:
            attrs.pop(name, None)
        return Node(
            id=id,
            label=str(id) if label is None else str(to_scalar(label)),
            type=None if type is None else str(to_scalar(type)),
            attributes=attrs,
        )

    def get(self, name: str, default: Any = None) -> Any:
        if name == "id":
            return self.id
        if name in NODE_FIELDS:
            value = getattr(self, name)
            return default if value is None else value
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return self.get(name, _MISSING) is not _MISSING

    def with_attribute(self, name: str, value: Any) -> "Node":
        if name in RESERVED_NODE_ATTRIBUTES:
            raise ValueError(f"Node attribute {name!r} cannot be assigned")
        value = to_scalar(value)
        if name == "label":
            return replace(self, label=str(self.id) if value is None else str(value))
        if name == "type":
            return replace(self, type=None if value is None else str(value))
        return replace(self, attributes={**self.attributes, name: value})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            **self.attributes,
        }


@dataclass(frozen=True)
class Edge:
    """
    Directed edge record of the edge table.

    Several edges may share the same (source, target) pair; each has its
    own id.
    """

    id: int
    source: int
    target: int
    rel: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def create(
        id: int,
        source: int,
        target: int,
        rel: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> "Edge":
        attrs = _clean_attributes(attributes)
        if rel is None and attrs.get("rel") is not None:
            rel = attrs["rel"]
        for name in RESERVED_EDGE_ATTRIBUTES + EDGE_FIELDS:
            attrs.pop(name, None)
        return Edge(
            id=id,
            source=source,
            target=target,
            rel=None if rel is None else str(to_scalar(rel)),
            attributes=attrs,
        )

    def get(self, name: str, default: Any = None) -> Any:
        if name == "id":
            return self.id
        if name == "from":
            return self.source
        if name == "to":
            return self.target
        if name == "rel":
            return default if self.rel is None else self.rel
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return self.get(name, _MISSING) is not _MISSING

    def with_attribute(self, name: str, value: Any) -> "Edge":
        if name in RESERVED_EDGE_ATTRIBUTES:
            raise ValueError(f"Edge attribute {name!r} cannot be assigned")
        value = to_scalar(value)
        if name == "rel":
            return replace(self, rel=None if value is None else str(value))
        return replace(self, attributes={**self.attributes, name: value})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "rel": self.rel,
            **self.attributes,
        }
