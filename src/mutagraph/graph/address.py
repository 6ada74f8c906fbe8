from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Union

import numpy as np

from mutagraph.errors import (
    AddressError,
    AmbiguousLabel,
    UnknownId,
    UnknownLabel,
    UnresolvedAddress,
)
from mutagraph.graph.graph_store import GraphStore
from mutagraph.utils.helpers import as_token_list
from mutagraph.utils.text import is_numeric_token


@dataclass(frozen=True)
class ById:
    """Address naming a node by its identifier."""

    id: int

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class ByLabel:
    """Address naming a node by its label."""

    label: str

    def __str__(self) -> str:
        return self.label


Address = Union[ById, ByLabel]


def parse_address(token: Any) -> Address:
    """
    Turn a raw token into an Address.

    Integers, whole-number floats and numeric strings ("3") address by
    id; any other string addresses by label.
    """
    if isinstance(token, (ById, ByLabel)):
        return token
    # bool is an int subclass but never a node id
    if isinstance(token, (bool, np.bool_)):
        raise TypeError(f"Cannot use {token!r} as a node address")
    if isinstance(token, (int, np.integer)):
        return ById(int(token))
    if isinstance(token, (float, np.floating)):
        if not float(token).is_integer():
            raise TypeError(f"Cannot use fractional {token!r} as a node address")
        return ById(int(token))
    if isinstance(token, str):
        if is_numeric_token(token):
            return ById(int(token))
        return ByLabel(token)
    raise TypeError(
        f"Node addresses must be ints or strings, got {type(token).__name__}"
    )


class AddressResolver:
    """
    Resolves addresses against a GraphStore's node table and label index.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def resolve(self, token: Any) -> int:
        address = parse_address(token)

        if isinstance(address, ById):
            if not self.store.has_node(address.id):
                raise UnknownId(address.id, "node")
            return address.id

        matches = self.store.labels.lookup(address.label)
        if not matches:
            raise UnknownLabel(address.label)
        if len(matches) > 1:
            raise AmbiguousLabel(address.label, matches)
        return next(iter(matches))

    def resolve_many(self, tokens: Any) -> List[int]:
        """
        Resolve every token, reporting all failures at once.

        Accepts a single token or a sequence of tokens. Raises
        UnresolvedAddress if any of them fails.
        """
        resolved: List[int] = []
        errors: List[AddressError] = []

        for token in as_token_list(tokens):
            try:
                resolved.append(self.resolve(token))
            except AddressError as exc:
                errors.append(exc)

        if errors:
            raise UnresolvedAddress(errors)
        return resolved

