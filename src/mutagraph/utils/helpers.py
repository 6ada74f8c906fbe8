from __future__ import annotations

from typing import Any, Iterable, List

import numpy as np
import pandas as pd


SCALAR_TYPES = (str, int, float, bool, type(None))


def to_scalar(value: Any) -> Any:
    """
    Normalizes an attribute value to a plain Python scalar.

    numpy scalars are unwrapped; containers and other objects are rejected.
    """
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, SCALAR_TYPES):
        return value
    raise TypeError(
        f"Attribute values must be scalars, got {type(value).__name__}"
    )


def is_sequence_value(value: Any) -> bool:
    """
    True for positional value sequences (lists, tuples, 1-d arrays);
    strings count as scalars.
    """
    if isinstance(value, (str, bytes)):
        return False
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    if isinstance(value, (pd.Series, pd.Index)):
        return True
    return isinstance(value, (list, tuple))


def as_token_list(value: Any) -> List[Any]:
    """
    Wraps a single address token into a list; passes sequences through.
    """
    if value is None:
        return []
    if isinstance(value, (np.ndarray, pd.Series, pd.Index)):
        return value.tolist()
    if isinstance(value, (list, tuple, set, frozenset, range)):
        return list(value)
    return [value]


def edge_key(source: int, target: int, separator: str = "->") -> str:
    return f"{source}{separator}{target}"


def unique_in_order(values: Iterable[Any]) -> List[Any]:
    seen = set()
    out: List[Any] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out
