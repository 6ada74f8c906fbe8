"""
Utility functions for mutagraph.

This module contains low-level helpers used across the system.
No graph logic should live here.
"""

from mutagraph.utils.text import is_numeric_token, split_edge_token
from mutagraph.utils.helpers import (
    to_scalar,
    is_sequence_value,
    as_token_list,
    edge_key,
    unique_in_order,
)

__all__ = [
    "is_numeric_token",
    "split_edge_token",
    "to_scalar",
    "is_sequence_value",
    "as_token_list",
    "edge_key",
    "unique_in_order",
]
