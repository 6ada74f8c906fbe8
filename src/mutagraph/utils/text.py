from __future__ import annotations

import re


_NUMERIC_TOKEN = re.compile(r"^\s*\d+\s*$")


def is_numeric_token(text: str) -> bool:
    """
    True when the text is a bare non-negative integer literal ("3", " 12 ").
    """
    return bool(_NUMERIC_TOKEN.match(text))


def split_edge_token(token: str, separator: str) -> tuple[str, str]:
    """
    Splits "a->b" (or "a-b") into its two endpoint tokens.
    """
    for sep in (separator, "-"):
        left, found, right = token.partition(sep)
        if found and left.strip() and right.strip():
            return left.strip(), right.strip()
    raise ValueError(f"Malformed edge token: {token!r}")
