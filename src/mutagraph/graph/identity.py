from __future__ import annotations


class IdentityAllocator:
    """
    Issues strictly increasing positive integer identifiers, starting at 1.

    Identifiers are never handed out twice, even after the entity that
    held one has been deleted.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be >= 0")
        self._last = start

    @property
    def last_id(self) -> int:
        """Highest identifier issued so far (0 when none)."""
        return self._last

    def peek(self) -> int:
        return self._last + 1

    def next_id(self) -> int:
        self._last += 1
        return self._last

    def advance_past(self, identifier: int) -> None:
        """
        Ensure the next issued identifier is greater than `identifier`.
        """
        if identifier > self._last:
            self._last = identifier

    def copy(self) -> "IdentityAllocator":
        return IdentityAllocator(start=self._last)
