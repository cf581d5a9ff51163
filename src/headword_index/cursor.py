"""Shared work cursor handing out page indices to worker threads."""
from __future__ import annotations

import threading
from typing import Optional

__all__ = ["Cursor"]


class Cursor:
    """
    Thread-safe allocator for the indices 1..limit.

    Each call to claim() returns the next unissued index in strictly
    increasing order, or None once the range is exhausted. Exhaustion is
    permanent: the limit can only go down, and truncate() lowers it to the
    number of indices already issued so workers stop picking up new pages
    while the ones they already hold finish normally.
    """

    def __init__(self, limit: int):
        """
        Initialize cursor.

        Args:
            limit: Highest index to hand out (the run's page count)
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        # Reentrant: the interrupt handler can run while this thread holds it
        self._lock = threading.RLock()
        self._next = 1
        self._limit = limit

    def claim(self) -> Optional[int]:
        """
        Claim the next index.

        Returns:
            The claimed index, or None once no more work will be issued
        """
        with self._lock:
            if self._next > self._limit:
                return None
            key = self._next
            self._next += 1
            return key

    def truncate(self, limit: Optional[int] = None) -> int:
        """
        Stop issuing indices beyond the current point.

        Args:
            limit: Optional new limit; values above the issued count are
                   clamped to it. Defaults to the issued count.

        Returns:
            The effective limit after truncation
        """
        with self._lock:
            issued = self._next - 1
            target = issued if limit is None else min(limit, issued)
            self._limit = min(self._limit, target)
            return self._limit

    @property
    def issued(self) -> int:
        """Number of indices handed out so far."""
        with self._lock:
            return self._next - 1

    @property
    def limit(self) -> int:
        """Current effective limit."""
        with self._lock:
            return self._limit

    @property
    def exhausted(self) -> bool:
        """True once claim() will only return None."""
        with self._lock:
            return self._next > self._limit
