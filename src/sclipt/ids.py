"""
Id generation for sclipt.

Ids are Unix timestamps in milliseconds, bumped so that every id issued is
strictly greater than any numeric id already stored and any id issued
earlier by the same generator.
"""

import time
from typing import Callable, Iterable


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


class IdGenerator:
    """Issues collision-free snippet ids within a process."""

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._last = 0

    def next_id(self, existing: Iterable[str] = ()) -> str:
        """
        Generate an id distinct from every id in `existing`.

        Args:
            existing: Ids currently in the collection

        Returns:
            The new id as a decimal string
        """
        taken = set(existing)
        floor = self._last
        for entry_id in taken:
            if entry_id.isascii() and entry_id.isdigit():
                floor = max(floor, int(entry_id))

        candidate = max(self._clock(), floor + 1)
        while str(candidate) in taken:
            candidate += 1

        self._last = candidate
        return str(candidate)
