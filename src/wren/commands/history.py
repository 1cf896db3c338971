"""Bounded in-memory log of past command invocations.

Entries live only for the session. Once the log is full, each append evicts
the oldest entry.
"""

import time
from collections import deque
from collections.abc import Callable

from .types import HistoryEntry

DEFAULT_HISTORY_SIZE = 50


class CommandHistory:
    """FIFO-bounded record of invocations and whether they succeeded."""

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE, clock: Callable[[], float] = time.time):
        if max_size < 1:
            raise ValueError(f"History size must be at least 1, got {max_size}")
        self._entries: deque[HistoryEntry] = deque(maxlen=max_size)
        self._clock = clock

    @property
    def max_size(self) -> int:
        return self._entries.maxlen

    def append(self, command: str, success: bool) -> HistoryEntry:
        entry = HistoryEntry(command=command, timestamp=self._clock(), success=success)
        self._entries.append(entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        """All entries, newest first."""
        return list(reversed(self._entries))

    def recent(self, limit: int = 10) -> list[str]:
        """Raw command strings of the most recent invocations, newest first."""
        return [entry.command for entry in self.entries()[:limit]]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
