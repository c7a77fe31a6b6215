"""Per-identifier mutual exclusion.

``KeyedLocks`` hands out one ``threading.Lock`` per key (an order ID, a
product ID) so that work on different keys never contends.  Entries are
reference-counted and dropped as soon as nobody holds or waits on them,
so the table does not grow with the number of orders ever seen.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class KeyedLocks:

    def __init__(self, name: str = "locks") -> None:
        self.name = name
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Block until ``key`` is free, then hold it for the ``with`` body."""
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"KeyedLocks({self.name!r}, active={len(self)})"
