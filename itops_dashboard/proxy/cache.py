"""Per-sheet TTL cache for the proxy. Entries expire on read; nothing is evicted."""

import time
from typing import Callable


class SheetCache:
    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    def get(self, name: str) -> str | None:
        entry = self._entries.get(name)
        if entry is None:
            return None
        fetched_at, text = entry
        if self._clock() - fetched_at >= self.ttl:
            return None
        return text

    def set(self, name: str, text: str) -> str:
        self._entries[name] = (self._clock(), text)
        return text

    def names(self) -> list[str]:
        """Every sheet name ever cached, expired or not."""
        return list(self._entries)
