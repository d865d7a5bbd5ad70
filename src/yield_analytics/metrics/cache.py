"""Simple in-memory TTL cache for computed API results."""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable
from typing import Any


class ResultCache:
    """Dict + monotonic clock TTL cache, bounded to *max_entries*. Not thread-safe.

    Writes purge expired entries first, then evict the oldest entries until
    there is room, so the cache stays bounded however many keys callers use.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_entries: int = 128,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        # Insertion order == write order, so the first key is always the oldest.
        self._store: dict[Hashable, tuple[float, Any]] = {}

    def get(self, key: Hashable) -> Any | None:
        """Return the cached value, or ``None`` if missing or expired."""
        entry = self._store.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at > self._ttl:
            del self._store[key]
            return None
        return value

    def set(self, key: Hashable, value: Any) -> None:
        now = self._clock()
        self._store.pop(key, None)
        self._purge_expired(now)
        while len(self._store) >= self._max_entries:
            del self._store[next(iter(self._store))]
        self._store[key] = (now, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (stored_at, _) in self._store.items() if now - stored_at > self._ttl]
        for k in expired:
            del self._store[k]

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        value = self.get(key)
        if value is None:
            value = compute()
            self.set(key, value)
        return value

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
