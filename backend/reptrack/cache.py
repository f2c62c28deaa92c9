"""
In-memory TTL cache.

Instances are created by whoever owns the data (the catalog client, tests) and
passed around explicitly; there is no module-level cache. One instance is
shared by every request thread, so all access goes through a lock.
"""
from __future__ import annotations

import json
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    def __init__(self, ttl: float = 300.0, *, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(url: str, params: dict[str, Any] | None = None) -> str:
        """Stable key for a request: parameter order does not matter."""
        return f"{url}:{json.dumps(params or {}, sort_keys=True, default=str)}"

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._clock() > entry.expires_at:
                self._entries.pop(key, None)
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[key] = _Entry(value, now + (self.ttl if ttl is None else ttl))

    def _sweep(self, now: float) -> int:
        # caller holds the lock
        expired = [k for k, e in self._entries.items() if now > e.expires_at]
        for k in expired:
            del self._entries[k]
        return len(expired)

    def invalidate(self, pattern: str | re.Pattern[str]) -> int:
        """Drop one key (plain string) or every key matching a compiled regex."""
        with self._lock:
            if isinstance(pattern, str):
                return 1 if self._entries.pop(pattern, None) is not None else 0
            doomed = [k for k in self._entries if pattern.search(k)]
            for k in doomed:
                del self._entries[k]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {"size": len(self._entries), "entries": list(self._entries)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
