"""
In-memory cache of upstream query results.

Entries are keyed by ``(region_code, start_date, end_date)`` and remember the
state of the query, so a caller can tell a running fetch from a finished or
failed one. Only successful entries younger than the TTL are served; entries
of any status are dropped once older than the TTL, on read and on every write.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

PENDING = "pending"
SUCCESS = "success"
ERROR = "error"

CacheKey = Tuple[str, Optional[str], Optional[str]]


@dataclass
class CacheEntry:
    status: str
    data: Any = None
    timestamp: float = field(default_factory=time.monotonic)


class QueryCache:
    """Thread-safe TTL cache with explicit invalidation."""

    def __init__(self, ttl_seconds: int = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[Any]:
        """Return cached data for ``key`` if it is a fresh success, else None."""
        with self._lock:
            self._sweep(self._clock())
            entry = self._entries.get(key)
            if entry is None:
                return None
            return entry.data if entry.status == SUCCESS else None

    def entry(self, key: CacheKey) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def mark_pending(self, key: CacheKey) -> None:
        self._store(key, PENDING)

    def put(self, key: CacheKey, data: Any) -> None:
        self._store(key, SUCCESS, data)

    def mark_error(self, key: CacheKey, error: Exception) -> None:
        self._store(key, ERROR, str(error))

    def discard(self, key: CacheKey) -> None:
        """Forget ``key`` whatever its status."""
        with self._lock:
            self._entries.pop(key, None)

    def _store(self, key: CacheKey, status: str, data: Any = None) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[key] = CacheEntry(status=status, data=data, timestamp=now)

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp >= self.ttl_seconds

    def _sweep(self, now: float) -> int:
        # caller holds the lock
        expired = [key for key, entry in self._entries.items() if self._expired(entry, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def invalidate(self, region_code: Optional[str] = None) -> int:
        """
        Evict entries for one region, or every entry when no region is given.

        Returns:
            int: Number of evicted entries
        """
        with self._lock:
            if region_code is None:
                evicted = len(self._entries)
                self._entries.clear()
                return evicted

            keys = [key for key in self._entries if key[0] == region_code]
            for key in keys:
                del self._entries[key]
            return len(keys)

    def clear(self) -> None:
        self.invalidate()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
