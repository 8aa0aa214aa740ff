"""Process-wide get-or-compute cache with TTL eviction.

Values are computed on demand by a supplier. At most one computation runs per
key at any time: concurrent callers asking for the same key wait for the
first caller's result instead of calling the supplier again.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry:
    """Cached value with its creation time."""

    value: Any
    created_at: float


class _KeyLock:
    """Per-key lock with a count of threads holding or waiting on it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class CachingService:
    """TTL-bounded cache with single-flight computation per key.

    ``None`` results are returned but not stored, and exceptions raised by
    the supplier propagate to the caller without being cached, so a failing
    lookup is retried on the next request.
    """

    def __init__(
        self,
        ttl_seconds: int = 600,
        max_entries: int = 10000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache.

        Args:
            ttl_seconds: Time-to-live for cached values
            max_entries: Maximum number of cached values, oldest evicted first
            clock: Monotonic time source
        """
        if ttl_seconds <= 0:
            raise ValueError("TTL must be positive")
        if max_entries <= 0:
            raise ValueError("Max entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._key_locks: Dict[str, _KeyLock] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str, supplier: Callable[[], Optional[T]]) -> Optional[T]:
        """Return the cached value for key, computing it with supplier on a miss."""
        found, value = self._lookup(key)
        if found:
            return value

        key_lock = self._acquire_key_lock(key)
        try:
            with key_lock.lock:
                # Another caller may have filled the entry while we waited
                found, value = self._lookup(key, count=False)
                if found:
                    return value

                logger.debug(f"Cache miss for '{key}', computing value")
                value = supplier()
                if value is not None:
                    self._store(key, value)
                return value
        finally:
            self._release_key_lock(key, key_lock)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def remove_all(self) -> None:
        """Drop every cached value."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} cache entries")

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def get_stats(self) -> Dict[str, Any]:
        """Cache statistics for monitoring."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "entries": len(self._entries),
                "hit_count": self._hits,
                "miss_count": self._misses,
                "eviction_count": self._evictions,
                "hit_ratio": (self._hits / total) if total else 0.0,
                "ttl_seconds": self.ttl_seconds,
            }

    def _lookup(self, key: str, count: bool = True) -> Tuple[bool, Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_expired(entry):
                del self._entries[key]
                self._evictions += 1
                entry = None
            if count:
                if entry is None:
                    self._misses += 1
                else:
                    self._hits += 1
            if entry is None:
                return False, None
            return True, entry.value

    def _store(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, created_at=self._clock())
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Evicted cache entry '{evicted_key}'")

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at >= self.ttl_seconds

    def _acquire_key_lock(self, key: str) -> _KeyLock:
        with self._lock:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = _KeyLock()
                self._key_locks[key] = key_lock
            key_lock.users += 1
            return key_lock

    def _release_key_lock(self, key: str, key_lock: _KeyLock) -> None:
        with self._lock:
            key_lock.users -= 1
            if key_lock.users == 0:
                self._key_locks.pop(key, None)
