"""Quote Cache: Time-bounded cache shared by concurrent callers.

Entries expire `ttl_seconds` after they are written. Every read and
write goes through one lock, so a single cache instance can be shared
across threads. The cache is constructed explicitly and passed to the
components that use it.
"""

import threading
import time
from typing import Callable, Generic, Hashable, TypeVar

T = TypeVar("T")


class QuoteCache(Generic[T]):
    """TTL cache keyed by ticker (or any hashable key).

    Example:
        >>> cache = QuoteCache(ttl_seconds=90)
        >>> cache.set("AAPL", 185.2)
        >>> cache.get("AAPL")
        185.2
    """

    def __init__(
        self,
        ttl_seconds: float = 90.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got: {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[Hashable, tuple[float, T]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: Hashable) -> T | None:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: Hashable, value: T) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)

    def get_or_load(self, key: Hashable, loader: Callable[[], T]) -> T:
        """Return the cached value, calling `loader` on a miss.

        The loader runs outside the lock; concurrent misses on the same
        key may each call it, and the last write wins. Loader exceptions
        propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def purge_expired(self) -> int:
        """Drop expired entries, returning how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, (exp, _) in self._entries.items() if now >= exp]
            for k in expired:
                del self._entries[k]
            return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
