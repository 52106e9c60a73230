"""A bounded, TTL'd, LRU-evicted key -> value store."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass
class CacheEntry(Generic[T]):
    """A cached value.

    ``timestamp`` is the insertion time and is not moved by reads, so an
    entry expires exactly ``ttl`` seconds after it was set.
    """

    value: T
    timestamp: float
    access_count: int = 0
    last_accessed: float = 0.0


class CacheTier(Generic[T]):
    """Thread-safe LRU cache with per-entry TTL.

    Invariant: ``len(self) <= max_size`` after every operation. Inserting a
    new key into a full tier evicts the least recently used entry first.
    """

    def __init__(
        self,
        name: str,
        max_size: int,
        ttl: float,
        clock: Clock = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self.name = name
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.expirations = 0

    # --- read / write ---------------------------------------------------------

    def _expired(self, entry: CacheEntry[T], now: float) -> bool:
        return now - entry.timestamp > self.ttl

    def get(self, key: str, default: Any = None) -> T | Any:
        """Return the value for *key*, or *default* if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return default
            now = self._clock()
            if self._expired(entry, now):
                del self._entries[key]
                self.expirations += 1
                self.misses += 1
                return default
            self._entries.move_to_end(key)
            entry.access_count += 1
            entry.last_accessed = now
            self.hits += 1
            return entry.value

    def set(self, key: str, value: T) -> None:
        with self._lock:
            now = self._clock()
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
                logger.debug("%s cache evicted %r", self.name, evicted)
            self._entries[key] = CacheEntry(value=value, timestamp=now, last_accessed=now)

    def has(self, key: str) -> bool:
        """True if *key* is present and unexpired. Does not refresh recency."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if self._expired(entry, self._clock()):
                del self._entries[key]
                self.expirations += 1
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def optimize(self, max_age: float) -> int:
        """Drop every entry older than *max_age* seconds; return the count."""
        with self._lock:
            now = self._clock()
            stale = [k for k, e in self._entries.items() if now - e.timestamp > max_age]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("%s cache swept %d stale entries", self.name, len(stale))
        return len(stale)

    # --- introspection --------------------------------------------------------

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def keys(self) -> Iterator[str]:
        """Snapshot of keys, least recently used first."""
        with self._lock:
            return iter(list(self._entries))

    def stats(self) -> dict[str, Any]:
        with self._lock:
            lookups = self.hits + self.misses
            return {
                "name": self.name,
                "size": len(self._entries),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "expirations": self.expirations,
                "hit_rate": self.hits / lookups if lookups else 0.0,
                "utilization": len(self._entries) / self.max_size,
            }
