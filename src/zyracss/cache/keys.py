"""Frequency-aware memoization of cache keys and hashes.

Building a key means sorting, JSON-normalizing and hashing, and the same
keys recur across many lookups. Each key kind has its own bounded map;
when a map fills, the least-frequently-used fraction of it is dropped.
"""

from __future__ import annotations

import hashlib
import heapq
import json
import logging
import threading
from typing import Any, Iterable

logger = logging.getLogger(__name__)

HASH_LENGTH = 16

KINDS = ("parse", "generation", "rule", "hash")


def short_hash(text: str, length: int = HASH_LENGTH) -> str:
    """Truncated SHA-256 hex digest of *text*."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]


def _stable_json(data: Any) -> str:
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)


class KeyMemoizer:
    """Memoizes parse, generation and rule keys plus raw hashes."""

    def __init__(self, max_size: int = 10_000, eviction_fraction: float = 0.2) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        if not 0 < eviction_fraction <= 1:
            raise ValueError(f"eviction_fraction must be in (0, 1], got {eviction_fraction}")
        self.max_size = max_size
        self.eviction_fraction = eviction_fraction
        # Re-entrant: key builders memoize their hashes through self.hash()
        self._lock = threading.RLock()
        self._maps: dict[str, dict[str, str]] = {kind: {} for kind in KINDS}
        self._frequency: dict[tuple[str, str], int] = {}
        self._hits = {kind: 0 for kind in KINDS}
        self._misses = {kind: 0 for kind in KINDS}
        self.total_accesses = 0
        self.evictions = 0

    # --- core -----------------------------------------------------------------

    def _evict(self, kind: str) -> None:
        entries = self._maps[kind]
        count = max(1, int(len(entries) * self.eviction_fraction))
        coldest = heapq.nsmallest(
            count, entries, key=lambda k: self._frequency.get((kind, k), 0)
        )
        for key in coldest:
            del entries[key]
            self._frequency.pop((kind, key), None)
        self.evictions += len(coldest)
        logger.debug("Key memoizer evicted %d %s keys", len(coldest), kind)

    def _memoize(self, kind: str, lookup: str, build) -> str:
        with self._lock:
            self.total_accesses += 1
            entries = self._maps[kind]
            slot = (kind, lookup)
            cached = entries.get(lookup)
            if cached is not None:
                self._hits[kind] += 1
                self._frequency[slot] += 1
                return cached
            self._misses[kind] += 1
            if len(entries) >= self.max_size:
                self._evict(kind)
            value = build()
            entries[lookup] = value
            self._frequency[slot] = 1
            return value

    # --- key builders ---------------------------------------------------------

    def hash(self, text: str) -> str:
        return self._memoize("hash", text, lambda: short_hash(text))

    def parse_key(self, class_name: str) -> str:
        return self._memoize("parse", class_name, lambda: f"parse:{class_name}")

    def generation_key(self, classes: Iterable[Any], options: dict[str, Any]) -> str:
        """Order-insensitive key for a class list plus normalized options.

        Each token is JSON-encoded on its own before sorting, so no token
        text can imitate a separator and non-string tokens never collide
        with strings.
        """
        classes_json = _stable_json(sorted(_stable_json(c) for c in classes))
        options_json = _stable_json(options)
        lookup = f"{classes_json}\x00{options_json}"
        return self._memoize(
            "generation",
            lookup,
            lambda: f"gen:{self.hash(classes_json)}:{self.hash(options_json)}",
        )

    def rule_key(self, selector: str, declarations: dict[str, str]) -> str:
        declarations_json = _stable_json(declarations)
        lookup = f"{selector}\x00{declarations_json}"
        return self._memoize(
            "rule", lookup, lambda: f"rule:{selector}:{self.hash(declarations_json)}"
        )

    # --- maintenance ----------------------------------------------------------

    def optimize(self) -> int:
        """Drop keys used less than ``total / (live * 10)`` times."""
        with self._lock:
            live = sum(len(entries) for entries in self._maps.values())
            if not live:
                return 0
            threshold = max(1.0, self.total_accesses / (live * 10))
            removed = 0
            for kind, entries in self._maps.items():
                cold = [k for k in entries if self._frequency.get((kind, k), 0) < threshold]
                for key in cold:
                    del entries[key]
                    self._frequency.pop((kind, key), None)
                removed += len(cold)
        if removed:
            logger.debug("Key memoizer optimize removed %d keys", removed)
        return removed

    def clear(self) -> None:
        with self._lock:
            for entries in self._maps.values():
                entries.clear()
            self._frequency.clear()

    def frequency(self, kind: str, lookup: str) -> int:
        with self._lock:
            return self._frequency.get((kind, lookup), 0)

    def size(self, kind: str | None = None) -> int:
        with self._lock:
            if kind is not None:
                return len(self._maps[kind])
            return sum(len(entries) for entries in self._maps.values())

    def stats(self) -> dict[str, Any]:
        with self._lock:
            per_kind = {}
            for kind in KINDS:
                lookups = self._hits[kind] + self._misses[kind]
                per_kind[kind] = {
                    "size": len(self._maps[kind]),
                    "hits": self._hits[kind],
                    "misses": self._misses[kind],
                    "hit_rate": self._hits[kind] / lookups if lookups else 0.0,
                }
            return {
                "max_size": self.max_size,
                "total_accesses": self.total_accesses,
                "evictions": self.evictions,
                "kinds": per_kind,
            }
