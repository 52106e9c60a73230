"""Result caching: LRU/TTL tiers and key memoization."""

from zyracss.cache.keys import KeyMemoizer, short_hash
from zyracss.cache.system import CacheSystem
from zyracss.cache.tier import CacheEntry, CacheTier

__all__ = ["CacheEntry", "CacheTier", "KeyMemoizer", "short_hash", "CacheSystem"]
