"""
Bounded in-memory LRU cache with weighted capacity and removal hooks.
"""

from __future__ import annotations

from strongcache.cache import LruCache, byte_length, count_entries
from strongcache.config import CacheSettings, build_cache
from strongcache.errors import CacheConsistencyError, InvalidArgumentError, StrongCacheError

__all__ = [
    "CacheConsistencyError",
    "CacheSettings",
    "InvalidArgumentError",
    "LruCache",
    "StrongCacheError",
    "build_cache",
    "byte_length",
    "count_entries",
]
