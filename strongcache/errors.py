from __future__ import annotations


class StrongCacheError(Exception):
    """Base error for the cache package."""


class InvalidArgumentError(StrongCacheError, ValueError):
    """Raised for a None key/value, a negative capacity or a negative entry weight."""


class CacheConsistencyError(StrongCacheError, RuntimeError):
    """Raised when size accounting no longer matches the stored entries."""
