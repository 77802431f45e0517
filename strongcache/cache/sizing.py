"""Stock weight functions for :class:`~strongcache.cache.LruCache`."""

from __future__ import annotations

from typing import Any, Sized


def count_entries(key: Any, value: Any) -> int:
    """Every entry weighs 1, so capacity is an entry count."""
    return 1


def byte_length(key: Any, value: Sized) -> int:
    """Weigh bytes-like or text values by their length."""
    return len(value)
