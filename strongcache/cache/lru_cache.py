from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Generic, MutableMapping, Optional, TypeVar

from strongcache.cache.sizing import count_entries
from strongcache.errors import CacheConsistencyError, InvalidArgumentError

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

SizeOf = Callable[[K, V], int]
EntryRemoved = Callable[[bool, K, V, Optional[V]], None]


def _ignore_removal(evicted: bool, key, old_value, new_value) -> None:
    return None


class LruCache(Generic[K, V]):
    """
    Thread-safe LRU cache holding strong references to its values.

    Capacity is expressed in weight units: ``size_of(key, value)`` gives the
    weight of each entry (1 by default, so ``max_size`` counts entries). When
    the total weight goes over ``max_size`` the least recently used entries
    are evicted.

    ``on_entry_removed(evicted, key, old_value, new_value)`` is called once for
    every entry that leaves the cache:
      - ``evicted=True``: dropped to make room, ``new_value`` is None
      - ``evicted=False`` with ``new_value``: overwritten by ``put``
      - ``evicted=False`` without ``new_value``: dropped by ``remove``

    The hook always runs with the internal lock released, so it may call
    back into the cache. ``size_of`` runs under the lock and must not.
    """

    def __init__(
        self,
        max_size: int,
        *,
        size_of: SizeOf | None = None,
        on_entry_removed: EntryRemoved | None = None,
    ):
        if max_size < 0:
            raise InvalidArgumentError("max_size must be >= 0")
        self._max_size = max_size
        self._size_of = size_of or count_entries
        self._on_entry_removed = on_entry_removed or _ignore_removal
        # value + weight recorded at insertion time
        self._store: MutableMapping[K, tuple[V, int]] = OrderedDict()
        self._size = 0
        self._lock = threading.Lock()

        self._put_count = 0
        self._hit_count = 0
        self._miss_count = 0
        self._eviction_count = 0

    def get(self, key: K) -> V | None:
        if key is None:
            raise InvalidArgumentError("key must not be None")
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._miss_count += 1
                return None
            self._store.move_to_end(key)
            self._hit_count += 1
            return entry[0]

    def put(self, key: K, value: V) -> V | None:
        if key is None or value is None:
            raise InvalidArgumentError("key and value must not be None")

        previous: V | None = None
        with self._lock:
            weight = self._safe_size_of(key, value)
            old = self._store.get(key)
            self._put_count += 1
            if old is not None:
                previous = old[0]
                self._size -= old[1]
                self._store.move_to_end(key)
            self._store[key] = (value, weight)
            self._size += weight

        if previous is not None:
            self._on_entry_removed(False, key, previous, value)

        self._trim_to_size(self._max_size)
        return previous

    def remove(self, key: K) -> V | None:
        if key is None:
            raise InvalidArgumentError("key must not be None")
        with self._lock:
            entry = self._store.pop(key, None)
            if entry is None:
                return None
            previous, weight = entry
            self._size -= weight

        self._on_entry_removed(False, key, previous, None)
        return previous

    def evict_all(self) -> None:
        logger.info("lru-cache evict_all entries=%s size=%s", len(self), self.size())
        self._trim_to_size(-1)

    def size(self) -> int:
        with self._lock:
            return self._size

    def max_size(self) -> int:
        return self._max_size

    def put_count(self) -> int:
        with self._lock:
            return self._put_count

    def hit_count(self) -> int:
        with self._lock:
            return self._hit_count

    def miss_count(self) -> int:
        with self._lock:
            return self._miss_count

    def eviction_count(self) -> int:
        with self._lock:
            return self._eviction_count

    def snapshot(self) -> "OrderedDict[K, V]":
        """Copy of the resident entries, least recently used first."""
        with self._lock:
            return OrderedDict((key, entry[0]) for key, entry in self._store.items())

    def get_stats(self) -> dict:
        with self._lock:
            total_requests = self._hit_count + self._miss_count
            hit_rate = (self._hit_count / total_requests * 100) if total_requests > 0 else 0
            return {
                "size": self._size,
                "max_size": self._max_size,
                "entries": len(self._store),
                "puts": self._put_count,
                "hits": self._hit_count,
                "misses": self._miss_count,
                "evictions": self._eviction_count,
                "hit_rate_percent": round(hit_rate, 2),
            }

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __repr__(self) -> str:
        with self._lock:
            accesses = self._hit_count + self._miss_count
            hit_percent = (100 * self._hit_count // accesses) if accesses else 0
            return (
                f"LruCache[maxSize={self._max_size},hits={self._hit_count},"
                f"misses={self._miss_count},hitRate={hit_percent}%]"
            )

    # ------------------------------------------------------------------ #
    # Internal
    # ------------------------------------------------------------------ #
    def _safe_size_of(self, key: K, value: V) -> int:
        result = self._size_of(key, value)
        if result < 0:
            raise InvalidArgumentError(f"Negative size: {key!r}={value!r}")
        return result

    def _trim_to_size(self, max_size: int) -> None:
        # Lock is taken per eviction, other threads may run between steps.
        while True:
            with self._lock:
                if self._size < 0 or (not self._store and self._size != 0):
                    logger.error(
                        "lru-cache inconsistent size=%s entries=%s", self._size, len(self._store)
                    )
                    raise CacheConsistencyError(
                        f"{type(self).__name__} size_of is reporting inconsistent results"
                    )
                if self._size <= max_size or not self._store:
                    break
                key, (value, weight) = self._store.popitem(last=False)
                self._size -= weight
                self._eviction_count += 1
            logger.debug("lru-cache evicted key=%r weight=%s", key, weight)
            self._on_entry_removed(True, key, value, None)
