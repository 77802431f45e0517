from .lru_cache import LruCache
from .sizing import byte_length, count_entries

__all__ = ["LruCache", "byte_length", "count_entries"]
