from .settings import CacheSettings, build_cache

__all__ = ["CacheSettings", "build_cache"]
