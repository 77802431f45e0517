from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from strongcache.cache import LruCache, byte_length, count_entries
from strongcache.cache.lru_cache import EntryRemoved

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "cache.json"
SAMPLE_CONFIG_NAME = "cache.sample.json"
ENV_CONFIG_KEY = "STRONGCACHE_CONFIG_PATH"
REPO_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = REPO_ROOT / "configs"

_SIZERS = {
    "count": count_entries,
    "bytes": byte_length,
}


class CacheSettings(BaseModel):
    max_size: int = Field(default=128, ge=0, description="Capacity in weight units")
    sizing: Literal["count", "bytes"] = Field(
        default="count", description="count: 1 per entry, bytes: len(value)"
    )

    @classmethod
    def load(cls, explicit_path: str | Path | None = None) -> "CacheSettings":
        """
        Load settings from JSON file - priority order:
        1. Explicit path provided to load()
        2. STRONGCACHE_CONFIG_PATH environment variable
        3. configs/cache.json (if present)
        4. configs/cache.sample.json
        Defaults are used when none of the above exists.
        """
        config_path = cls._resolve_path(explicit_path)
        if config_path is None:
            logger.info("cache settings: no config file, using defaults")
            return cls()
        with open(config_path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
        logger.info("cache settings loaded from %s", config_path)
        return cls(**payload)

    @staticmethod
    def _resolve_path(explicit_path: str | Path | None = None) -> Optional[Path]:
        env_path = os.getenv(ENV_CONFIG_KEY)
        required = explicit_path or env_path
        if required:
            target = Path(required)
            if not target.exists():
                raise FileNotFoundError(f"Configuration file not found at {target}")
            return target
        for candidate in (CONFIG_DIR / DEFAULT_CONFIG_NAME, CONFIG_DIR / SAMPLE_CONFIG_NAME):
            if candidate.exists():
                return candidate
        return None


def build_cache(
    settings: CacheSettings | None = None,
    *,
    on_entry_removed: EntryRemoved | None = None,
) -> LruCache:
    settings = settings or CacheSettings()
    return LruCache(
        settings.max_size,
        size_of=_SIZERS[settings.sizing],
        on_entry_removed=on_entry_removed,
    )
