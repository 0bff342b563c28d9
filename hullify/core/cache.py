from typing import Any
from cachetools import TTLCache
from .config import settings

class Cache:
    """
    In-process TTL store for short-lived counters (rate-limit buckets).
    Valuations themselves are never cached.
    """
    def __init__(self, maxsize: int = 4096, ttl: int | None = None):
        self._store = TTLCache(maxsize=maxsize, ttl=ttl or settings.CACHE_TTL_SECONDS)

    def get(self, key: str) -> Any | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def clear(self) -> None:
        self._store.clear()

cache = Cache()
