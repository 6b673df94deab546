"""Cache factory - one cache per name, built by the configured backend."""

import threading
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from kindstore.domain.exceptions import CacheConfigurationError
from kindstore.infrastructure.cache.memory_cache import Cache, lru_cache, ttl_cache


class CacheBackend(StrEnum):
    """Supported cache implementations."""

    LRU = "lru"
    TTL = "ttl"


_CONSTRUCTORS: dict[CacheBackend, Callable[[str, int, float], Cache]] = {
    CacheBackend.LRU: lru_cache,
    CacheBackend.TTL: ttl_cache,
}


class CacheFactory:
    """Memoizing cache factory owned by the composition root.

    The backend constructor is resolved once here; get_cache() builds a cache
    the first time a name is asked for and returns the same one afterwards.
    """

    def __init__(
        self,
        backend: CacheBackend | str,
        max_size: int = 1000,
        ttl_seconds: float = 300.0,
    ) -> None:
        try:
            self._backend = CacheBackend(backend)
        except ValueError:
            raise CacheConfigurationError(f"Unknown cache backend [{backend}]") from None
        if max_size < 1:
            raise CacheConfigurationError("Cache max size must be positive")
        self._constructor = _CONSTRUCTORS[self._backend]
        self._max_size = max_size
        self._ttl_seconds = ttl_seconds
        self._caches: dict[str, Cache] = {}
        self._lock = threading.Lock()

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    def get_cache(self, name: str) -> Cache:
        with self._lock:
            cache = self._caches.get(name)
            if cache is None:
                cache = self._constructor(name, self._max_size, self._ttl_seconds)
                self._caches[name] = cache
            return cache

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._caches)

    def stats(self) -> list[dict[str, Any]]:
        """Hit/miss statistics of every cache built so far, by name."""
        with self._lock:
            caches = [self._caches[name] for name in sorted(self._caches)]
        return [cache.stats() for cache in caches]
