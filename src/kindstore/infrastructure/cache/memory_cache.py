"""In-process document caches backed by cachetools."""

import threading
from collections.abc import MutableMapping
from typing import Any, Protocol

import structlog
from cachetools import LRUCache, TTLCache

logger = structlog.get_logger(__name__)


class Cache(Protocol):
    """Name-keyed cache used by higher layers around repository calls."""

    name: str

    def get(self, key: str) -> Any | None: ...

    def put(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def stats(self) -> dict[str, Any]: ...

    def __len__(self) -> int: ...


class MemoryCache:
    """Thread-safe wrapper around a cachetools mapping.

    Attributes:
        name: Cache name it was built for
        hits: Number of cache hits
        misses: Number of cache misses
    """

    def __init__(self, name: str, storage: MutableMapping[str, Any]) -> None:
        self.name = name
        self._storage = storage
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Any | None:
        with self._lock:
            value = self._storage.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._storage[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._storage.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def stats(self) -> dict[str, Any]:
        with self._lock:
            total = self.hits + self.misses
            return {
                "name": self.name,
                "size": len(self._storage),
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": round(self.hits / total * 100, 2) if total else 0.0,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)


def lru_cache(name: str, max_size: int, ttl_seconds: float) -> MemoryCache:
    """Least-recently-used cache; ttl_seconds is ignored."""
    logger.info("Constructs a cache", backend="lru", name=name, max_size=max_size)
    return MemoryCache(name, LRUCache(maxsize=max_size))


def ttl_cache(name: str, max_size: int, ttl_seconds: float) -> MemoryCache:
    """LRU cache whose entries also expire after ttl_seconds."""
    logger.info("Constructs a cache", backend="ttl", name=name, max_size=max_size, ttl=ttl_seconds)
    return MemoryCache(name, TTLCache(maxsize=max_size, ttl=ttl_seconds))
