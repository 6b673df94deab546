"""In-process caches for higher layers."""

from kindstore.infrastructure.cache.factory import CacheBackend, CacheFactory
from kindstore.infrastructure.cache.memory_cache import Cache, MemoryCache

__all__ = [
    "Cache",
    "CacheBackend",
    "CacheFactory",
    "MemoryCache",
]
