"""Cache implementations."""

from kickprofile.cache.base import CacheProvider
from kickprofile.cache.memory_cache import MemoryCache

__all__ = ["CacheProvider", "MemoryCache"]
