"""In-process TTL cache."""

import time
from collections.abc import Callable

from kickprofile.cache.base import CacheProvider
from kickprofile.models.profile import MergedProfile


class MemoryCache(CacheProvider):
    """
    Process-local cache keyed by slug.

    Expired entries are not evicted; they are ignored on read and replaced
    on the next write for the same slug.

    Example:
        cache = MemoryCache(default_ttl=60)
        await cache.set("hyghman", merged)
        cached = await cache.get("hyghman")
    """

    def __init__(self, default_ttl: int = 60, clock: Callable[[], float] = time.time):
        """
        Initialize memory cache.

        Args:
            default_ttl: Default TTL in seconds
            clock: Time source returning seconds, injectable for tests
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[MergedProfile, float]] = {}

    async def get(self, slug: str) -> MergedProfile | None:
        """Return the cached profile, None if missing or expired."""
        entry = self._entries.get(slug)
        if entry is None:
            return None

        profile, expires_at = entry
        if expires_at <= self._clock():
            return None
        return profile

    async def set(
        self, slug: str, profile: MergedProfile, ttl_seconds: int | None = None
    ) -> None:
        """Store profile with an expiry of now + ttl."""
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl
        self._entries[slug] = (profile, self._clock() + ttl)

    async def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    async def close(self) -> None:
        """Nothing to release for an in-memory store."""

    def __len__(self) -> int:
        return len(self._entries)
