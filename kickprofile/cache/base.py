"""Abstract cache interface."""

from abc import ABC, abstractmethod

from kickprofile.models.profile import MergedProfile


class CacheProvider(ABC):
    """Abstract base class for cache implementations."""

    @abstractmethod
    async def get(self, slug: str) -> MergedProfile | None:
        """
        Retrieve cached profile for a slug.

        Args:
            slug: Normalized channel slug

        Returns:
            Cached MergedProfile or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, slug: str, profile: MergedProfile, ttl_seconds: int | None = None) -> None:
        """
        Store profile in cache, replacing any previous entry.

        Args:
            slug: Normalized channel slug
            profile: MergedProfile to cache
            ttl_seconds: Optional TTL override
        """
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup resources."""
        ...

    async def __aenter__(self) -> "CacheProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
