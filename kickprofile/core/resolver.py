"""Resolution pipeline - coordinates sources, merging and caching."""

from collections.abc import Iterable

import httpx

from kickprofile.cache.base import CacheProvider
from kickprofile.cache.memory_cache import MemoryCache
from kickprofile.config import ResolverConfig
from kickprofile.core.extractor import pick_first
from kickprofile.core.slug import normalize_slug
from kickprofile.core.sources import KickSource, PiloterrSource, ProfileSource, PRIMARY_ERROR_TAG
from kickprofile.exceptions import InvalidSlugError
from kickprofile.logging import configure_logging, get_logger
from kickprofile.models.profile import MergedProfile, Profile
from kickprofile.models.result import BatchItem, SourceOutcome


def merge_profiles(slug: str, primary: Profile, secondary: Profile | None) -> MergedProfile:
    """
    Combine source profiles field by field.

    Secondary wins wherever it supplies a value, primary is the fallback
    and the slug is the last resort display name.
    """
    sec = secondary
    followers = pick_first(sec.followers if sec else None, primary.followers)

    return MergedProfile(
        slug=slug,
        display_name=pick_first(sec.display_name if sec else None, primary.display_name, slug),
        followers=followers,
        profile_pic=pick_first(sec.profile_pic if sec else None, primary.profile_pic),
        sources={
            KickSource.name: primary.source,
            PiloterrSource.name: sec.source if sec else None,
        },
        followers_available=isinstance(followers, int),
    )


class Resolver:
    """
    Resolves channel slugs to merged, cached profiles.

    Example:
        async with Resolver() as resolver:
            profile = await resolver.resolve("hyghman")
            print(profile.followers)
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        cache: CacheProvider | None = None,
        primary: ProfileSource | None = None,
        secondary: ProfileSource | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize resolver with optional collaborators.

        Args:
            config: ResolverConfig instance, uses defaults if None
            cache: Cache provider, a MemoryCache with the configured TTL if None
            primary: Primary source, KickSource if None
            secondary: Secondary source, PiloterrSource if None
            client: Shared AsyncClient; created on context entry if None
        """
        self.config = config or ResolverConfig()
        self.cache = cache if cache is not None else MemoryCache(self.config.cache_ttl_seconds)
        self.primary = primary if primary is not None else KickSource(self.config)
        self.secondary = secondary if secondary is not None else PiloterrSource(self.config)
        self._client = client
        self._owns_client = False
        self._log = get_logger("resolver")

    async def __aenter__(self) -> "Resolver":
        """Async context manager entry - initialize resources."""
        configure_logging(self.config)
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup resources."""
        await self.close()

    async def close(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False
        await self.cache.close()

    async def _call(self, source: ProfileSource, slug: str) -> SourceOutcome:
        try:
            profile = await source.fetch(slug, self._client)
        except Exception as e:
            return SourceOutcome(profile=None, error=str(e) or e.__class__.__name__)
        return SourceOutcome(profile=profile)

    async def resolve(self, slug: str) -> MergedProfile:
        """
        Resolve a slug to a merged profile, serving from cache when fresh.

        Source failures never propagate: a failing primary yields a
        degraded profile, a failing secondary is ignored.

        Args:
            slug: Channel slug (normalized again, so raw input is accepted)

        Returns:
            MergedProfile

        Raises:
            InvalidSlugError: slug normalizes to an empty string
        """
        slug = normalize_slug(slug, self.config.platform_domains)
        if not slug:
            raise InvalidSlugError("Missing channel slug")

        cached = await self.cache.get(slug)
        if cached is not None:
            self._log.debug("cache_hit", slug=slug)
            return cached

        self._log.info("resolve_start", slug=slug)

        primary_outcome = await self._call(self.primary, slug)
        if primary_outcome.success:
            primary = primary_outcome.profile
        else:
            self._log.warning("primary_failed", slug=slug, error=primary_outcome.error)
            primary = Profile.degraded(slug, PRIMARY_ERROR_TAG, primary_outcome.error)

        secondary_outcome = await self._call(self.secondary, slug)
        if secondary_outcome.error:
            self._log.warning("secondary_failed", slug=slug, error=secondary_outcome.error)

        merged = merge_profiles(slug, primary, secondary_outcome.profile)

        ttl = None
        if not primary_outcome.success and self.config.degraded_cache_ttl_seconds is not None:
            ttl = self.config.degraded_cache_ttl_seconds
        await self.cache.set(slug, merged, ttl)

        self._log.info(
            "resolve_complete",
            slug=slug,
            followers=merged.followers,
            sources=merged.sources,
        )
        return merged

    async def resolve_many(self, users: Iterable[object]) -> list[BatchItem]:
        """
        Resolve several raw inputs sequentially.

        Inputs that normalize to nothing are dropped. A failure for one slug
        is reported in its item and does not stop the batch.

        Args:
            users: Raw user inputs (URLs, handles, slugs)

        Returns:
            List of BatchItems in input order
        """
        slugs = [s for s in (normalize_slug(u, self.config.platform_domains) for u in users) if s]
        results = []

        for slug in slugs:
            try:
                merged = await self.resolve(slug)
            except Exception as e:
                self._log.error("batch_item_failed", slug=slug, error=str(e))
                results.append(BatchItem(ok=False, slug=slug, error=str(e)))
                continue
            results.append(BatchItem(ok=True, slug=slug, data=merged))

        return results
