"""Source adapters: Kick (primary) and Piloterr (secondary enrichment)."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from urllib.parse import quote

import httpx

from kickprofile.config import ResolverConfig
from kickprofile.core.extractor import extract_profile
from kickprofile.core.fetcher import fetch_json
from kickprofile.exceptions import ConfigError, FetchError, PrimarySourceExhausted
from kickprofile.logging import get_logger
from kickprofile.models.profile import Profile

PRIMARY_TAG = "primary"
PRIMARY_ERROR_TAG = "primary_error"
SECONDARY_TAG = "secondary"


class ProfileSource(ABC):
    """A remote provider of channel profile data."""

    name: str

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()
        self._log = get_logger(f"source.{self.name}")
        for template in self.endpoint_templates():
            if "{slug}" not in template:
                raise ConfigError(f"{self.name} endpoint template has no {{slug}} placeholder: {template}")

    def endpoint_templates(self) -> list[str]:
        return []

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def fetch(self, slug: str, client: httpx.AsyncClient | None = None) -> Profile | None:
        """
        Fetch and normalize the profile for slug.

        Args:
            slug: Normalized channel slug
            client: Shared AsyncClient, optional

        Returns:
            Profile, or None when the source has nothing to contribute
        """
        ...

    async def _get(self, url: str, client: httpx.AsyncClient | None, headers: dict | None = None):
        return await fetch_json(
            url,
            headers=headers,
            timeout_ms=self.config.request_timeout_ms,
            max_redirects=self.config.max_redirects,
            client=client,
        )


class KickSource(ProfileSource):
    """Kick public channel API, tried across endpoint versions."""

    name = "kick"

    def endpoint_templates(self) -> list[str]:
        return list(self.config.kick_endpoints)

    def endpoint_urls(self, slug: str) -> list[str]:
        return [template.format(slug=quote(slug, safe="")) for template in self.config.kick_endpoints]

    async def fetch(self, slug: str, client: httpx.AsyncClient | None = None) -> Profile:
        """
        Return the profile from the first endpoint that answers with JSON.

        Raises:
            PrimarySourceExhausted: Every endpoint failed; message is the last error
        """
        errors: list[Exception] = []

        for url in self.endpoint_urls(slug):
            try:
                data = await self._get(url, client, {"User-Agent": self.config.user_agent})
            except FetchError as e:
                self._log.warning("primary_endpoint_failed", slug=slug, url=url, error=str(e))
                errors.append(e)
                continue

            if isinstance(data, Mapping) and isinstance(data.get("channel"), Mapping):
                data = data["channel"]
            return extract_profile(data, slug, PRIMARY_TAG)

        if not errors:
            raise PrimarySourceExhausted("Kick request failed")
        raise PrimarySourceExhausted(str(errors[-1]), errors) from errors[-1]


class PiloterrSource(ProfileSource):
    """Piloterr Kick user info, only active with an API key."""

    name = "piloterr"

    def endpoint_templates(self) -> list[str]:
        return [self.config.piloterr_endpoint]

    @property
    def enabled(self) -> bool:
        return self.config.has_piloterr_key

    async def fetch(self, slug: str, client: httpx.AsyncClient | None = None) -> Profile | None:
        """Return enrichment data, or None without a configured key."""
        if not self.enabled:
            return None

        url = self.config.piloterr_endpoint.format(slug=quote(slug, safe=""))
        data = await self._get(
            url,
            client,
            {
                "User-Agent": self.config.user_agent,
                "Content-Type": "application/json",
                "x-api-key": self.config.piloterr_api_key,
            },
        )
        return extract_profile(data, slug, SECONDARY_TAG)
