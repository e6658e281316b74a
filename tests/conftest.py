"""Shared fixtures - sample payloads and mocked collaborators, no internet."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from kickprofile.cache.memory_cache import MemoryCache
from kickprofile.config import ResolverConfig
from kickprofile.models.profile import Profile


class FakeClock:
    """Manually advanced time source for cache tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config(tmp_path) -> ResolverConfig:
    """Config with the secondary source disabled and a temp public dir."""
    return ResolverConfig(
        piloterr_api_key=None,
        public_dir=str(tmp_path / "public"),
        cache_ttl_seconds=60,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> MemoryCache:
    return MemoryCache(default_ttl=60, clock=clock)


@pytest.fixture
def kick_v2_payload() -> dict:
    """Trimmed /api/v2/channels/<slug> response."""
    return {
        "id": 668,
        "slug": "hyghman",
        "followers_count": 1250,
        "user": {
            "id": 676,
            "username": "Hyghman",
            "profile_pic": "https://files.kick.com/images/user/676/profile_image/hyghman.webp",
        },
    }


@pytest.fixture
def piloterr_payload() -> dict:
    """Trimmed Piloterr kick/user/info response."""
    return {
        "username": "HyghmanTV",
        "followers_count": 5400,
        "profile_image": {"url": "https://cdn.piloterr.com/hyghman.png"},
    }


def make_profile(slug: str = "hyghman", **overrides) -> Profile:
    values = {
        "slug": slug,
        "display_name": slug,
        "followers": None,
        "profile_pic": None,
        "source": "primary",
    }
    values.update(overrides)
    return Profile(**values)


def make_source(name: str, result=None, error: Exception | None = None) -> MagicMock:
    """Source double whose fetch returns result or raises error."""
    source = MagicMock()
    source.name = name
    source.fetch = AsyncMock(return_value=result, side_effect=error)
    return source


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient routed through an in-process handler."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
