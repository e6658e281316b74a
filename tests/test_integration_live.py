"""
Integration tests - live lookups against the real Kick API.

These tests require internet and are deselected by default.

Run with: pytest -m integration tests/test_integration_live.py -v
"""

import pytest

from kickprofile.config import ResolverConfig
from kickprofile.core.resolver import Resolver

pytestmark = pytest.mark.integration

CHANNELS = ["hyghman", "w2ge", "roxanne_roxx"]


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", CHANNELS)
async def test_live_resolution_always_usable(slug):
    """Even when Kick blocks us the record must be well formed."""
    async with Resolver(ResolverConfig()) as resolver:
        merged = await resolver.resolve(slug)

    assert merged.slug == slug
    assert merged.display_name
    assert merged.sources["kick"] in ("primary", "primary_error")
    assert merged.followers_available == isinstance(merged.followers, int)


@pytest.mark.asyncio
async def test_live_batch_sequential():
    async with Resolver(ResolverConfig()) as resolver:
        results = await resolver.resolve_many(CHANNELS + ["", "not a slug!"])

    assert [r.slug for r in results] == CHANNELS + ["notaslug"]
    assert all(r.ok for r in results)
