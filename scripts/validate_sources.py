"""Live validation script - hit the real sources for the configured channels."""

import asyncio
import json
from datetime import datetime
from pathlib import Path

import httpx

from kickprofile.config import ResolverConfig
from kickprofile.core.sources import KickSource, PiloterrSource
from kickprofile.exceptions import KickProfileError

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


async def validate_channel(slug: str, config: ResolverConfig, client: httpx.AsyncClient) -> dict:
    """Fetch one channel from each enabled source and report what was extracted."""
    print(f"\n{'='*60}")
    print(f"Resolving {slug}...")
    print(f"{'='*60}")

    report = {"slug": slug}
    for source in (KickSource(config), PiloterrSource(config)):
        if not source.enabled:
            print(f"  {source.name}: disabled")
            continue

        start = datetime.now()
        try:
            profile = await source.fetch(slug, client)
        except KickProfileError as e:
            print(f"  {source.name}: failed - {e}")
            report[source.name] = {"success": False, "error": str(e)}
            continue

        duration_ms = (datetime.now() - start).total_seconds() * 1000
        print(f"  {source.name}: {profile.display_name} | followers={profile.followers} | {duration_ms:.0f}ms")
        report[source.name] = {"success": True, "duration_ms": duration_ms, **profile.model_dump(by_alias=True)}

    return report


async def main():
    """Run validation on all configured channels."""
    config = ResolverConfig()
    print(f"Checking {len(config.channels)} channels, piloterr enabled: {config.has_piloterr_key}")

    results = []
    async with httpx.AsyncClient() as client:
        for slug in config.channels:
            results.append(await validate_channel(slug, config, client))
            await asyncio.sleep(1)

    print("\n" + "=" * 60)
    print("VALIDATION SUMMARY")
    print("=" * 60)

    ok = sum(1 for r in results if r.get("kick", {}).get("success"))
    print(f"\nKick success: {ok}/{len(results)}")

    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    out = FIXTURES_DIR / "live_validation.json"
    out.write_text(json.dumps(results, indent=2), encoding="utf-8")
    print(f"Report saved to: {out}")


if __name__ == "__main__":
    asyncio.run(main())
