"""FastAPI web server for kickprofile."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Query
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, field_validator

from kickprofile import Resolver, ResolverConfig, __version__
from kickprofile.core.exporter import batch_item_to_dict, to_dict
from kickprofile.core.slug import normalize_slug
from kickprofile.logging import get_logger

log = get_logger("api")


class BatchRequest(BaseModel):
    """Request body for batch resolution."""

    users: list[str] = Field(default_factory=list, description="Raw channel inputs")

    @field_validator("users", mode="before")
    @classmethod
    def _coerce_users(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return ["" if v is None else str(v) for v in value]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


def _missing_file(public_dir: Path, missing: Path) -> PlainTextResponse:
    text = "\n".join([
        f"Missing file:\n{missing}\n",
        "Fix:",
        f'- create folder "{public_dir.name}"',
        f'- put "index.html" inside {public_dir.name}',
        "",
        "Expected:",
        str(public_dir / "index.html"),
        "",
    ])
    return PlainTextResponse(text, status_code=500)


def create_app(config: ResolverConfig | None = None, resolver: Resolver | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: ResolverConfig, uses defaults (and environment) if None
        resolver: Pre-built Resolver, mainly for tests

    Returns:
        Configured FastAPI app
    """
    config = config or (resolver.config if resolver else ResolverConfig())
    resolver = resolver or Resolver(config)
    public_dir = Path(config.public_dir).resolve()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage resolver lifecycle."""
        async with resolver:
            yield

    app = FastAPI(
        title="kickprofile API",
        description="Kick channel profile resolver",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.resolver = resolver

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """Check API health status."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now().isoformat(),
        )

    @app.get("/api/players", tags=["Players"])
    async def list_players():
        """Configured channel slugs."""
        return {"ok": True, "players": config.channels}

    @app.get("/api/kick", tags=["Players"])
    async def resolve_one(user: str | None = Query(None, description="Channel URL, handle or slug")):
        """Resolve a single channel to its merged profile."""
        slug = normalize_slug(user, config.platform_domains)
        if not slug:
            return JSONResponse({"ok": False, "error": "Missing ?user="}, status_code=400)

        try:
            data = await resolver.resolve(slug)
        except Exception as e:
            log.error("request_failed", slug=slug, error=str(e))
            return JSONResponse({"ok": False, "error": str(e)}, status_code=500)

        return {"ok": True, "data": to_dict(data)}

    @app.post("/api/kick/batch", tags=["Players"])
    async def resolve_batch(request: BatchRequest | None = None):
        """
        Resolve several channels in sequence.

        Empty inputs are dropped; per-channel failures are reported inline.
        """
        try:
            results = await resolver.resolve_many(request.users if request else [])
        except Exception as e:
            log.error("request_failed", error=str(e))
            return JSONResponse({"ok": False, "error": str(e)}, status_code=500)

        return {"ok": True, "results": [batch_item_to_dict(r) for r in results]}

    @app.get("/", include_in_schema=False)
    async def index():
        path = public_dir / "index.html"
        if not path.is_file():
            return _missing_file(public_dir, path)
        return FileResponse(path)

    @app.get("/game", include_in_schema=False)
    async def game():
        game_file = public_dir / "game.html"
        fallback = public_dir / "solo.html"

        if game_file.is_file():
            return FileResponse(game_file)
        if fallback.is_file():
            return FileResponse(fallback)
        return _missing_file(public_dir, game_file)

    @app.get("/solo.html", include_in_schema=False)
    async def legacy_solo():
        return RedirectResponse("/game", status_code=302)

    @app.get("/_debug", tags=["System"])
    async def debug():
        """Process and filesystem diagnostics."""
        files = sorted(os.listdir(public_dir)) if public_dir.is_dir() else []
        return {
            "cwd": os.getcwd(),
            "packageDir": str(Path(__file__).parent),
            "publicDir": str(public_dir),
            "filesInPublic": files,
            "hasPiloterrKey": config.has_piloterr_key,
        }

    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.config.host, port=app.state.config.port)
