"""Unit tests for the FastAPI surface - mocked sources, no internet."""

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_profile, make_source, mock_client
from kickprofile.api import create_app
from kickprofile.core.resolver import Resolver
from kickprofile.exceptions import PrimarySourceExhausted


@pytest.fixture
def primary():
    return make_source("kick", make_profile(display_name="Foo Bar", followers=42))


@pytest.fixture
def app(config, cache, primary):
    resolver = Resolver(config, cache=cache, primary=primary, secondary=make_source("piloterr", None))
    return create_app(config, resolver)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


class TestPlayersEndpoint:

    def test_lists_configured_channels(self, client, config):
        response = client.get("/api/players")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "players": config.channels}


class TestKickEndpoint:
    """Test single resolution."""

    def test_resolves_url_input(self, client, primary):
        response = client.get("/api/kick", params={"user": "https://kick.com/Foo_Bar?ref=x"})
        body = response.json()

        assert response.status_code == 200
        assert body["ok"] is True
        assert body["data"]["slug"] == "foo_bar"
        assert body["data"]["displayName"] == "Foo Bar"
        assert body["data"]["followers"] == 42
        assert body["data"]["followersAvailable"] is True
        assert primary.fetch.await_args.args[0] == "foo_bar"

    @pytest.mark.parametrize("params", [{}, {"user": ""}, {"user": "!!!"}])
    def test_missing_user_is_400(self, client, params):
        response = client.get("/api/kick", params=params)
        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Missing ?user="}

    def test_primary_failure_still_ok(self, config, cache):
        failing = make_source("kick", error=PrimarySourceExhausted("HTTP 404 for url :: nope"))
        resolver = Resolver(config, cache=cache, primary=failing, secondary=make_source("piloterr", None))

        with TestClient(create_app(config, resolver)) as client:
            body = client.get("/api/kick", params={"user": "ghost"}).json()

        assert body["ok"] is True
        assert body["data"]["displayName"] == "ghost"
        assert body["data"]["followers"] is None
        assert body["data"]["sources"]["kick"] == "primary_error"

    def test_internal_fault_is_500(self, app, client, monkeypatch):
        async def broken(slug):
            raise RuntimeError("internal fault")

        monkeypatch.setattr(app.state.resolver, "resolve", broken)
        response = client.get("/api/kick", params={"user": "hyghman"})

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "internal fault"}

    def test_repeated_requests_hit_cache(self, client, primary):
        client.get("/api/kick", params={"user": "hyghman"})
        client.get("/api/kick", params={"user": "HYGHMAN"})
        assert primary.fetch.await_count == 1


class TestBatchEndpoint:
    """Test batch resolution."""

    def test_filters_and_resolves(self, client):
        response = client.post("/api/kick/batch", json={"users": ["Alice", "", "bad slug!"]})
        body = response.json()

        assert response.status_code == 200
        assert body["ok"] is True
        assert len(body["results"]) == 2
        assert [r["data"]["slug"] for r in body["results"]] == ["alice", "badslug"]

    def test_non_list_users_is_empty(self, client):
        body = client.post("/api/kick/batch", json={"users": "alice"}).json()
        assert body == {"ok": True, "results": []}

    def test_missing_body_is_empty(self, client):
        body = client.post("/api/kick/batch").json()
        assert body == {"ok": True, "results": []}

    def test_partial_failure_isolated(self, app, client, monkeypatch):
        resolver = app.state.resolver
        original = resolver.resolve

        async def flaky(slug):
            if slug == "broken":
                raise RuntimeError("internal fault")
            return await original(slug)

        monkeypatch.setattr(resolver, "resolve", flaky)
        body = client.post("/api/kick/batch", json={"users": ["hyghman", "broken"]}).json()

        assert body["ok"] is True
        assert body["results"][0]["ok"] is True
        assert body["results"][1] == {"ok": False, "slug": "broken", "error": "internal fault"}


class TestEndToEnd:
    """Full pipeline over a mocked transport."""

    def test_kick_and_piloterr_merge(self, tmp_path, kick_v2_payload, piloterr_payload):
        from kickprofile.config import ResolverConfig

        config = ResolverConfig(piloterr_api_key="secret", public_dir=str(tmp_path))

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "piloterr.com":
                return httpx.Response(200, json=piloterr_payload)
            return httpx.Response(200, json=kick_v2_payload)

        resolver = Resolver(config, client=mock_client(handler))
        with TestClient(create_app(config, resolver)) as client:
            body = client.get("/api/kick", params={"user": "hyghman"}).json()

        assert body["data"]["followers"] == 5400
        assert body["data"]["displayName"] == "HyghmanTV"
        assert body["data"]["sources"] == {"kick": "primary", "piloterr": "secondary"}


class TestStaticRoutes:
    """Test HTML routes and diagnostics."""

    def test_index_missing_returns_remediation(self, client):
        response = client.get("/")
        assert response.status_code == 500
        assert "Missing file" in response.text
        assert "index.html" in response.text

    def test_index_served(self, config, cache, primary, tmp_path):
        public = tmp_path / "public"
        public.mkdir()
        (public / "index.html").write_text("<h1>menu</h1>")
        (public / "style.css").write_text("body {}")

        with TestClient(create_app(config, Resolver(config, cache=cache, primary=primary))) as client:
            assert client.get("/").text == "<h1>menu</h1>"
            assert client.get("/style.css").text == "body {}"

    def test_game_falls_back_to_solo(self, config, cache, primary, tmp_path):
        public = tmp_path / "public"
        public.mkdir()
        (public / "solo.html").write_text("solo")

        with TestClient(create_app(config, Resolver(config, cache=cache, primary=primary))) as client:
            assert client.get("/game").text == "solo"

    def test_game_missing(self, client):
        response = client.get("/game")
        assert response.status_code == 500
        assert "game.html" in response.text

    def test_solo_redirects_to_game(self, client):
        response = client.get("/solo.html", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/game"

    def test_debug(self, client, config):
        body = client.get("/_debug").json()
        assert body["hasPiloterrKey"] is False
        assert body["filesInPublic"] == []
        assert body["publicDir"].endswith("public")

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
