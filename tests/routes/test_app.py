from pathlib import Path

import pytest
from aiohttp import web

from tracks_backend.app import create_app
from tracks_backend.config import ServerConfig
from tracks_backend.routes import register_routes


@pytest.mark.asyncio
async def test_index_serves_packaged_player_page(client_factory, music_dir):
    client = await client_factory(music_dir)
    resp = await client.get("/")
    assert resp.status == 200
    assert resp.headers["Content-Type"].startswith("text/html")
    assert "<title>Tracks</title>" in await resp.text()


@pytest.mark.asyncio
async def test_index_prefers_configured_page(client_factory, music_dir, tmp_path):
    page = tmp_path / "custom.html"
    page.write_text("<html><body>my player</body></html>", encoding="utf-8")
    client = await client_factory(music_dir, index_page=str(page))
    resp = await client.get("/")
    assert resp.status == 200
    assert "my player" in await resp.text()


@pytest.mark.asyncio
async def test_static_directory_is_served_when_present(client_factory, music_dir, tmp_path):
    static = tmp_path / "public"
    static.mkdir()
    (static / "app.css").write_text("body { color: red; }", encoding="utf-8")
    client = await client_factory(music_dir, static_dir=str(static))

    resp = await client.get("/static/app.css")
    assert resp.status == 200
    assert "color: red" in await resp.text()
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "X-Request-ID" in resp.headers


@pytest.mark.asyncio
async def test_cors_headers_on_responses(client_factory, music_dir):
    client = await client_factory(music_dir)
    resp = await client.get("/tracks", headers={"Origin": "http://example.test"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "Content-Range" in resp.headers["Access-Control-Expose-Headers"]


@pytest.mark.asyncio
async def test_cors_preflight(client_factory, music_dir):
    client = await client_factory(music_dir)
    resp = await client.options(
        "/stream/clip.mp3",
        headers={
            "Origin": "http://example.test",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Range",
        },
    )
    assert resp.status == 204
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "GET" in resp.headers["Access-Control-Allow-Methods"]
    assert resp.headers["Access-Control-Allow-Headers"] == "Range"


@pytest.mark.asyncio
async def test_cors_can_be_disabled(client_factory, music_dir):
    client = await client_factory(music_dir, cors_enabled=False)
    resp = await client.get("/tracks")
    assert "Access-Control-Allow-Origin" not in resp.headers


@pytest.mark.asyncio
async def test_unknown_route_is_json_404(client_factory, music_dir):
    client = await client_factory(music_dir)
    resp = await client.get("/no/such/route")
    assert resp.status == 404
    assert resp.content_type == "application/json"
    body = await resp.json()
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.asyncio
async def test_wrong_method_is_json_405(client_factory, music_dir):
    client = await client_factory(music_dir)
    resp = await client.post("/tracks")
    assert resp.status == 405
    body = await resp.json()
    assert body["success"] is False
    assert "GET" in resp.headers.get("Allow", "")


@pytest.mark.asyncio
async def test_request_id_is_echoed_or_generated(client_factory, music_dir):
    client = await client_factory(music_dir)
    resp = await client.get("/tracks", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"

    resp = await client.get("/tracks")
    generated = resp.headers["X-Request-ID"]
    assert len(generated) == 32


def test_register_routes_is_idempotent(tmp_path: Path):
    config = ServerConfig(
        music_dir=str(tmp_path),
        static_dir=str(tmp_path / "no-static"),
        index_page=str(tmp_path / "no-index.html"),
    )
    app = create_app(config)
    middlewares = len(app.middlewares)
    routes = len(app.router.routes())

    register_routes(app, config)
    assert len(app.middlewares) == middlewares
    assert len(app.router.routes()) == routes


def test_create_app_returns_application(tmp_path: Path):
    app = create_app(ServerConfig(music_dir=str(tmp_path)))
    assert isinstance(app, web.Application)


def test_request_keys_are_typed():
    from tracks_backend.observability import REQUEST_DURATION_KEY, REQUEST_ID_KEY

    assert isinstance(REQUEST_ID_KEY, web.RequestKey)
    assert isinstance(REQUEST_DURATION_KEY, web.RequestKey)
