"""
Route registration system.
Coordinates all route handlers and registers them on an aiohttp app.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

from aiohttp import hdrs, web

from tracks_backend.config import ServerConfig, load_config
from tracks_backend.observability import ensure_observability
from tracks_backend.shared import ErrorCode, get_logger

from .core import CONFIG_KEY, _error_response
from .handlers import register_page_routes, register_stream_routes, register_track_routes

logger = get_logger(__name__)

_CORS_ALLOW_METHODS = "GET,HEAD,OPTIONS"
_CORS_EXPOSE_HEADERS = "Content-Length,Content-Range,Accept-Ranges,X-Request-ID"
# Headers worth carrying over when an HTTPException is rewritten as JSON.
_KEPT_ERROR_HEADERS = frozenset({"allow", "x-request-id", "access-control-allow-origin", "access-control-expose-headers"})
_APP_KEY_ROUTES_REGISTERED: web.AppKey[bool] = web.AppKey("_tracks_routes_registered", bool)

_Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _apply_cors_headers(headers) -> None:
    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Expose-Headers"] = _CORS_EXPOSE_HEADERS


@web.middleware
async def cors_middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
    """Answer CORS preflights directly; response headers are added by `_on_response_prepare_cors`."""
    if request.method == hdrs.METH_OPTIONS and request.headers.get(hdrs.ACCESS_CONTROL_REQUEST_METHOD):
        response = web.Response(status=204)
        _apply_cors_headers(response.headers)
        response.headers["Access-Control-Allow-Methods"] = _CORS_ALLOW_METHODS
        requested = request.headers.get(hdrs.ACCESS_CONTROL_REQUEST_HEADERS)
        response.headers["Access-Control-Allow-Headers"] = requested or "Range,Content-Type"
        response.headers["Access-Control-Max-Age"] = "600"
        return response

    return await handler(request)


async def _on_response_prepare_cors(request: web.Request, response: web.StreamResponse) -> None:
    # Fires before headers are sent, streamed and static responses included.
    _apply_cors_headers(response.headers)


@web.middleware
async def json_error_middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
    """
    Keep every failure JSON-shaped: router 404/405s and unhandled exceptions
    become `{success: false, error}` without stack traces.
    """
    try:
        return await handler(request)
    except web.HTTPException as exc:
        if exc.status < 400:
            raise
        code = ErrorCode.NOT_FOUND if exc.status == 404 else exc.reason.upper().replace(" ", "_")
        kept = {k: v for k, v in exc.headers.items() if k.lower() in _KEPT_ERROR_HEADERS}
        return _error_response(code, exc.reason or "Request failed", status=exc.status, headers=kept)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _error_response(ErrorCode.INTERNAL_ERROR, "Server error", status=500)


def build_route_table() -> web.RouteTableDef:
    """Collect every handler module into one RouteTableDef."""
    routes = web.RouteTableDef()
    register_page_routes(routes)
    register_track_routes(routes)
    register_stream_routes(routes)
    return routes


def _register_static(app: web.Application, static_dir: str) -> None:
    path = Path(static_dir).expanduser()
    if not path.is_dir():
        logger.debug("Static directory %s not found; /static/ disabled", static_dir)
        return
    app.router.add_static("/static/", str(path.resolve()), follow_symlinks=False)
    logger.info("  GET /static/* -> %s", static_dir)


def register_routes(app: web.Application, config: ServerConfig | None = None) -> None:
    """
    Register routes, middlewares and settings onto an aiohttp application.

    Safe to call twice; the second call is a no-op.
    """
    if app.get(_APP_KEY_ROUTES_REGISTERED):
        logger.debug("register_routes(app) skipped: routes already registered on this app")
        return

    config = config or load_config()
    app[CONFIG_KEY] = config

    if config.cors_enabled:
        app.middlewares.append(cors_middleware)
        app.on_response_prepare.append(_on_response_prepare_cors)
    ensure_observability(app)
    app.middlewares.append(json_error_middleware)

    app.add_routes(build_route_table())
    _register_static(app, config.static_dir)
    app[_APP_KEY_ROUTES_REGISTERED] = True

    logger.info("=" * 60)
    logger.info("Routes registered:")
    logger.info("  GET /")
    logger.info("  GET /tracks")
    logger.info("  GET /tracks/{filename}")
    logger.info("  GET /stream/{filename}  (Range: bytes=<start>-<end>)")
    logger.info("  GET /api/music, /api/music/{filename}, /api/stream/{filename} (Legacy aliases)")
    logger.info("=" * 60)
