"""
Observability helpers (request id + timing) for aiohttp routes.
"""

from __future__ import annotations

import time
from typing import Any
from uuid import uuid4

from aiohttp import web

from .shared import get_logger, request_id_var

logger = get_logger(__name__)

_APPKEY_OBS_INSTALLED = web.AppKey("tracks_observability_installed", bool)
REQUEST_ID_KEY = web.RequestKey("tracks_request_id", str)
REQUEST_DURATION_KEY = web.RequestKey("tracks_duration_ms", float)

MS_PER_S = 1000.0


def _new_request_id() -> str:
    return uuid4().hex


def _get_request_id(request: web.Request) -> str:
    rid = (request.headers.get("X-Request-ID") or "").strip()
    # Client-supplied ids end up in log lines; keep them short and printable.
    if rid and len(rid) <= 128 and rid.isprintable():
        return rid
    return _new_request_id()


def _response_status_code(response: Any) -> int:
    try:
        return int(getattr(response, "status", 200) or 200)
    except (TypeError, ValueError):
        return 200


async def _attach_request_id_header(request: web.Request, response: web.StreamResponse) -> None:
    # on_response_prepare runs before headers go out, streamed responses included.
    rid = request.get(REQUEST_ID_KEY)
    if rid:
        response.headers["X-Request-ID"] = rid


def build_request_log_fields(request: web.Request, *, status: int | None, duration_ms: float) -> dict[str, Any]:
    return {
        "method": request.method,
        "path": request.path,
        "status": status,
        "duration_ms": round(duration_ms, 2),
        "range": request.headers.get("Range"),
    }


def _emit_request_log(fields: dict[str, Any]) -> None:
    status = fields.get("status")
    line = "%(method)s %(path)s -> %(status)s (%(duration_ms)sms)" % fields
    if status is not None and status >= 500:
        logger.error(line)
    elif status is not None and status >= 400:
        logger.warning(line)
    else:
        logger.debug(line)


@web.middleware
async def request_context_middleware(request: web.Request, handler):
    """Add request-id correlation and per-request logging."""
    rid = _get_request_id(request)
    request[REQUEST_ID_KEY] = rid
    token = request_id_var.set(rid)
    start = time.perf_counter()
    status: int | None = None
    try:
        response = await handler(request)
        status = _response_status_code(response)
        return response
    except web.HTTPException as exc:
        status = exc.status
        raise
    except Exception:
        status = 500
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * MS_PER_S
        request[REQUEST_DURATION_KEY] = duration_ms
        _emit_request_log(build_request_log_fields(request, status=status, duration_ms=duration_ms))
        request_id_var.reset(token)


def ensure_observability(app: web.Application) -> None:
    """
    Install middleware and the request-id header hook once.
    """
    if app.get(_APPKEY_OBS_INSTALLED):
        return
    app[_APPKEY_OBS_INSTALLED] = True
    app.middlewares.append(request_context_middleware)
    app.on_response_prepare.append(_attach_request_id_header)
