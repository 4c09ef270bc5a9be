"""
JSON response builders shared by route handlers and the stream responder.

Kept outside the routes package so feature modules can build error bodies
without importing the route table.
"""

import math
from typing import Any

from aiohttp import web

from .shared import ErrorCode, error_payload


def _sanitize_json_payload(value):
    """
    Normalize payload values so they are always valid strict JSON.
    - Converts NaN/Infinity floats to None.
    - Recurses through dict/list/tuple containers.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_json_payload(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_payload(v) for v in value]
    if isinstance(value, tuple):
        return [_sanitize_json_payload(v) for v in value]
    return value


def json_payload_response(payload: dict[str, Any], *, status: int = 200) -> web.Response:
    return web.json_response(_sanitize_json_payload(payload), status=status)


def json_error_response(
    code: ErrorCode | str,
    message: str,
    *,
    status: int,
    headers: dict[str, str] | None = None,
) -> web.Response:
    """`{success: false, error, code}` with the given status and extra headers."""
    response = json_payload_response(error_payload(code, message), status=status)
    for key, value in (headers or {}).items():
        response.headers[key] = value
    return response
