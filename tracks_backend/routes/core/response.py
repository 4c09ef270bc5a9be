"""
Response utilities for route handlers.
"""

from typing import Any

from aiohttp import web

from tracks_backend.responses import _sanitize_json_payload, json_error_response, json_payload_response
from tracks_backend.shared import ErrorCode, Result

# Result codes that map onto something other than 500.
_STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.RANGE_NOT_SATISFIABLE.value: 416,
}


def status_for_result(result: Result) -> int:
    """HTTP status for a Result: 200 when ok, 404/416 for lookup/range errors, 500 otherwise."""
    if result.ok:
        return 200
    return _STATUS_BY_CODE.get(str(result.code), 500)


def _json_response(result: Result, status: int | None = None, **extra: Any) -> web.Response:
    """
    Convert a Result to the public JSON envelope.

    Success: `{success: true, **extra, **data}` where `data` is a dict.
    Failure: `{success: false, error, code}`.
    """
    if status is None:
        status = status_for_result(result)

    if not result.ok:
        return json_error_response(result.code, result.error or "An error occurred", status=status)

    payload: dict[str, Any] = {"success": True, **extra}
    if isinstance(result.data, dict):
        payload.update(result.data)
    elif result.data is not None:
        payload["data"] = result.data
    return json_payload_response(payload, status=status)


def _error_response(
    code: ErrorCode | str,
    message: str,
    *,
    status: int | None = None,
    headers: dict[str, str] | None = None,
) -> web.Response:
    if status is None:
        status = status_for_result(Result.Err(code, message))
    return json_error_response(code, message, status=status, headers=headers)


__all__ = [
    "status_for_result",
    "_json_response",
    "_error_response",
    "_sanitize_json_payload",
]
