"""
Stream responder: writes a file (or one byte range of it) to the client.

Exactly one read handle is opened per request. It is closed in a `finally`
block, so it is released on completion, on errors, when the client goes away,
and when the handler task is cancelled. Blocking reads run in the default
executor to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import os
from typing import BinaryIO

from aiohttp import web

from ...config import DEFAULT_STREAM_CHUNK_SIZE
from ...responses import json_error_response
from ...shared import ErrorCode, get_logger, sanitize_error_message
from .ranges import RangeDecision, RangeKind

logger = get_logger(__name__)

# Raised by the transport when the client closes the connection mid-response.
_CLIENT_DISCONNECT_ERRORS = (
    ConnectionResetError,
    BrokenPipeError,
    ConnectionAbortedError,
)


def _open_at(file_path: str, offset: int) -> BinaryIO:
    handle = open(file_path, "rb")
    try:
        if offset:
            handle.seek(offset)
    except OSError:
        handle.close()
        raise
    return handle


async def respond(
    request: web.Request,
    decision: RangeDecision,
    file_path: str | os.PathLike[str],
    file_size: int,
    mime_hint: str,
    *,
    chunk_size: int = DEFAULT_STREAM_CHUNK_SIZE,
) -> web.StreamResponse:
    """
    Build and stream the response for a resolved range decision.

    WHOLE -> 200 with the full file, PARTIAL -> 206 with `[start, end]`,
    UNSATISFIABLE -> 416 JSON error.
    """
    if decision.kind is RangeKind.UNSATISFIABLE:
        return json_error_response(
            ErrorCode.RANGE_NOT_SATISFIABLE,
            "Requested range not satisfiable",
            status=416,
            headers={"Content-Range": f"bytes */{file_size}"},
        )

    if decision.kind is RangeKind.PARTIAL and decision.byte_range is not None:
        status = 206
        start = decision.byte_range.start
        length = decision.byte_range.chunk_size
        headers = {
            "Content-Range": decision.byte_range.content_range(file_size),
            "Accept-Ranges": "bytes",
        }
    else:
        status = 200
        start = 0
        length = file_size
        headers = {"Accept-Ranges": "bytes"}

    path = os.fspath(file_path)
    loop = asyncio.get_running_loop()
    try:
        handle = await loop.run_in_executor(None, _open_at, path, start)
    except OSError as exc:
        logger.error("Failed to open %s for streaming: %s", os.path.basename(path), exc)
        return json_error_response(
            ErrorCode.INTERNAL_ERROR,
            sanitize_error_message(exc, "Failed to read file"),
            status=500,
        )

    response = web.StreamResponse(status=status, headers=headers)
    response.content_type = mime_hint
    response.content_length = length
    sent = 0
    try:
        await response.prepare(request)
        if request.method != "HEAD":
            step = max(1, int(chunk_size))
            while sent < length:
                chunk = await loop.run_in_executor(None, handle.read, min(step, length - sent))
                if not chunk:
                    # File shrank underneath us; end the response rather than pad it.
                    logger.warning("Short read on %s after %d of %d bytes", os.path.basename(path), sent, length)
                    break
                await response.write(chunk)
                sent += len(chunk)
        await response.write_eof()
    except _CLIENT_DISCONNECT_ERRORS as exc:
        logger.debug("Client disconnected after %d of %d bytes: %s", sent, length, exc)
    except OSError as exc:
        # Headers are already out; the response just terminates.
        logger.error("Read failed on %s after %d of %d bytes: %s", os.path.basename(path), sent, length, exc)
    finally:
        handle.close()
    return response
