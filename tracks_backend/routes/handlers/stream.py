"""
Audio streaming endpoint with byte-range support.
"""
import asyncio

from aiohttp import hdrs, web

from tracks_backend.features.stream import resolve_range, respond
from tracks_backend.shared import ErrorCode, get_logger, sanitize_error_message

from ..core import _error_response, _get_config, _guess_content_type_for_file, _resolve_track

logger = get_logger(__name__)


def register_stream_routes(routes: web.RouteTableDef) -> None:
    """
    GET /stream/{filename}: 200 full body, 206 partial, 416 unsatisfiable range.
    """

    async def stream_track(request: web.Request) -> web.StreamResponse:
        config = _get_config(request)
        path = _resolve_track(config.music_root, request.match_info.get("filename", ""))
        if path is None:
            return _error_response(ErrorCode.NOT_FOUND, "File not found")

        try:
            stat = await asyncio.to_thread(path.stat)
        except OSError as exc:
            logger.error("Failed to stat %s: %s", path.name, exc)
            return _error_response(ErrorCode.INTERNAL_ERROR, sanitize_error_message(exc, "Server error"), status=500)

        file_size = int(stat.st_size)
        decision = resolve_range(request.headers.get(hdrs.RANGE), file_size)
        return await respond(
            request,
            decision,
            path,
            file_size,
            _guess_content_type_for_file(path),
            chunk_size=config.stream_chunk_size,
        )

    routes.get("/stream/{filename}")(stream_track)
    routes.get("/api/stream/{filename}")(stream_track)
