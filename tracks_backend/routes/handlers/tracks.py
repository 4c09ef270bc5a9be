"""
Track listing and single-track metadata endpoints.
"""
import asyncio

from aiohttp import web

from tracks_backend.features.audio import read_directory, read_one
from tracks_backend.shared import ErrorCode, Result, get_logger, sanitize_error_message

from ..core import _error_response, _get_config, _get_reader, _json_response, _resolve_track

logger = get_logger(__name__)


def register_track_routes(routes: web.RouteTableDef) -> None:
    """
    GET /tracks             directory scan of the music root
    GET /tracks/{filename}  metadata for one file
    """

    async def list_tracks(request: web.Request) -> web.Response:
        config = _get_config(request)
        reader = _get_reader(request)
        try:
            res = await asyncio.to_thread(read_directory, config.music_dir, reader)
        except Exception as exc:
            logger.exception("Track listing failed")
            return _error_response(ErrorCode.INTERNAL_ERROR, sanitize_error_message(exc, "Server error"), status=500)

        if not res.ok or res.data is None:
            return _json_response(res)
        return _json_response(Result.Ok(res.data.to_dict()))

    async def get_track(request: web.Request) -> web.Response:
        config = _get_config(request)
        filename = request.match_info.get("filename", "")
        path = _resolve_track(config.music_root, filename)
        if path is None:
            return _error_response(ErrorCode.NOT_FOUND, "File not found")

        try:
            res = await asyncio.to_thread(read_one, path, _get_reader(request))
        except Exception as exc:
            logger.exception("Track metadata read failed")
            return _error_response(ErrorCode.INTERNAL_ERROR, sanitize_error_message(exc, "Server error"), status=500)

        if not res.ok or res.data is None:
            return _json_response(res)
        return _json_response(Result.Ok(res.data.to_dict()), filename=filename)

    routes.get("/tracks")(list_tracks)
    routes.get("/tracks/{filename}")(get_track)
    # Paths used by the first release of the player page.
    routes.get("/api/music")(list_tracks)
    routes.get("/api/music/{filename}")(get_track)
