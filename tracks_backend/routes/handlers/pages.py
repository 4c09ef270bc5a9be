"""
Landing page.
"""
from aiohttp import web

from tracks_backend.shared import ErrorCode

from ..core import _error_response, _get_config


def register_page_routes(routes: web.RouteTableDef) -> None:
    async def index(request: web.Request) -> web.StreamResponse:
        page = _get_config(request).resolve_index_page()
        if page is None:
            return _error_response(ErrorCode.NOT_FOUND, "Page not found")
        return web.FileResponse(path=str(page), headers={"Content-Type": "text/html; charset=utf-8"})

    routes.get("/")(index)
