"""
Route handler modules.
"""
from .pages import register_page_routes
from .stream import register_stream_routes
from .tracks import register_track_routes

__all__ = [
    "register_page_routes",
    "register_stream_routes",
    "register_track_routes",
]
