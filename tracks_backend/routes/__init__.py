"""
Route system for the tracks server.
Importing this package is side-effect free; route registration is explicit.
"""
from .registry import build_route_table, register_routes

__all__ = [
    "build_route_table",
    "register_routes",
]
