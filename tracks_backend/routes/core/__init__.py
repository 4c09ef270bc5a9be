"""
Core utilities for route handlers.
"""
from .paths import _guess_content_type_for_file, _resolve_track
from .response import _error_response, _json_response, status_for_result
from .services import CONFIG_KEY, READER_KEY, _get_config, _get_reader

__all__ = [
    "_json_response",
    "_error_response",
    "status_for_result",
    "_resolve_track",
    "_guess_content_type_for_file",
    "CONFIG_KEY",
    "_get_config",
    "READER_KEY",
    "_get_reader",
]
