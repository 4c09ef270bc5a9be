"""Shared utilities for the tracks server."""
from .errors import error_payload, sanitize_error_message
from .log import get_logger, log_structured, log_success, request_id_var
from .result import Result
from .types import AUDIO_EXTENSIONS, UNKNOWN_TAG, ErrorCode, is_audio_file

__all__ = [
    "Result",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "sanitize_error_message",
    "error_payload",
    "ErrorCode",
    "AUDIO_EXTENSIONS",
    "UNKNOWN_TAG",
    "is_audio_file",
]
