"""
Audio format constants.
"""

from __future__ import annotations

from ...shared import AUDIO_EXTENSIONS

# Served when the suffix is not in AUDIO_MIME_TYPES.
DEFAULT_AUDIO_MIME_TYPE = "audio/mpeg"

AUDIO_MIME_TYPES = {
    ".mp3": "audio/mpeg",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".wav": "audio/wav",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".wma": "audio/x-ms-wma",
}

__all__ = ["AUDIO_EXTENSIONS", "AUDIO_MIME_TYPES", "DEFAULT_AUDIO_MIME_TYPE"]
