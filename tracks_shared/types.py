"""
Shared types, enums, and constants.
"""
import os
from enum import Enum
from typing import Final


class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / lookup
    NOT_FOUND = "NOT_FOUND"
    RANGE_NOT_SATISFIABLE = "RANGE_NOT_SATISFIABLE"

    # Filesystem
    ACCESS_ERROR = "ACCESS_ERROR"

    # Tag reading
    EXTRACTION_ERROR = "EXTRACTION_ERROR"

    # Server / infrastructure
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Suffixes that count as audio tracks for listing purposes (matched case-insensitively).
AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".mp3", ".flac", ".m4a", ".wav", ".aac", ".ogg", ".wma"}
)

# Sentinel used when artist/album tags are missing.
UNKNOWN_TAG: Final[str] = "unknown"


def is_audio_file(filename: str) -> bool:
    """
    Check whether a filename carries a recognized audio extension.

    Args:
        filename: File name or path

    Returns:
        True when the suffix is in AUDIO_EXTENSIONS
    """
    ext = os.path.splitext(filename)[1].lower()
    return ext in AUDIO_EXTENSIONS
