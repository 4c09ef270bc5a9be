"""
Audio feature module.

Keeps tag mapping, fallback records and directory scans in one place.
"""

from .constants import AUDIO_EXTENSIONS, AUDIO_MIME_TYPES, DEFAULT_AUDIO_MIME_TYPE
from .models import DirectoryListing, ExtractionError, TrackEntry, TrackMetadata, TrackNumber
from .pipeline import map_raw_metadata, read_directory, read_one

__all__ = [
    "AUDIO_EXTENSIONS",
    "AUDIO_MIME_TYPES",
    "DEFAULT_AUDIO_MIME_TYPE",
    "DirectoryListing",
    "ExtractionError",
    "TrackEntry",
    "TrackMetadata",
    "TrackNumber",
    "map_raw_metadata",
    "read_directory",
    "read_one",
]
