"""
Path validation and content-type helpers.
"""
import mimetypes
from pathlib import Path

from tracks_backend.features.audio import AUDIO_MIME_TYPES, DEFAULT_AUDIO_MIME_TYPE
from tracks_backend.path_utils import resolve_track_path
from tracks_backend.shared import get_logger

logger = get_logger(__name__)


def _resolve_track(root: Path, filename: str | None) -> Path | None:
    """
    Resolve a route `{filename}` against the music root.

    Traversal attempts, unsafe names and missing files all come back as None;
    callers answer 404 either way.
    """
    resolved = resolve_track_path(root, filename)
    if resolved is None and filename:
        logger.debug("Rejected or missing track: %r", filename)
    return resolved


def _guess_content_type_for_file(path: Path) -> str:
    """
    Content type for streamed audio.

    Recognized audio suffixes use an explicit mapping since `mimetypes` output
    varies across platforms; anything else falls back to audio/mpeg.
    """
    ext = str(path.suffix or "").lower()
    known = AUDIO_MIME_TYPES.get(ext)
    if known:
        return known
    guessed, _ = mimetypes.guess_type(str(path))
    if guessed and guessed.startswith("audio/"):
        return guessed
    return DEFAULT_AUDIO_MIME_TYPE
