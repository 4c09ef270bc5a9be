"""
Metadata pipeline: single-file reads and resilient directory scans.

Both entry points are blocking (tag parsing and directory enumeration hit the
disk); route handlers run them via `asyncio.to_thread`.
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any, Optional

from ...adapters.tools import MetadataReader, MutagenTagReader
from ...path_utils import is_within_root
from ...shared import UNKNOWN_TAG, ErrorCode, Result, get_logger, is_audio_file, log_structured, sanitize_error_message
from .models import DirectoryListing, ExtractionError, TrackEntry, TrackMetadata, TrackNumber

logger = get_logger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _number_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _round_duration(value: Any) -> int:
    """Whole seconds, rounding halves up; anything missing or invalid becomes 0."""
    number = _number_or_none(value)
    if number is None or number <= 0:
        return 0
    return int(math.floor(number + 0.5))


def _genres(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    try:
        return tuple(g for g in (_text(v) for v in value) if g)
    except TypeError:
        return ()


def _track_number(value: Any) -> Optional[TrackNumber]:
    if not isinstance(value, dict):
        return None
    return TrackNumber(no=_int_or_none(value.get("no")), of=_int_or_none(value.get("of")))


def map_raw_metadata(raw: Any, file_path: str) -> TrackMetadata:
    """
    Map the reader's `{common, format}` shape into a TrackMetadata.

    Missing title falls back to the filename stem; missing artist/album to
    the "unknown" sentinel.
    """
    raw = raw if isinstance(raw, dict) else {}
    common = raw.get("common") if isinstance(raw.get("common"), dict) else {}
    fmt = raw.get("format") if isinstance(raw.get("format"), dict) else {}

    return TrackMetadata(
        title=_text(common.get("title")) or Path(file_path).stem,
        artist=_text(common.get("artist")) or UNKNOWN_TAG,
        album=_text(common.get("album")) or UNKNOWN_TAG,
        year=_int_or_none(common.get("year")),
        track=_track_number(common.get("track")),
        genres=_genres(common.get("genre")),
        duration_seconds=_round_duration(fmt.get("duration")),
        bitrate=_number_or_none(fmt.get("bitrate")),
        sample_rate=_int_or_none(fmt.get("sampleRate")),
        codec=_text(fmt.get("codec")),
        container=_text(fmt.get("container")),
    )


def read_one(file_path: str | os.PathLike[str], reader: Optional[MetadataReader] = None) -> Result[TrackMetadata]:
    """
    Read one file's metadata.

    Never raises. On any reader failure the Result is an EXTRACTION_ERROR whose
    `meta["extraction_error"]` carries the filename-derived fallback record.
    """
    path = os.fspath(file_path)
    reader = reader or MutagenTagReader()
    try:
        raw = reader.parse(path)
        metadata = map_raw_metadata(raw, path)
    except Exception as exc:
        message = sanitize_error_message(exc, "Failed to read metadata")
        logger.warning("Metadata extraction failed for %s: %s", Path(path).name, message)
        return Result.Err(
            ErrorCode.EXTRACTION_ERROR,
            message,
            extraction_error=ExtractionError.for_file(path, message),
        )
    return Result.Ok(metadata)


def _check_directory_access(dir_path: str) -> Optional[str]:
    if not os.path.exists(dir_path):
        return "No such directory"
    if not os.path.isdir(dir_path):
        return "Not a directory"
    if not os.access(dir_path, os.R_OK | os.X_OK):
        return "Permission denied"
    return None


def _list_audio_files(dir_path: str) -> list[str]:
    root = Path(dir_path)
    names: list[str] = []
    with os.scandir(dir_path) as it:
        for entry in it:
            if not is_audio_file(entry.name):
                continue
            try:
                if not entry.is_file():
                    continue
            except OSError:
                continue
            # Symlinks whose target escapes the scanned directory are not tracks of this library.
            if entry.is_symlink() and not is_within_root(Path(entry.path), root):
                continue
            names.append(entry.name)
    return names


def read_directory(dir_path: str | os.PathLike[str], reader: Optional[MetadataReader] = None) -> Result[DirectoryListing]:
    """
    Scan a directory and read metadata for every recognized audio file.

    Per-file failures become ExtractionError entries; only an inaccessible
    directory fails the whole scan (ACCESS_ERROR).
    """
    directory = os.fspath(dir_path)
    problem = _check_directory_access(directory)
    if problem:
        logger.error("Cannot access music directory %s: %s", directory, problem)
        return Result.Err(ErrorCode.ACCESS_ERROR, f"Failed to access directory: {problem}")

    try:
        filenames = _list_audio_files(directory)
    except OSError as exc:
        logger.error("Directory enumeration failed for %s: %s", directory, exc)
        return Result.Err(ErrorCode.ACCESS_ERROR, sanitize_error_message(exc, "Failed to access directory"))

    reader = reader or MutagenTagReader()
    entries: list[TrackEntry] = []
    for filename in filenames:
        res = read_one(os.path.join(directory, filename), reader=reader)
        if res.ok and res.data is not None:
            entries.append(TrackEntry(filename=filename, outcome=res.data))
        else:
            entries.append(TrackEntry(filename=filename, outcome=res.meta["extraction_error"]))

    listing = DirectoryListing(directory_path=directory, entries=tuple(entries))
    log_structured(logger, logging.DEBUG, "Directory scanned", directory=directory, count=listing.count, failures=listing.failures)
    return Result.Ok(listing, failures=listing.failures)
