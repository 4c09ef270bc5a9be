"""
Mutagen adapter for audio tag and stream-info extraction.
"""
from __future__ import annotations

import re
from typing import Any, Optional, Protocol

import mutagen
from mutagen import MutagenError

from ...shared import get_logger

logger = get_logger(__name__)

# Easy-tag keys, with the equivalent ID3 frame (WAV/AIFF carry raw ID3) and ASF attribute (WMA).
_ID3_FRAMES = {
    "title": "TIT2",
    "artist": "TPE1",
    "album": "TALB",
    "date": "TDRC",
    "tracknumber": "TRCK",
    "genre": "TCON",
}
_ASF_ATTRIBUTES = {
    "title": "Title",
    "artist": "Author",
    "album": "WM/AlbumTitle",
    "date": "WM/Year",
    "tracknumber": "WM/TrackNumber",
    "genre": "WM/Genre",
}

_CONTAINERS = {
    "MP3": "MPEG",
    "EasyMP3": "MPEG",
    "FLAC": "FLAC",
    "MP4": "MPEG-4",
    "EasyMP4": "MPEG-4",
    "OggVorbis": "Ogg",
    "OggOpus": "Ogg",
    "OggFLAC": "Ogg",
    "OggSpeex": "Ogg",
    "WAVE": "WAVE",
    "ASF": "ASF",
    "AAC": "ADTS",
}

_CODECS = {
    "FLAC": "FLAC",
    "OggVorbis": "Vorbis I",
    "OggOpus": "Opus",
    "OggFLAC": "FLAC",
    "OggSpeex": "Speex",
    "WAVE": "PCM",
    "AAC": "AAC",
}

_YEAR_RE = re.compile(r"(\d{4})")


class MetadataReadError(Exception):
    """Raised when a file's tags or stream info cannot be read."""


class MetadataReader(Protocol):
    """Anything that can turn a file path into the `{common, format}` metadata shape."""

    def parse(self, file_path: str) -> dict[str, Any]: ...


def _frame_values(value: Any) -> list[Any]:
    # ID3 TCON frames resolve numeric genre references like "(17)" through `.genres`.
    genres = getattr(value, "genres", None)
    if isinstance(genres, list):
        return genres
    text = getattr(value, "text", None)
    if text is not None:
        value = text
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _tag_values(tags: Any, key: str) -> list[str]:
    if tags is None:
        return []
    for name in (key, _ID3_FRAMES.get(key), _ASF_ATTRIBUTES.get(key)):
        if not name:
            continue
        try:
            value = tags.get(name)
        except (KeyError, ValueError):
            continue
        if value is None:
            continue
        out = [str(v).strip() for v in _frame_values(value) if str(v).strip()]
        if out:
            return out
    return []


def _first(tags: Any, key: str) -> Optional[str]:
    values = _tag_values(tags, key)
    return values[0] if values else None


def parse_year(value: Optional[str]) -> Optional[int]:
    """Pull a four-digit year out of a date tag ("2004", "2004-05-01", "2004-05-01T12:00")."""
    if not value:
        return None
    match = _YEAR_RE.search(value)
    return int(match.group(1)) if match else None


def parse_slash_separated(value: Optional[str]) -> tuple[Optional[int], Optional[int]]:
    """Parse a string in 'number/total' format; non-numeric parts become None."""
    parts = value.split("/") if value else []
    num = int(parts[0].strip()) if parts and parts[0].strip().isdigit() else None
    total = int(parts[1].strip()) if len(parts) > 1 and parts[1].strip().isdigit() else None
    return num, total


def _codec_name(audio: Any) -> Optional[str]:
    info = getattr(audio, "info", None)
    kind = type(audio).__name__
    if kind in ("MP3", "EasyMP3"):
        version = getattr(info, "version", None)
        layer = getattr(info, "layer", None)
        if version and layer:
            return f"MPEG {version:g} Layer {layer}"
        return "MPEG"
    if kind in ("MP4", "EasyMP4"):
        return getattr(info, "codec_description", None) or getattr(info, "codec", None)
    if kind == "ASF":
        return getattr(info, "codec_name", None) or None
    return _CODECS.get(kind)


class MutagenTagReader:
    """
    Tag reader backed by mutagen.

    Raises MetadataReadError for unreadable, unsupported, or corrupt files.
    """

    def parse(self, file_path: str) -> dict[str, Any]:
        try:
            audio = mutagen.File(file_path, easy=True)
        except MutagenError as exc:
            raise MetadataReadError(str(exc) or exc.__class__.__name__) from exc
        except OSError as exc:
            raise MetadataReadError(exc.strerror or str(exc)) from exc

        if audio is None:
            raise MetadataReadError("Unsupported or unrecognized audio format")

        tags = getattr(audio, "tags", None)
        common: dict[str, Any] = {
            "title": _first(tags, "title"),
            "artist": _first(tags, "artist"),
            "album": _first(tags, "album"),
            "year": parse_year(_first(tags, "date")),
            "genre": _tag_values(tags, "genre"),
        }
        track_raw = _first(tags, "tracknumber")
        if track_raw:
            no, of = parse_slash_separated(track_raw)
            common["track"] = {"no": no, "of": of}

        info = getattr(audio, "info", None)
        fmt: dict[str, Any] = {
            "duration": getattr(info, "length", None),
            "bitrate": getattr(info, "bitrate", None) or None,
            "sampleRate": getattr(info, "sample_rate", None) or None,
            "codec": _codec_name(audio),
            "container": _CONTAINERS.get(type(audio).__name__, type(audio).__name__),
        }
        logger.debug("Parsed tags for %s (%s)", file_path, fmt["container"])
        return {"common": common, "format": fmt}
