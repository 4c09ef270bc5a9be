"""
Track metadata records and their JSON wire form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from ...shared import UNKNOWN_TAG


@dataclass(frozen=True)
class TrackNumber:
    no: Optional[int] = None
    of: Optional[int] = None

    def to_dict(self) -> dict[str, Optional[int]]:
        return {"no": self.no, "of": self.of}


@dataclass(frozen=True)
class TrackMetadata:
    """Tags and stream info for one audio file, with defaults already substituted."""

    title: str
    artist: str = UNKNOWN_TAG
    album: str = UNKNOWN_TAG
    year: Optional[int] = None
    track: Optional[TrackNumber] = None
    genres: tuple[str, ...] = ()
    duration_seconds: int = 0
    bitrate: Optional[float] = None
    sample_rate: Optional[int] = None
    codec: Optional[str] = None
    container: Optional[str] = None

    @classmethod
    def fallback(cls, filename: str) -> "TrackMetadata":
        """Renderable record built from the filename alone."""
        return cls(title=Path(filename).stem)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "year": self.year,
            "track": self.track.to_dict() if self.track is not None else None,
            "genre": list(self.genres),
            "duration": self.duration_seconds,
            "bitrate": self.bitrate,
            "sampleRate": self.sample_rate,
            "codec": self.codec,
            "container": self.container,
        }


@dataclass(frozen=True)
class ExtractionError:
    """A per-file read failure; `fallback` keeps the entry renderable."""

    filename: str
    file_path: str
    message: str
    fallback: TrackMetadata

    @classmethod
    def for_file(cls, file_path: str, message: str) -> "ExtractionError":
        filename = Path(file_path).name
        return cls(
            filename=filename,
            file_path=file_path,
            message=message,
            fallback=TrackMetadata.fallback(filename),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "filepath": self.file_path,
            "error": self.message,
            "title": self.fallback.title,
            "artist": self.fallback.artist,
            "album": self.fallback.album,
            "duration": self.fallback.duration_seconds,
        }


TrackOutcome = Union[TrackMetadata, ExtractionError]


@dataclass(frozen=True)
class TrackEntry:
    filename: str
    outcome: TrackOutcome

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, TrackMetadata)

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.outcome, ExtractionError):
            return self.outcome.to_dict()
        return {"filename": self.filename, **self.outcome.to_dict()}


@dataclass(frozen=True)
class DirectoryListing:
    """One entry per recognized audio file, in filesystem enumeration order."""

    directory_path: str
    entries: tuple[TrackEntry, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def failures(self) -> int:
        return sum(1 for entry in self.entries if not entry.ok)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "directory": self.directory_path,
            "files": [entry.to_dict() for entry in self.entries],
        }
