"""
HTTP `Range` header resolution.

Only the single `bytes=<start>-<end>` form is honoured. Anything else
(suffix ranges, multiple ranges, other units, garbage) is treated as if no
header was sent, so malformed client input degrades to a full response.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_RANGE_RE = re.compile(r"^\s*bytes\s*=\s*(\d+)\s*-\s*(\d*)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte interval, `0 <= start <= end < file_size`."""

    start: int
    end: int

    @property
    def chunk_size(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"


class RangeKind(str, Enum):
    WHOLE = "whole"
    PARTIAL = "partial"
    UNSATISFIABLE = "unsatisfiable"


@dataclass(frozen=True)
class RangeDecision:
    kind: RangeKind
    byte_range: Optional[ByteRange] = None

    @classmethod
    def whole(cls) -> "RangeDecision":
        return cls(RangeKind.WHOLE)

    @classmethod
    def partial(cls, start: int, end: int) -> "RangeDecision":
        return cls(RangeKind.PARTIAL, ByteRange(start, end))

    @classmethod
    def unsatisfiable(cls) -> "RangeDecision":
        return cls(RangeKind.UNSATISFIABLE)


def resolve_range(range_header: Optional[str], file_size: int) -> RangeDecision:
    """
    Turn a `Range` header into a concrete decision for a file of `file_size` bytes.

    - no header, or an unparseable one -> WHOLE
    - `start >= file_size`, or `start > end` after clamping -> UNSATISFIABLE
    - otherwise PARTIAL, with `end` defaulting to and clamped at `file_size - 1`
    """
    if not range_header:
        return RangeDecision.whole()

    match = _RANGE_RE.match(range_header)
    if match is None:
        return RangeDecision.whole()

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else file_size - 1
    end = min(end, file_size - 1)

    if start >= file_size or start > end:
        return RangeDecision.unsatisfiable()
    return RangeDecision.partial(start, end)
