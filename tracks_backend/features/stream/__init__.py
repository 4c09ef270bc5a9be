"""
Byte-range streaming: header resolution and the streaming responder.
"""

from .ranges import ByteRange, RangeDecision, RangeKind, resolve_range
from .responder import respond

__all__ = ["ByteRange", "RangeDecision", "RangeKind", "resolve_range", "respond"]
