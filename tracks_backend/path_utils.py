"""
Shared path normalization and safety helpers.
"""

from __future__ import annotations

from pathlib import Path


def safe_track_name(value: str | None) -> str | None:
    """
    Validate a client-supplied track filename.

    Only a single plain path component is accepted: no separators, no parent or
    current-directory segments, no NUL or control characters.
    """
    if value is None:
        return None
    raw = str(value).strip()
    if raw == "" or raw in (".", ".."):
        return None
    if any(ord(char) < 32 for char in raw):
        return None
    if "/" in raw or "\\" in raw:
        return None
    try:
        rel = Path(raw)
    except (OSError, ValueError):
        return None
    if getattr(rel, "drive", "") or rel.is_absolute():
        return None
    if len(rel.parts) != 1 or rel.parts[0] == "..":
        return None
    return raw


def is_within_root(candidate: Path, root: Path) -> bool:
    try:
        root_resolved = root.resolve(strict=True)
        cand_resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return False
    return cand_resolved == root_resolved or cand_resolved.is_relative_to(root_resolved)


def resolve_track_path(root: Path, filename: str | None) -> Path | None:
    """
    Map a client filename onto an existing regular file under `root`.

    Returns None for unsafe names, missing files, and anything whose real path
    (after following symlinks) lands outside the root.
    """
    name = safe_track_name(filename)
    if name is None:
        return None
    candidate = root / name
    if not is_within_root(candidate, root):
        return None
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None
    if not resolved.is_file():
        return None
    return resolved
