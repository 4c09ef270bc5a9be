"""
Configuration for the tracks server.

Everything is environment-supplied; there is no config file.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .utils import env_bool

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_MUSIC_DIR = "./jays"
DEFAULT_STATIC_DIR = "./public"
DEFAULT_INDEX_PAGE = "./web_demo.html"
DEFAULT_STREAM_CHUNK_SIZE = 64 * 1024
MIN_STREAM_CHUNK_SIZE = 4 * 1024
MAX_STREAM_CHUNK_SIZE = 4 * 1024 * 1024

# Shipped with the package, served when TRACKS_INDEX_PAGE does not exist.
PACKAGED_INDEX_PAGE = Path(__file__).resolve().parent / "web" / "index.html"


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


@dataclass(frozen=True)
class ServerConfig:
    """Process-wide settings resolved once at startup."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    music_dir: str = DEFAULT_MUSIC_DIR
    static_dir: str = DEFAULT_STATIC_DIR
    index_page: str = DEFAULT_INDEX_PAGE
    stream_chunk_size: int = DEFAULT_STREAM_CHUNK_SIZE
    cors_enabled: bool = True

    @property
    def music_root(self) -> Path:
        """Absolute form of the configured music directory (not required to exist)."""
        return Path(self.music_dir).expanduser().resolve(strict=False)

    def resolve_index_page(self) -> Path | None:
        candidate = Path(self.index_page).expanduser()
        if candidate.is_file():
            return candidate
        if PACKAGED_INDEX_PAGE.is_file():
            return PACKAGED_INDEX_PAGE
        return None


def load_config() -> ServerConfig:
    """
    Build a ServerConfig from the environment.

    `PORT` and `MUSIC_DIR` keep their bare names so existing deployments work unchanged.
    """
    return ServerConfig(
        port=_env_int(DEFAULT_PORT, "PORT", "TRACKS_PORT", min_value=0, max_value=65535),
        host=_env_raw("HOST", "TRACKS_HOST", default=DEFAULT_HOST) or DEFAULT_HOST,
        music_dir=_env_raw("MUSIC_DIR", "TRACKS_MUSIC_DIR", default=DEFAULT_MUSIC_DIR) or DEFAULT_MUSIC_DIR,
        static_dir=_env_raw("TRACKS_STATIC_DIR", default=DEFAULT_STATIC_DIR) or DEFAULT_STATIC_DIR,
        index_page=_env_raw("TRACKS_INDEX_PAGE", default=DEFAULT_INDEX_PAGE) or DEFAULT_INDEX_PAGE,
        stream_chunk_size=_env_int(
            DEFAULT_STREAM_CHUNK_SIZE,
            "TRACKS_STREAM_CHUNK_SIZE",
            min_value=MIN_STREAM_CHUNK_SIZE,
            max_value=MAX_STREAM_CHUNK_SIZE,
        ),
        cors_enabled=_env_bool(True, "TRACKS_CORS"),
    )
