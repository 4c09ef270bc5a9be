"""
Per-application settings and collaborator lookup for route handlers.
"""
from aiohttp import web

from tracks_backend.adapters.tools import MetadataReader, MutagenTagReader
from tracks_backend.config import ServerConfig, load_config

CONFIG_KEY: web.AppKey[ServerConfig] = web.AppKey("tracks_config", ServerConfig)
READER_KEY: web.AppKey[object] = web.AppKey("tracks_metadata_reader", object)


def _get_config(request: web.Request) -> ServerConfig:
    """Settings attached to the app, or a fresh read of the environment when none were attached."""
    config = request.app.get(CONFIG_KEY)
    if config is None:
        config = load_config()
    return config


def _get_reader(request: web.Request) -> MetadataReader:
    """Metadata reader attached to the app; mutagen-backed by default."""
    reader = request.app.get(READER_KEY)
    if reader is None:
        return MutagenTagReader()
    return reader  # type: ignore[return-value]
