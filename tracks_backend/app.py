"""
Application factory and process entry point.
"""
from __future__ import annotations

from aiohttp import web

from .adapters.tools import MetadataReader
from .config import ServerConfig, load_config
from .routes import register_routes
from .routes.core import READER_KEY
from .shared import get_logger, log_success

logger = get_logger(__name__)


def create_app(config: ServerConfig | None = None, reader: MetadataReader | None = None) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        config: Settings; read from the environment when omitted.
        reader: Metadata reader override (mutagen-backed when omitted).
    """
    app = web.Application()
    if reader is not None:
        app[READER_KEY] = reader
    register_routes(app, config or load_config())
    return app


def main() -> int:
    config = load_config()
    app = create_app(config)
    log_success(logger, f"Server running at http://localhost:{config.port}")
    logger.info("Music directory: %s", config.music_dir)
    web.run_app(app, host=config.host, port=config.port, print=None)
    return 0
