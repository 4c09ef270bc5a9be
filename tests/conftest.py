import struct
import sys
import wave
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

# Tests live at <repo>/tests/, so the repo root is one parent above.
REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def write_wav(path: Path, seconds: float = 1.0, sample_rate: int = 8000) -> Path:
    """Write a silent mono 16-bit PCM WAV file."""
    frames = int(seconds * sample_rate)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(struct.pack("<h", 0) * frames)
    return path


@pytest.fixture
def make_wav():
    return write_wav


@pytest.fixture
def music_dir(tmp_path: Path) -> Path:
    root = tmp_path / "music"
    root.mkdir()
    return root


@pytest.fixture
def make_client(tmp_path: Path):
    """Factory for a started TestClient over an app built with the given settings."""
    from tracks_backend.app import create_app
    from tracks_backend.config import ServerConfig

    clients: list[TestClient] = []

    async def _make(music_root: Path, reader=None, **overrides) -> TestClient:
        settings = {
            "music_dir": str(music_root),
            "static_dir": str(tmp_path / "no-static"),
            "index_page": str(tmp_path / "no-index.html"),
        }
        settings.update(overrides)
        app = create_app(ServerConfig(**settings), reader=reader)
        client = TestClient(TestServer(app))
        await client.start_server()
        clients.append(client)
        return client

    return _make, clients


@pytest_asyncio.fixture
async def client_factory(make_client):
    make, clients = make_client
    try:
        yield make
    finally:
        for client in clients:
            await client.close()
