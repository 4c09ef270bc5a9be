import asyncio
import io
import json

import pytest
from aiohttp import web
from aiohttp.test_utils import make_mocked_request

import tracks_backend.features.stream.responder as responder_mod
from tracks_backend.features.stream import RangeDecision, respond

PAYLOAD = bytes(range(256)) * 4  # 1024 bytes


class _TrackedHandle(io.BytesIO):
    instances: list["_TrackedHandle"] = []

    def __init__(self, data: bytes):
        super().__init__(data)
        _TrackedHandle.instances.append(self)


@pytest.fixture
def tracked_open(monkeypatch):
    _TrackedHandle.instances = []

    def _fake_open(_path, offset):
        handle = _TrackedHandle(PAYLOAD)
        handle.seek(offset)
        return handle

    monkeypatch.setattr(responder_mod, "_open_at", _fake_open)
    return _TrackedHandle.instances


@pytest.fixture
def captured_writes(monkeypatch):
    chunks: list[bytes] = []

    async def _write(self, data):
        chunks.append(bytes(data))

    monkeypatch.setattr(web.StreamResponse, "write", _write)
    return chunks


@pytest.mark.asyncio
async def test_partial_response_streams_only_the_range(tracked_open, captured_writes):
    req = make_mocked_request("GET", "/stream/a.mp3")
    resp = await respond(req, RangeDecision.partial(10, 109), "a.mp3", len(PAYLOAD), "audio/mpeg", chunk_size=32)

    assert resp.status == 206
    assert resp.headers["Content-Range"] == "bytes 10-109/1024"
    assert resp.headers["Accept-Ranges"] == "bytes"
    assert resp.content_length == 100
    assert resp.content_type == "audio/mpeg"
    assert b"".join(captured_writes) == PAYLOAD[10:110]
    assert max(len(c) for c in captured_writes) <= 32
    assert len(tracked_open) == 1
    assert tracked_open[0].closed


@pytest.mark.asyncio
async def test_whole_response(tracked_open, captured_writes):
    req = make_mocked_request("GET", "/stream/a.flac")
    resp = await respond(req, RangeDecision.whole(), "a.flac", len(PAYLOAD), "audio/flac")

    assert resp.status == 200
    assert resp.content_length == len(PAYLOAD)
    assert "Content-Range" not in resp.headers
    assert b"".join(captured_writes) == PAYLOAD
    assert tracked_open[0].closed


@pytest.mark.asyncio
async def test_unsatisfiable_never_opens_the_file(tracked_open):
    req = make_mocked_request("GET", "/stream/a.mp3")
    resp = await respond(req, RangeDecision.unsatisfiable(), "a.mp3", len(PAYLOAD), "audio/mpeg")

    assert resp.status == 416
    assert resp.headers["Content-Range"] == "bytes */1024"
    assert json.loads(resp.body) == {
        "success": False,
        "error": "Requested range not satisfiable",
        "code": "RANGE_NOT_SATISFIABLE",
    }
    assert tracked_open == []


@pytest.mark.asyncio
async def test_head_request_sends_headers_only(tracked_open, captured_writes):
    req = make_mocked_request("HEAD", "/stream/a.mp3")
    resp = await respond(req, RangeDecision.whole(), "a.mp3", len(PAYLOAD), "audio/mpeg")

    assert resp.status == 200
    assert resp.content_length == len(PAYLOAD)
    assert captured_writes == []
    assert tracked_open[0].closed


@pytest.mark.asyncio
async def test_client_disconnect_releases_the_handle(tracked_open, monkeypatch):
    writes = 0

    async def _write(self, data):
        nonlocal writes
        writes += 1
        if writes == 2:
            raise ConnectionResetError("peer went away")

    monkeypatch.setattr(web.StreamResponse, "write", _write)

    req = make_mocked_request("GET", "/stream/a.mp3")
    resp = await respond(req, RangeDecision.whole(), "a.mp3", len(PAYLOAD), "audio/mpeg", chunk_size=64)

    assert resp.status == 200
    assert writes == 2
    assert len(tracked_open) == 1
    assert tracked_open[0].closed


@pytest.mark.asyncio
async def test_cancelled_stream_releases_the_handle(tracked_open, monkeypatch):
    writing = asyncio.Event()

    async def _stalled_write(self, data):
        writing.set()
        await asyncio.Event().wait()

    monkeypatch.setattr(web.StreamResponse, "write", _stalled_write)

    req = make_mocked_request("GET", "/stream/a.mp3")
    task = asyncio.create_task(
        respond(req, RangeDecision.partial(0, 511), "a.mp3", len(PAYLOAD), "audio/mpeg", chunk_size=64)
    )
    await asyncio.wait_for(writing.wait(), timeout=5)
    assert tracked_open[0].closed is False

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert len(tracked_open) == 1
    assert tracked_open[0].closed


@pytest.mark.asyncio
async def test_open_failure_is_a_500(monkeypatch):
    def _boom(_path, _offset):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(responder_mod, "_open_at", _boom)
    req = make_mocked_request("GET", "/stream/a.mp3")
    resp = await respond(req, RangeDecision.whole(), "a.mp3", len(PAYLOAD), "audio/mpeg")

    assert resp.status == 500
    assert resp.content_type == "application/json"
