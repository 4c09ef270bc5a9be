import os

from tracks_shared import ErrorCode, Result, error_payload, is_audio_file, sanitize_error_message


def test_result_ok_and_err_carry_codes() -> None:
    ok = Result.Ok({"a": 1}, failures=0)
    assert ok.ok is True
    assert ok.code == "OK"
    assert ok.meta == {"failures": 0}

    err = Result.Err(ErrorCode.NOT_FOUND, "missing")
    assert err.ok is False
    assert err.code == ErrorCode.NOT_FOUND
    assert err.code == "NOT_FOUND"


def test_sanitize_error_message_masks_paths() -> None:
    msg = sanitize_error_message(OSError("cannot open /home/alice/music/secret.mp3"), "Failed to read file")
    assert msg.startswith("Failed to read file: ")
    assert "/home/alice" not in msg
    assert "[path]" in msg


def test_sanitize_error_message_masks_cwd_and_uses_fallback() -> None:
    msg = sanitize_error_message(f"broken at {os.getcwd()}", "Oops")
    assert os.getcwd() not in msg
    assert sanitize_error_message(None, "Oops") == "Oops"
    assert sanitize_error_message("", "Oops") == "Oops"


def test_error_payload_shape() -> None:
    assert error_payload(ErrorCode.RANGE_NOT_SATISFIABLE, "bad range") == {
        "success": False,
        "error": "bad range",
        "code": "RANGE_NOT_SATISFIABLE",
    }


def test_is_audio_file_is_case_insensitive() -> None:
    for name in ("a.mp3", "B.FLAC", "c.M4a", "d.wav", "e.aac", "f.ogg", "g.WMA"):
        assert is_audio_file(name), name
    for name in ("cover.jpg", "notes.txt", "mp3", "track.mp3.part", "song.aiff"):
        assert not is_audio_file(name), name
