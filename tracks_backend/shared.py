"""Backend-facing alias for shared utilities."""

from __future__ import annotations

import tracks_shared as _root_shared

Result = _root_shared.Result
ErrorCode = _root_shared.ErrorCode
get_logger = _root_shared.get_logger
log_success = _root_shared.log_success
log_structured = _root_shared.log_structured
request_id_var = _root_shared.request_id_var
sanitize_error_message = _root_shared.sanitize_error_message
error_payload = _root_shared.error_payload
is_audio_file = _root_shared.is_audio_file
AUDIO_EXTENSIONS = _root_shared.AUDIO_EXTENSIONS
UNKNOWN_TAG = _root_shared.UNKNOWN_TAG

__all__ = list(_root_shared.__all__)
