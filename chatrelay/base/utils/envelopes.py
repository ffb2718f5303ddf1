"""JSON envelope decoding helpers.

Both wire dialects share the same error envelope, either
``{"error": {"message", "type", "code"}}`` (OpenAI style) or
``{"error": "text"}`` (Ollama). The helpers here decode bodies and frames
into plain dictionaries and normalize that envelope; dialect classes decide
what a missing or empty member means.

Every shape problem raises ``ValueError`` so callers can map it to
``MalformedResponseError`` (complete bodies) or skip the frame (streams).
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import APIError, HTTPStatusError

Raw = Union[bytes, bytearray, str]


@dataclass(frozen=True)
class ErrorEnvelope:
    """Normalized provider error envelope."""

    message: str
    type: Optional[str] = None
    code: Optional[object] = None


def decode_json_object(raw: Raw) -> Dict[str, Any]:
    """Decode ``raw`` as a JSON object; raise ``ValueError`` otherwise."""
    text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def get_object(obj: Mapping[str, Any], key: str) -> Optional[Dict[str, Any]]:
    """Return ``obj[key]`` when it is an object, ``None`` when absent/null."""
    val = obj.get(key)
    if val is None:
        return None
    if not isinstance(val, dict):
        raise ValueError(f"'{key}' must be an object, got {type(val).__name__}")
    return val


def get_text(obj: Optional[Mapping[str, Any]], key: str) -> str:
    """Return ``obj[key]`` as text; absent or null yields ``""``."""
    if obj is None:
        return ""
    val = obj.get(key)
    if val is None:
        return ""
    if not isinstance(val, str):
        raise ValueError(f"'{key}' must be a string, got {type(val).__name__}")
    return val


def extract_error(obj: Mapping[str, Any]) -> Optional[ErrorEnvelope]:
    """Return the error envelope of ``obj`` or ``None`` when ``error`` is null/absent.

    The returned message may be empty; an object-valued ``error`` without a
    usable message yields ``message=""``.
    """
    err = obj.get("error")
    if err is None:
        return None
    if isinstance(err, str):
        return ErrorEnvelope(message=err.strip())
    if isinstance(err, dict):
        msg = err.get("message")
        etype = err.get("type")
        return ErrorEnvelope(
            message=msg.strip() if isinstance(msg, str) else "",
            type=etype if isinstance(etype, str) and etype else None,
            code=err.get("code"),
        )
    return ErrorEnvelope(message=str(err))


def raise_for_error_status(
    raw: Raw,
    status: int,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> None:
    """Raise the error for a non-200 response.

    ``APIError`` when the body carries an error envelope with a non-empty
    message, ``HTTPStatusError`` with a body snippet otherwise.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, (bytes, bytearray)) else raw
    envelope: Optional[ErrorEnvelope] = None
    try:
        envelope = extract_error(decode_json_object(text))
    except ValueError:
        envelope = None
    if envelope is not None and envelope.message:
        raise APIError(
            envelope.message,
            status=status,
            error_type=envelope.type,
            error_code=envelope.code,
            provider=provider,
            model=model,
        )
    raise HTTPStatusError(status, text.strip(), provider=provider, model=model)


__all__ = [
    "ErrorEnvelope",
    "decode_json_object",
    "extract_error",
    "get_object",
    "get_text",
    "raise_for_error_status",
]
