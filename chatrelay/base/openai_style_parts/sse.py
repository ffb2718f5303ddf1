"""Server-Sent Events framing for OpenAI-compatible chat streams.

Only ``data: `` lines carry frames; comments (``: keep-alive``), ``event:``
and ``id:`` fields and the blank separators between events are ignored.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import DONE_CHUNK, ResponseChunk
from ..utils.envelopes import decode_json_object, extract_error, get_object, get_text

SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"


def sse_payload(line: str) -> Optional[str]:
    """Return the payload of a ``data: `` line, ``None`` for any other line."""
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX):].strip()


def chunk_from_openai_frame(obj: Dict[str, Any]) -> ResponseChunk:
    """Map one decoded ``chat.completion.chunk`` object to a ``ResponseChunk``.

    ``delta.content`` wins over ``message.content``; the latter only appears
    when a terminal frame repeats the full reply.
    """
    envelope = extract_error(obj)
    if envelope is not None:
        return ResponseChunk(
            error_message=envelope.message or "unknown error",
            error_type=envelope.type,
            error_code=envelope.code,
        )
    choices = obj.get("choices")
    if choices is None:
        return ResponseChunk()
    if not isinstance(choices, list):
        raise ValueError("'choices' must be a list")
    if not choices:
        return ResponseChunk()
    first = choices[0]
    if not isinstance(first, dict):
        raise ValueError("'choices[0]' must be an object")
    text = get_text(get_object(first, "delta"), "content") or get_text(get_object(first, "message"), "content")
    finish = first.get("finish_reason")
    finish_reason = finish if isinstance(finish, str) and finish else None
    return ResponseChunk(text=text, finish_reason=finish_reason, done=finish_reason is not None)


def decode_sse_line(line: str) -> Optional[ResponseChunk]:
    """Decode one SSE line; raises ``ValueError`` for an undecodable frame."""
    payload = sse_payload(line)
    if payload is None:
        return None
    if payload == SSE_DONE_SENTINEL:
        return DONE_CHUNK
    return chunk_from_openai_frame(decode_json_object(payload))


__all__ = [
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "sse_payload",
    "chunk_from_openai_frame",
    "decode_sse_line",
]
