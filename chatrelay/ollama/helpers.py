"""Ollama native ``/api/chat`` envelope helpers.

Complete responses and every NDJSON stream line share one object shape::

    {"model": "...", "message": {"role": "assistant", "content": "..."},
     "done": false, "error": "..."?}

These helpers are pure; they raise ``ValueError`` on shape problems and
leave the mapping to package errors to the dialect.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.models import ResponseChunk
from ..base.utils.envelopes import decode_json_object, extract_error, get_object, get_text


def chunk_from_ollama_object(obj: Dict[str, Any]) -> ResponseChunk:
    """Map one decoded NDJSON object to a ``ResponseChunk``.

    An empty ``error`` string counts as no error.
    """
    envelope = extract_error(obj)
    if envelope is not None and envelope.message:
        return ResponseChunk(error_message=envelope.message, error_type=envelope.type, error_code=envelope.code)
    text = get_text(get_object(obj, "message"), "content")
    done = obj.get("done") is True
    reason = obj.get("done_reason")
    finish_reason = reason if done and isinstance(reason, str) and reason else ("stop" if done else None)
    return ResponseChunk(text=text, finish_reason=finish_reason, done=done)


def decode_ndjson_line(line: str) -> Optional[ResponseChunk]:
    """Decode one NDJSON line; blank lines carry no frame."""
    if not line.strip():
        return None
    return chunk_from_ollama_object(decode_json_object(line))


__all__ = ["chunk_from_ollama_object", "decode_ndjson_line"]
