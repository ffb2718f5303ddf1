"""
ResponseChunk: one decoded streaming frame (SSE ``data:`` event or NDJSON line).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ResponseChunk:
    """Provider-neutral view of a single streaming frame.

    ``done`` marks an end-of-stream signal: the SSE ``[DONE]`` sentinel, a
    non-empty ``finish_reason`` or NDJSON ``"done": true``. ``error_message``
    is set when the frame carried an in-band error envelope.
    """

    text: str = ""
    finish_reason: Optional[str] = None
    error_message: Optional[str] = None
    error_type: Optional[str] = None
    error_code: Optional[object] = None
    done: bool = False

    @property
    def is_error(self) -> bool:
        return self.error_message is not None


DONE_CHUNK = ResponseChunk(done=True)


__all__ = ["ResponseChunk", "DONE_CHUNK"]
