"""OpenAI-compatible dialect parts (complete-body and SSE decoding)."""

from .base import OpenAIStyleDialect
from .sse import SSE_DATA_PREFIX, SSE_DONE_SENTINEL, decode_sse_line, sse_payload

__all__ = [
    "OpenAIStyleDialect",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "decode_sse_line",
    "sse_payload",
]
