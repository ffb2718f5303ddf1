"""
Provider-agnostic domain models public surface.

Re-exports the one-class-per-file implementations under
``chatrelay.base.models_parts``.
"""

from .models_parts.provider import Provider
from .models_parts.message import ChatMessage, Role
from .models_parts.chat_request import ChatRequest
from .models_parts.prepared_request import PreparedRequest
from .models_parts.response_chunk import DONE_CHUNK, ResponseChunk

__all__ = [
    "Provider",
    "ChatMessage",
    "Role",
    "ChatRequest",
    "PreparedRequest",
    "ResponseChunk",
    "DONE_CHUNK",
]
