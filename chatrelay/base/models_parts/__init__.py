"""Models parts package public surface.

Re-exports the individual DTOs; `chatrelay.base.models` remains the primary
import path.
"""

from .provider import Provider
from .message import ChatMessage, Role
from .chat_request import ChatRequest
from .prepared_request import PreparedRequest
from .response_chunk import DONE_CHUNK, ResponseChunk

__all__ = [
    "Provider",
    "ChatMessage",
    "Role",
    "ChatRequest",
    "PreparedRequest",
    "ResponseChunk",
    "DONE_CHUNK",
]
