"""
ChatRequest DTO: the logical request body shared by all three dialects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .message import ChatMessage


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request.

    Attributes:
        model: Target model identifier (e.g. ``openai/gpt-4`` or ``llama3``).
        messages: Ordered messages; exactly one ``user`` message in practice.
        stream: Whether the server should stream the reply.

    Methods:
        to_payload: Return the JSON body with a fixed key order
            (``model``, ``messages``, ``stream``).
    """

    model: str
    messages: Tuple[ChatMessage, ...]
    stream: bool = False

    @classmethod
    def single_user(cls, model: str, prompt: str, stream: bool) -> "ChatRequest":
        return cls(model=model, messages=(ChatMessage(role="user", content=prompt),), stream=stream)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
        }


__all__ = ["ChatRequest"]
