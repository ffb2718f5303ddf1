"""
ChatMessage DTO.

Only single-turn ``user`` messages are produced here, but the role literal
keeps the OpenAI/Ollama vocabulary so payloads round-trip unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """One chat message as sent on the wire."""

    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


__all__ = ["ChatMessage", "Role"]
