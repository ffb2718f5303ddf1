"""OpenAI-compatible dialect shared by OpenRouter and LM Studio.

Success envelope::

    {"choices": [{"message": {"content": "..."}}], "error": {...}?}

Streams use SSE framing (see :mod:`.sse`). Subclasses only choose the
provider and add headers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..dialect import BaseDialect
from ..errors import APIError, EmptyResponseError
from ..models import ResponseChunk
from ..utils.envelopes import extract_error, get_object, get_text
from .sse import decode_sse_line


class OpenAIStyleDialect(BaseDialect):
    """Dialect for ``/v1/chat/completions`` style endpoints."""

    def _extract_complete(self, obj: Dict[str, Any], *, model: Optional[str]) -> str:
        envelope = extract_error(obj)
        if envelope is not None:
            raise APIError(
                envelope.message or "unknown error",
                status=200,
                error_type=envelope.type,
                error_code=envelope.code,
                provider=self.provider_name,
                model=model,
            )
        choices = obj.get("choices")
        if choices is not None and not isinstance(choices, list):
            raise ValueError("'choices' must be a list")
        if not choices:
            raise EmptyResponseError(provider=self.provider_name, model=model)
        first = choices[0]
        if not isinstance(first, dict):
            raise ValueError("'choices[0]' must be an object")
        return get_text(get_object(first, "message"), "content")

    def decode_stream_line(self, line: str) -> Optional[ResponseChunk]:
        return decode_sse_line(line)


__all__ = ["OpenAIStyleDialect"]
