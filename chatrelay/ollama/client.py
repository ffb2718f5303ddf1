"""Ollama native chat dialect.

Talks to the local daemon's ``/api/chat`` endpoint. No API key is needed and
streamed replies arrive as newline-delimited JSON rather than SSE.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.dialect import BaseDialect
from ..base.errors import APIError, EmptyResponseError
from ..base.models import Provider, ResponseChunk
from ..base.utils.envelopes import extract_error, get_object, get_text
from .helpers import decode_ndjson_line


class OllamaDialect(BaseDialect):
    """Dialect for the Ollama native API."""

    provider = Provider.OLLAMA

    def _extract_complete(self, obj: Dict[str, Any], *, model: Optional[str]) -> str:
        envelope = extract_error(obj)
        if envelope is not None and envelope.message:
            raise APIError(
                envelope.message,
                status=200,
                error_type=envelope.type,
                error_code=envelope.code,
                provider=self.provider_name,
                model=model,
            )
        message = get_object(obj, "message")
        if message is None:
            raise EmptyResponseError(provider=self.provider_name, model=model)
        return get_text(message, "content")

    def decode_stream_line(self, line: str) -> Optional[ResponseChunk]:
        return decode_ndjson_line(line)


__all__ = ["OllamaDialect"]
