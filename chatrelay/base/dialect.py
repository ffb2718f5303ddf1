"""
Shared behavior of all provider dialects.

``BaseDialect`` implements the request builder and the parts of the response
interpreter that do not depend on the wire format: trimming and validating
the prompt, deterministic JSON serialization, the non-200 error path and the
wiring of a :class:`ChatStream`. Subclasses supply the success-envelope
extraction and the per-line stream decoder.
"""
from __future__ import annotations

import json
import time
from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Union

from .dto import ClientConfig
from .errors import EmptyInputError, MalformedResponseError
from .logging import LogContext, get_logger
from .models import ChatRequest, PreparedRequest, Provider, ResponseChunk
from .streaming import ChatStream
from .utils.envelopes import decode_json_object, raise_for_error_status


def encode_body(payload: Mapping[str, Any]) -> bytes:
    """Serialize ``payload`` as compact UTF-8 JSON, preserving key order."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class BaseDialect:
    """Common base for the three dialect classes."""

    provider: ClassVar[Provider]

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self.config = config or ClientConfig()
        self._logger = get_logger(f"chatrelay.{self.provider.value}")

    @property
    def provider_name(self) -> str:
        return self.provider.value

    def default_model(self) -> str:
        return self.config.default_model_for(self.provider)

    def endpoint(self) -> str:
        return self.config.url_for(self.provider)

    def resolve_model(self, model: Optional[str]) -> str:
        return (model or "").strip() or self.default_model()

    # Request builder ---------------------------------------------------
    def build_request(self, model: Optional[str], prompt: str, stream: bool) -> PreparedRequest:
        """Build the single POST for ``prompt``.

        Raises:
            EmptyInputError: ``prompt`` is empty after trimming.
        """
        chosen = self.resolve_model(model)
        text = (prompt or "").strip()
        if not text:
            raise EmptyInputError(provider=self.provider_name, model=chosen)
        request = ChatRequest.single_user(chosen, text, bool(stream))
        return PreparedRequest(
            url=self.endpoint(),
            body=encode_body(self._build_payload(request)),
            headers=self._build_headers(),
        )

    def _build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        return request.to_payload()

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }

    # Response interpreter ----------------------------------------------
    def parse_complete(self, raw_body: Union[bytes, str], status: int, *, model: Optional[str] = None) -> str:
        """Return the assistant text of a complete response.

        Raises ``APIError``/``HTTPStatusError`` for non-200 statuses,
        ``APIError`` for an in-band error, ``EmptyResponseError`` when no
        reply is present and ``MalformedResponseError`` on decode failure.
        """
        if status != 200:
            raise_for_error_status(raw_body, status, provider=self.provider_name, model=model)
        try:
            obj = decode_json_object(raw_body)
            return self._extract_complete(obj, model=model)
        except ValueError as exc:
            raise MalformedResponseError(exc, provider=self.provider_name, model=model) from exc

    def _extract_complete(self, obj: Dict[str, Any], *, model: Optional[str]) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def decode_stream_line(self, line: str) -> Optional[ResponseChunk]:  # pragma: no cover - abstract
        raise NotImplementedError

    def parse_stream(
        self,
        lines: Iterable[Union[bytes, str]],
        *,
        model: Optional[str] = None,
        deadline: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        on_close: Optional[Callable[[], None]] = None,
    ) -> ChatStream:
        """Return a lazy :class:`ChatStream` over ``lines``."""
        return ChatStream(
            lines,
            self.decode_stream_line,
            provider=self.provider_name,
            model=model,
            logger=self._logger,
            ctx=LogContext(provider=self.provider_name, model=model, stream=True),
            deadline=deadline,
            timeout_seconds=timeout_seconds,
            clock=clock,
            on_close=on_close,
        )


__all__ = ["BaseDialect", "encode_body"]
