"""
Provider dialect interface.

A dialect knows one provider's wire format: how to build the request and how
to interpret a complete body or a streamed one. Dialects perform no network
I/O, so every implementation is testable from literal bytes.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Union, runtime_checkable

from .models import PreparedRequest, Provider, ResponseChunk
from .streaming import ChatStream


@runtime_checkable
class ProviderDialect(Protocol):
    """Two-operation capability set shared by every provider."""

    provider: Provider

    def default_model(self) -> str:
        """Model used when the caller names none."""
        ...

    def build_request(self, model: Optional[str], prompt: str, stream: bool) -> PreparedRequest:
        """Return URL, compact JSON body and headers for one chat call."""
        ...

    def parse_complete(self, raw_body: Union[bytes, str], status: int, *, model: Optional[str] = None) -> str:
        """Return the assistant text of a non-streamed response or raise."""
        ...

    def decode_stream_line(self, line: str) -> Optional[ResponseChunk]:
        """Decode one body line; ``None`` for non-frames, ``ValueError`` if malformed."""
        ...

    def parse_stream(self, lines: Iterable[Union[bytes, str]], **kwargs) -> ChatStream:
        """Wrap body lines in a :class:`ChatStream`."""
        ...


__all__ = ["ProviderDialect"]
