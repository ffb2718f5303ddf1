"""Module-level entry points over the provider dialects.

Thin functions for callers that do not want to hold a dialect instance::

    req = build_request("openrouter", "openai/gpt-4", "hello", stream=False)
    text = parse_complete("openrouter", body, 200)
    for chunk in parse_stream("ollama", lines):
        ...

Each call builds its dialect from ``config`` (defaults when omitted); no
state is kept between calls.
"""
from __future__ import annotations

from typing import Iterable, Optional, Union

from .dto import ClientConfig
from .factory import create_dialect
from .models import PreparedRequest, Provider
from .streaming import ChatStream


def build_request(
    provider: Union[Provider, str],
    model: Optional[str],
    prompt: str,
    stream: bool = False,
    *,
    config: Optional[ClientConfig] = None,
) -> PreparedRequest:
    """Build the POST for ``prompt``; ``model=None`` uses the configured default."""
    return create_dialect(provider, config).build_request(model, prompt, stream)


def parse_complete(
    provider: Union[Provider, str],
    raw_body: Union[bytes, str],
    status: int,
    *,
    model: Optional[str] = None,
    config: Optional[ClientConfig] = None,
) -> str:
    """Return the reply text of a non-streamed response or raise."""
    return create_dialect(provider, config).parse_complete(raw_body, status, model=model)


def parse_stream(
    provider: Union[Provider, str],
    lines: Iterable[Union[bytes, str]],
    *,
    model: Optional[str] = None,
    config: Optional[ClientConfig] = None,
) -> ChatStream:
    """Return a lazy :class:`ChatStream` over already-split body lines."""
    return create_dialect(provider, config).parse_stream(lines, model=model)


__all__ = ["build_request", "parse_complete", "parse_stream"]
