"""OpenRouter dialect.

OpenAI-compatible Chat Completions at ``/api/v1/chat/completions`` with
bearer auth and attribution headers; streams arrive as SSE and may include
``: OPENROUTER PROCESSING`` keep-alive comments, which the SSE decoder
ignores.
"""

from __future__ import annotations

from ..base.models import Provider
from ..base.openai_style_parts import OpenAIStyleDialect
from .helpers import OpenRouterCommonMixin


class OpenRouterDialect(OpenRouterCommonMixin, OpenAIStyleDialect):
    """Dialect for the OpenRouter cloud aggregator."""

    provider = Provider.OPENROUTER


__all__ = ["OpenRouterDialect"]
