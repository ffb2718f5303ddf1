"""LM Studio (OpenAI-compatible local server) dialect.

Same wire format as OpenRouter without credentials: the local server ignores
``Authorization`` and needs no attribution headers.
"""

from __future__ import annotations

from ..base.models import Provider
from ..base.openai_style_parts import OpenAIStyleDialect


class LMStudioDialect(OpenAIStyleDialect):
    """Dialect for an OpenAI-compatible local model server."""

    provider = Provider.LMSTUDIO


__all__ = ["LMStudioDialect"]
