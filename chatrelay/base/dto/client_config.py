"""Typed client configuration threaded into every dialect.

Purpose
-------
Carry endpoint URLs, default models, credentials and request identity in one
validated object so dialects never read the environment themselves. The
merge of defaults, config file, environment and explicit overrides happens in
``chatrelay.config.loader``; this model only holds the result.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_copy``/``model_dump``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...config.defaults import (
    DEFAULT_REFERER,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TITLE,
    DEFAULT_USER_AGENT,
    LMSTUDIO_DEFAULT_MODEL,
    LMSTUDIO_DEFAULT_URL,
    OLLAMA_DEFAULT_MODEL,
    OLLAMA_DEFAULT_URL,
    OPENROUTER_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_URL,
)
from ..models import Provider


class ClientConfig(BaseModel):
    """Resolved configuration for one chat invocation.

    Attributes
    ----------
    api_key:
        Bearer token for OpenRouter. ``None`` means no ``Authorization``
        header is sent.
    openrouter_url, ollama_url, lmstudio_url:
        Full chat endpoint URLs per provider.
    openrouter_model, ollama_model, lmstudio_model:
        Model used when the caller does not name one.
    timeout_seconds:
        Overall budget for one request, including the streamed body.
    user_agent, referer, title:
        Identity headers; ``referer`` and ``title`` are sent to OpenRouter
        only (``HTTP-Referer`` / ``X-Title``).
    """

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = Field(default=None, repr=False)
    openrouter_url: str = OPENROUTER_DEFAULT_URL
    ollama_url: str = OLLAMA_DEFAULT_URL
    lmstudio_url: str = LMSTUDIO_DEFAULT_URL
    openrouter_model: str = OPENROUTER_DEFAULT_MODEL
    ollama_model: str = OLLAMA_DEFAULT_MODEL
    lmstudio_model: str = LMSTUDIO_DEFAULT_MODEL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    referer: str = DEFAULT_REFERER
    title: str = DEFAULT_TITLE

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    def url_for(self, provider: Provider) -> str:
        """Return the chat endpoint for ``provider``."""
        return {
            Provider.OPENROUTER: self.openrouter_url,
            Provider.OLLAMA: self.ollama_url,
            Provider.LMSTUDIO: self.lmstudio_url,
        }[Provider.parse(provider)]

    def default_model_for(self, provider: Provider) -> str:
        """Return the configured default model for ``provider``."""
        return {
            Provider.OPENROUTER: self.openrouter_model,
            Provider.OLLAMA: self.ollama_model,
            Provider.LMSTUDIO: self.lmstudio_model,
        }[Provider.parse(provider)]


__all__ = ["ClientConfig"]
