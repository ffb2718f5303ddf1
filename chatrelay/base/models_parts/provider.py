"""
Provider enumeration for the three supported chat endpoints.

The enum value is the stable wire/config name; ``parse`` additionally accepts
role-based aliases so users can say ``cloud`` or ``local-native``.
"""
from __future__ import annotations

from enum import Enum

from ..errors import UnknownProviderError


class Provider(str, Enum):
    """Closed set of chat endpoints this package can talk to.

    The member determines URL, auth requirement, body/response shape and the
    streaming encoding (SSE for OpenRouter and LM Studio, NDJSON for Ollama).
    """

    OPENROUTER = "openrouter"
    OLLAMA = "ollama"
    LMSTUDIO = "lmstudio"

    @property
    def requires_api_key(self) -> bool:
        return self is Provider.OPENROUTER

    @property
    def streams_ndjson(self) -> bool:
        return self is Provider.OLLAMA

    @classmethod
    def parse(cls, name: "str | Provider") -> "Provider":
        """Resolve a user-supplied name or alias (case-insensitive)."""
        if isinstance(name, Provider):
            return name
        key = (name or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        alias = _ALIASES.get(key)
        if alias is None:
            raise UnknownProviderError(name)
        return alias


_ALIASES = {
    "cloud": Provider.OPENROUTER,
    "local-native": Provider.OLLAMA,
    "local-openai": Provider.LMSTUDIO,
    "lm-studio": Provider.LMSTUDIO,
}


__all__ = ["Provider"]
