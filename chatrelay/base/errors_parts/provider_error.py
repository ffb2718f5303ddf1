"""Base exception for every failure a chat call can report."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A failure tagged with its :class:`ErrorCode`.

    ``provider`` and ``model`` are filled in when known so the CLI can say
    which backend failed. ``cause`` keeps the lower-level exception (an
    ``httpx`` error, an ``OSError`` from reading the prompt file) for logs.
    """

    code: ErrorCode
    message: str
    provider: Optional[str] = None
    model: Optional[str] = None
    cause: Optional[Exception] = None

    def __str__(self) -> str:
        where = "/".join(p for p in (self.provider, self.model) if p)
        prefix = f"[{where}] " if where else ""
        return f"{prefix}{self.code.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """JSON object written to stderr by the CLI."""
        data: Dict[str, Any] = {"error": self.message, "code": self.code.value}
        data.update({k: v for k, v in (("provider", self.provider), ("model", self.model)) if v})
        return data


__all__ = ["ProviderError"]
