"""
PreparedRequest: everything needed to issue the single HTTP POST.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict

SENSITIVE_HEADERS = frozenset({"authorization"})


@dataclass(frozen=True)
class PreparedRequest:
    """Output of a dialect's request builder.

    Attributes:
        url: Absolute endpoint URL.
        body: UTF-8 encoded compact JSON body.
        headers: Header mapping in insertion order.
        method: Always ``POST``.
    """

    url: str
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"

    def json(self) -> Dict[str, Any]:
        """Decode ``body`` back into a dictionary."""
        return json.loads(self.body.decode("utf-8"))

    def redacted_headers(self) -> Dict[str, str]:
        """Headers with credential values masked, for display and logs."""
        return {k: ("***" if k.lower() in SENSITIVE_HEADERS else v) for k, v in self.headers.items()}

    def to_dict(self, *, redact: bool = True) -> Dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "headers": self.redacted_headers() if redact else dict(self.headers),
            "body": self.json(),
        }


__all__ = ["PreparedRequest", "SENSITIVE_HEADERS"]
