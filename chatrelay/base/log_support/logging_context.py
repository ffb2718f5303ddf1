"""Fields shared by every log event of one chat call."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Who is being called and how: provider, model, endpoint, streaming.

    ``extra`` holds ad-hoc keys; they are flattened into the event next to
    the named fields. Unset values never appear in the output.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    url: Optional[str] = None
    stream: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        merged.update(self.extra or {})
        return {key: value for key, value in merged.items() if value is not None}


__all__ = ["LogContext"]
