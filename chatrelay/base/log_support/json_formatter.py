"""JSON logging formatter for the shared ``chatrelay`` logger.

Each record becomes one JSON object per line. When the message itself is a
JSON object (as produced by ``log_event``) its keys are hoisted to the top
level instead of being embedded as an escaped string.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord carries; anything else arrived via ``extra=``.
_RECORD_INTERNALS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Serialize a ``LogRecord`` as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial formatting
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        parsed = None
        if text.startswith("{"):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["msg"] = text
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_INTERNALS:
                continue
            base.setdefault(key, value)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
