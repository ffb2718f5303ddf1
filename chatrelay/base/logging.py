"""Structured logging for the chatrelay package.

All modules obtain loggers through :func:`get_logger`, which lazily sets up a
single ``chatrelay`` logger writing one JSON object per line to stderr. Child
loggers propagate into it, so the level and handlers are configured in one
place. The level comes from ``CHATRELAY_LOG_LEVEL`` (default ``WARNING`` so
that the CLI's stdout/stderr stay clean); ``configure_logger`` changes it at
runtime and can attach a rotating file handler.

``normalized_log_event`` guarantees the canonical keys ``structured``,
``phase``, ``attempt``, ``error_code``, ``emitted`` and ``tokens`` on every
lifecycle event so the output can be filtered uniformly.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER_NAME = "chatrelay"
LOG_LEVEL_ENV = "CHATRELAY_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_chatrelay_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_chatrelay_console_handler"
_FILE_HANDLER_ATTR = "_chatrelay_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Level for a name such as ``debug`` or ``WARN``; ``default`` if unknown."""
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        # Follow sys.stderr when it has been replaced since setup.
        for handler in logger.handlers:
            if not getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                continue
            if getattr(handler, "stream", None) is not sys.stderr:
                handler.stream = sys.stderr  # type: ignore[attr-defined]
        return logger

    level = _parse_level(os.getenv(LOG_LEVEL_ENV))
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Return ``name`` as a child of the shared ``chatrelay`` logger."""
    base = _ensure_base_logger(json_mode=json_mode)
    if name == ROOT_LOGGER_NAME:
        return base
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name. ``None`` keeps the current level.
    file_path:
        When given, a rotating file handler (10 MiB x 5) writing to this path
        is attached, replacing any handler previously attached here. When
        ``None``, such a handler is removed.
    json_mode:
        JSON formatter for the file handler; plain text otherwise.
    """
    logger = _ensure_base_logger(json_mode=True)
    if level is not None:
        if isinstance(level, str):
            logger.setLevel(_parse_level(level, default=logger.level))
        else:
            logger.setLevel(level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in managed:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            handler.setFormatter(_make_formatter(json_mode))
            return logger
        logger.removeHandler(handler)
        handler.close()
    if target is None:
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    fh = RotatingFileHandler(target, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit ``event`` as a JSON payload merged with ``ctx``.

    ``None`` values are dropped unless ``keep_none`` is set. Nothing is
    serialized when ``level`` is disabled on ``logger``.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` with the canonical key set always present.

    ``error_code`` is the one canonical key omitted when ``None``. Extra
    fields never overwrite a canonical value that is already set.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is None:
        fields.pop("error_code")
    for key, value in extra_fields.items():
        if value is None:
            continue
        if fields.get(key) is not None:
            continue
        fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "LOG_LEVEL_ENV",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
