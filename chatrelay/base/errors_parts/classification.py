"""Map HTTP statuses and arbitrary exceptions onto :class:`ErrorCode`.

``code_for_status`` serves the response interpreter, which always knows the
status. ``classify_exception`` serves the transport wrapper and log events,
where all we have is whatever ``httpx`` (or the OS) raised.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError

_STATUS_CODES: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    # OpenRouter answers 402 when the account is out of credits.
    401: ErrorCode.AUTH,
    402: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    429: ErrorCode.RATE_LIMIT,
    408: ErrorCode.TIMEOUT,
    504: ErrorCode.TIMEOUT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
}

# Checked in order against the lowercased exception text.
_MESSAGE_HINTS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate limit", "rate-limit", "too many requests")),
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused")),
    (ErrorCode.VALIDATION, ("invalid", "validation")),
)


def _valid_status(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def status_of(exc: Any) -> Optional[int]:
    """HTTP status carried by ``exc`` itself or by its ``response``, if any."""
    for holder in (exc, getattr(exc, "response", None)):
        if holder is None:
            continue
        for attr in ("status_code", "status"):
            status = _valid_status(getattr(holder, attr, None))
            if status is not None:
                return status
    return None


def code_for_status(status: Optional[int], default: ErrorCode = ErrorCode.UNKNOWN) -> ErrorCode:
    """Category for an HTTP status; unlisted 5xx count as ``SERVER_ERROR``."""
    if status is None:
        return default
    code = _STATUS_CODES.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if 500 <= status < 600 else default


def classify_exception(exc: Any) -> ErrorCode:
    """Best-effort category for any exception.

    A :class:`ProviderError` keeps its own code. Timeouts (builtin or
    ``httpx``) come before other ``httpx`` transport failures, then a known
    HTTP status, then keywords in the message.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    status = status_of(exc)
    if status in _STATUS_CODES:
        return _STATUS_CODES[status]
    text = str(exc).lower()
    for code, needles in _MESSAGE_HINTS:
        if any(n in text for n in needles):
            return code
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception", "code_for_status", "status_of"]
