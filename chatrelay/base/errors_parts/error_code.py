"""Failure categories shared by dialects, the transport and the CLI.

The string values appear in log events and in the ``code`` field of the
JSON error the CLI prints, so renaming one is a breaking change.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Category of a :class:`ProviderError`."""

    # Credentials missing or rejected (401/402/403, OpenRouter ``code`` 401).
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    # Deadline elapsed locally, or the server answered 408/504.
    TIMEOUT = "timeout"
    # Connection reset, DNS failure, 502 and friends.
    TRANSIENT = "transient"
    # Bad request shape or bad local input (empty prompt, oversized file).
    VALIDATION = "validation"
    # Unknown model or endpoint.
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    # 200 response whose body is not the JSON shape the dialect expects.
    MALFORMED = "malformed"
    # 200 response that parsed but carried no assistant content.
    EMPTY_RESPONSE = "empty_response"
    # Unusable configuration file, unknown provider, bad setting value.
    CONFIG = "config"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
