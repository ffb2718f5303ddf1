"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatrelay.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, code_for_status
from .error_kinds import (
    APIError,
    ConfigError,
    EmptyInputError,
    EmptyResponseError,
    HTTPStatusError,
    InputTooLargeError,
    MalformedResponseError,
    RequestTimeoutError,
    TransportError,
    UnknownProviderError,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "code_for_status",
    "APIError",
    "ConfigError",
    "EmptyInputError",
    "EmptyResponseError",
    "HTTPStatusError",
    "InputTooLargeError",
    "MalformedResponseError",
    "RequestTimeoutError",
    "TransportError",
    "UnknownProviderError",
]
