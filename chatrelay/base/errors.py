"""Unified error taxonomy public surface.

This module re-exports the implementations under
``chatrelay.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, code_for_status
from .errors_parts.error_kinds import (
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
