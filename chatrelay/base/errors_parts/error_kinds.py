"""
Concrete error kinds raised by the builder, interpreter, transport and CLI.

Each kind fixes its :class:`ErrorCode` (or derives it from an HTTP status) so
call sites only supply the facts they know. All kinds are terminal: nothing
in the package retries on them.
"""
from __future__ import annotations

from typing import Optional

from .classification import code_for_status
from .error_code import ErrorCode
from .provider_error import ProviderError

# Cap on how much of an unparseable error body is echoed back to the user.
BODY_SNIPPET_LIMIT = 500


class EmptyInputError(ProviderError):
    """Prompt text was empty after trimming surrounding whitespace."""

    def __init__(self, message: str = "input is empty", *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.VALIDATION, message=message, provider=provider, model=model)


class InputTooLargeError(ProviderError):
    """Input file exceeds the configured maximum size."""

    def __init__(self, size: int, limit: int, *, path: Optional[str] = None) -> None:
        where = f"'{path}' " if path else ""
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=f"file {where}size ({size} bytes) exceeds maximum allowed size ({limit} bytes)",
        )
        self.size = size
        self.limit = limit


class TransportError(ProviderError):
    """Connection, write or read failure below the HTTP layer."""

    def __init__(self, cause: Exception, *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.TRANSIENT,
            message=f"failed to send request: {cause}",
            provider=provider,
            model=model,
            cause=cause,
        )


class RequestTimeoutError(ProviderError):
    """The overall request deadline elapsed before the call completed."""

    def __init__(
        self,
        timeout_seconds: Optional[float],
        *,
        cause: Optional[Exception] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        after = f" after {timeout_seconds:g}s" if timeout_seconds is not None else ""
        super().__init__(
            code=ErrorCode.TIMEOUT,
            message=f"request timed out{after}",
            provider=provider,
            model=model,
            cause=cause,
        )
        self.timeout_seconds = timeout_seconds


class HTTPStatusError(ProviderError):
    """Non-200 response whose body carried no recognizable error envelope."""

    def __init__(self, status: int, body_snippet: str, *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        snippet = body_snippet[:BODY_SNIPPET_LIMIT]
        super().__init__(
            code=code_for_status(status),
            message=f"HTTP {status}: {snippet}",
            provider=provider,
            model=model,
        )
        self.status = status
        self.body_snippet = snippet


class APIError(ProviderError):
    """Provider-reported error, either before the stream or in-band.

    ``message`` holds the provider's own message verbatim; ``error_type`` and
    ``error_code`` carry the envelope's ``type`` and ``code`` members when
    present. ``status`` is the HTTP status of the response the envelope came
    from (200 for in-band errors).
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        error_type: Optional[str] = None,
        error_code: Optional[object] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        if status is not None and status != 200:
            code = code_for_status(status, default=ErrorCode.SERVER_ERROR)
        elif isinstance(error_code, int):
            code = code_for_status(error_code, default=ErrorCode.SERVER_ERROR)
        else:
            code = ErrorCode.SERVER_ERROR
        super().__init__(code=code, message=message, provider=provider, model=model)
        self.status = status
        self.error_type = error_type
        self.error_code = error_code

    def __str__(self) -> str:  # pragma: no cover - trivial
        prefix = f"HTTP {self.status} - " if self.status not in (None, 200) else ""
        return f"{prefix}API error ({self.error_type or 'unknown'}): {self.message}"


class MalformedResponseError(ProviderError):
    """The success envelope could not be decoded."""

    def __init__(self, cause: Exception, *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED,
            message=f"failed to parse response: {cause}",
            provider=provider,
            model=model,
            cause=cause,
        )


class EmptyResponseError(ProviderError):
    """A 200 response arrived without any choice or message."""

    def __init__(self, *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_RESPONSE,
            message="no response received from the API",
            provider=provider,
            model=model,
        )


class ConfigError(ProviderError):
    """Configuration file could not be read, parsed or written."""

    def __init__(self, message: str, *, cause: Optional[Exception] = None) -> None:
        super().__init__(code=ErrorCode.CONFIG, message=message, cause=cause)


class UnknownProviderError(ProviderError):
    """Raised when a provider name cannot be resolved to a dialect."""

    def __init__(self, name: str) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=f"unknown provider '{name}'", provider=name or None)
        self.name = name


__all__ = [
    "BODY_SNIPPET_LIMIT",
    "EmptyInputError",
    "InputTooLargeError",
    "TransportError",
    "RequestTimeoutError",
    "HTTPStatusError",
    "APIError",
    "MalformedResponseError",
    "EmptyResponseError",
    "ConfigError",
    "UnknownProviderError",
]
