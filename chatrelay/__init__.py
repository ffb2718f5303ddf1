"""chatrelay package

Send a prompt to OpenRouter, a native Ollama server or an OpenAI-compatible
local server (LM Studio) and return the reply, whole or streamed.

Public API (re-exported):
    - Version: ``__version__``
    - Request/response codec: :func:`build_request`, :func:`parse_complete`,
      :func:`parse_stream`
    - Client: :class:`ChatClient`, :class:`ChatStream`
    - Configuration: :class:`ClientConfig`, :func:`get_client_config`
    - Models: :class:`Provider`, :class:`PreparedRequest`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode` and the
      concrete kinds in :mod:`chatrelay.base.errors`
"""

from .base.codec import build_request, parse_complete, parse_stream
from .base.dto import ClientConfig
from .base.errors import (
    APIError,
    ConfigError,
    EmptyInputError,
    EmptyResponseError,
    ErrorCode,
    HTTPStatusError,
    InputTooLargeError,
    MalformedResponseError,
    ProviderError,
    RequestTimeoutError,
    TransportError,
    UnknownProviderError,
)
from .base.models import PreparedRequest, Provider
from .base.streaming import ChatStream
from .config.loader import get_client_config
from .service import ChatClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "build_request",
    "parse_complete",
    "parse_stream",
    "ChatClient",
    "ChatStream",
    "ClientConfig",
    "get_client_config",
    "Provider",
    "PreparedRequest",
    "ProviderError",
    "ErrorCode",
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
