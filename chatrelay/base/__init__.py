"""
chatrelay base package.

Provider-agnostic pieces shared by the dialects and the service layer:

- Models: provider enum and request/response DTOs
- Errors: the ``ProviderError`` taxonomy
- Dialects: base request builder / response interpreter and the factory
- Streaming: the pull-based ``ChatStream``
"""

from .codec import build_request, parse_complete, parse_stream
from .dialect import BaseDialect
from .dto import ClientConfig
from .errors import ErrorCode, ProviderError
from .factory import ProviderFactory, create_dialect
from .interfaces import ProviderDialect
from .models import ChatMessage, ChatRequest, PreparedRequest, Provider, ResponseChunk
from .streaming import ChatStream, StreamState
from .timeouts import TimeoutConfig, get_timeout_config, operation_timeout

__all__ = [
    "build_request",
    "parse_complete",
    "parse_stream",
    "BaseDialect",
    "ClientConfig",
    "ErrorCode",
    "ProviderError",
    "ProviderFactory",
    "create_dialect",
    "ProviderDialect",
    "ChatMessage",
    "ChatRequest",
    "PreparedRequest",
    "Provider",
    "ResponseChunk",
    "ChatStream",
    "StreamState",
    "TimeoutConfig",
    "get_timeout_config",
    "operation_timeout",
]
