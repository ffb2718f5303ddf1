"""Per-call ``httpx`` client construction and transport error mapping.

Each chat invocation creates its own ``httpx.Client`` and closes it when the
response (or stream) is finished, so no connection state outlives one
request. Timeouts derive from :class:`TimeoutConfig`; callers still wrap the
send phase in :func:`operation_timeout` and enforce a read deadline while
streaming.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..errors import ErrorCode, ProviderError, RequestTimeoutError, TransportError, classify_exception
from ..timeouts import TimeoutConfig


def build_timeout(cfg: TimeoutConfig) -> httpx.Timeout:
    """Translate ``cfg`` into an ``httpx.Timeout``.

    Read, write and pool waits share the overall budget; connect gets its own
    tighter cap.
    """
    return httpx.Timeout(cfg.overall_timeout_seconds, connect=cfg.connect_timeout_seconds)


def new_httpx_client(
    cfg: TimeoutConfig,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return a fresh client; ``transport`` lets tests inject a mock."""
    if transport is not None:
        return httpx.Client(timeout=build_timeout(cfg), transport=transport)
    return httpx.Client(timeout=build_timeout(cfg))


def wrap_transport_exception(
    exc: BaseException,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> ProviderError:
    """Map a failure below the HTTP layer to the package taxonomy.

    Anything :func:`classify_exception` reports as ``TIMEOUT`` (``httpx``
    timeouts, builtin ``TimeoutError``) becomes :class:`RequestTimeoutError`;
    every other exception becomes :class:`TransportError`. A
    ``ProviderError`` is returned unchanged.
    """
    if isinstance(exc, ProviderError):
        return exc
    if classify_exception(exc) is ErrorCode.TIMEOUT:  # type: ignore[arg-type]
        return RequestTimeoutError(timeout_seconds, cause=exc, provider=provider, model=model)  # type: ignore[arg-type]
    return TransportError(exc, provider=provider, model=model)  # type: ignore[arg-type]


__all__ = ["build_timeout", "new_httpx_client", "wrap_transport_exception"]
