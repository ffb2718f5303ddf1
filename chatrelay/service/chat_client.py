"""Blocking chat client: one HTTP POST per call over ``httpx``.

Purpose
-------
Join a provider dialect to the transport. ``complete`` returns the whole
reply; ``stream`` returns a :class:`ChatStream` whose consumption pulls the
response body line by line.

Timeout strategy
----------------
A single overall budget (``ClientConfig.timeout_seconds``) bounds each call:

- the send phase (connect, body write and, for ``complete``, the body read)
  runs under ``operation_timeout`` and the ``httpx`` timeouts;
- each streamed read runs under ``operation_timeout`` for the time left
  before an absolute monotonic deadline, so a stalled read is interrupted.

Either expiry surfaces as :class:`RequestTimeoutError`; other transport
failures as :class:`TransportError`. Nothing is retried.

Resources
---------
Each call owns a fresh ``httpx.Client``; it is closed when ``complete``
returns or when the stream ends, aborts or is closed.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Union

import httpx

from ..base.dialect import BaseDialect
from ..base.dto import ClientConfig
from ..base.errors import ProviderError
from ..base.factory import create_dialect
from ..base.http import new_httpx_client, wrap_transport_exception
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import PreparedRequest, Provider
from ..base.streaming import ChatStream, iter_newline_lines
from ..base.timeouts import TimeoutConfig, get_timeout_config, operation_timeout
from ..base.utils.envelopes import raise_for_error_status


class ChatClient:
    """Send prompts to one provider.

    Parameters
    ----------
    provider:
        ``Provider`` member, wire name or alias.
    config:
        Resolved :class:`ClientConfig`; defaults when omitted.
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    clock:
        Monotonic time source used for the streaming deadline.
    """

    def __init__(
        self,
        provider: Union[Provider, str],
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.dialect: BaseDialect = create_dialect(provider, config)
        self.config = self.dialect.config
        self._transport = transport
        self._clock = clock
        self._logger = get_logger(f"chatrelay.client.{self.dialect.provider_name}")

    @property
    def provider(self) -> Provider:
        return self.dialect.provider

    def _timeouts(self) -> TimeoutConfig:
        return get_timeout_config().for_overall(self.config.timeout_seconds)

    def _send(
        self,
        client: httpx.Client,
        prepared: PreparedRequest,
        *,
        stream: bool,
        model: str,
        timeouts: TimeoutConfig,
    ) -> httpx.Response:
        request = client.build_request(
            prepared.method, prepared.url, content=prepared.body, headers=prepared.headers
        )
        try:
            with operation_timeout(timeouts.overall_timeout_seconds):
                return client.send(request, stream=stream)
        except Exception as exc:  # noqa: BLE001 - normalized into the taxonomy
            raise wrap_transport_exception(
                exc,
                provider=self.dialect.provider_name,
                model=model,
                timeout_seconds=timeouts.overall_timeout_seconds,
            ) from exc

    def _log_error(self, ctx: LogContext, exc: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="finalize",
            emitted=False,
            error_code=exc.code.value,
            error=exc.message,
        )

    def prepare(self, prompt: str, model: Optional[str] = None, *, stream: bool = False) -> PreparedRequest:
        """Build the request without sending it."""
        return self.dialect.build_request(model, prompt, stream)

    def complete(self, prompt: str, model: Optional[str] = None) -> str:
        """Send ``prompt`` and return the full reply text."""
        chosen = self.dialect.resolve_model(model)
        prepared = self.prepare(prompt, chosen, stream=False)
        ctx = LogContext(provider=self.dialect.provider_name, model=chosen, url=prepared.url, stream=False)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", attempt=1, body_bytes=len(prepared.body))
        timeouts = self._timeouts()
        try:
            with new_httpx_client(timeouts, transport=self._transport) as client:
                response = self._send(client, prepared, stream=False, model=chosen, timeouts=timeouts)
                text = self.dialect.parse_complete(response.content, response.status_code, model=chosen)
        except ProviderError as exc:
            self._log_error(ctx, exc)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(text),
            status=200,
            chars=len(text),
        )
        return text

    def stream(self, prompt: str, model: Optional[str] = None) -> ChatStream:
        """Send ``prompt`` with streaming and return the open :class:`ChatStream`.

        Errors before the first body line (transport failure, non-200 status)
        raise here; later ones raise from the stream's iteration.
        """
        chosen = self.dialect.resolve_model(model)
        prepared = self.prepare(prompt, chosen, stream=True)
        ctx = LogContext(provider=self.dialect.provider_name, model=chosen, url=prepared.url, stream=True)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", attempt=1, body_bytes=len(prepared.body))
        timeouts = self._timeouts()
        deadline = self._clock() + timeouts.overall_timeout_seconds
        client = new_httpx_client(timeouts, transport=self._transport)
        try:
            response = self._send(client, prepared, stream=True, model=chosen, timeouts=timeouts)
        except ProviderError as exc:
            client.close()
            self._log_error(ctx, exc)
            raise

        if response.status_code != 200:
            try:
                body = response.read()
            except Exception as exc:  # noqa: BLE001 - normalized into the taxonomy
                err = wrap_transport_exception(
                    exc,
                    provider=self.dialect.provider_name,
                    model=chosen,
                    timeout_seconds=timeouts.overall_timeout_seconds,
                )
                self._log_error(ctx, err)
                raise err from exc
            finally:
                response.close()
                client.close()
            try:
                raise_for_error_status(body, response.status_code, provider=self.dialect.provider_name, model=chosen)
            except ProviderError as exc:
                self._log_error(ctx, exc)
                raise

        def _release() -> None:
            response.close()
            client.close()

        return self.dialect.parse_stream(
            iter_newline_lines(response.iter_bytes()),
            model=chosen,
            deadline=deadline,
            timeout_seconds=timeouts.overall_timeout_seconds,
            clock=self._clock,
            on_close=_release,
        )


__all__ = ["ChatClient"]
