"""Lazy, finite iterator over the text chunks of a streamed reply.

``ChatStream`` pulls raw lines from the response body one at a time, hands
each to a dialect-specific frame decoder and yields the non-empty text it
finds. It owns the stream state machine::

    READING -> READING   (chunk emitted, frame skipped, or non-data line)
    READING -> DONE      (termination signal or end of input)
    READING -> ABORTED   (in-band error, transport failure, deadline)

Nothing leaves a terminal state; once there, ``next()`` raises
``StopIteration``. Malformed frames are logged and skipped. Text emitted
before an abort stays in :attr:`ChatStream.text`.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Iterator, List, Optional, Union

from ..errors import APIError, ProviderError, RequestTimeoutError
from ..http.client import wrap_transport_exception
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import ResponseChunk
from ..timeouts import operation_timeout
from .stream_state import StreamState
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

Line = Union[str, bytes]
FrameDecoder = Callable[[str], Optional[ResponseChunk]]


class ChatStream:
    """Pull-based stream of text chunks with a tracked terminal state.

    Parameters
    ----------
    lines:
        Iterable of body lines (``str`` or ``bytes``) without trailing newline.
    decoder:
        Maps one line to a :class:`ResponseChunk`, returns ``None`` for lines
        that carry no frame, and raises ``ValueError`` for malformed frames.
    provider, model:
        Attached to errors and log events.
    deadline:
        Absolute ``clock()`` value at which a pending or later read aborts with
        :class:`RequestTimeoutError`.
    timeout_seconds:
        Budget reported in the timeout error message.
    clock:
        Monotonic time source; injectable for tests.
    on_close:
        Called once when the stream reaches a terminal state or is closed;
        releases the underlying response.
    """

    def __init__(
        self,
        lines: Iterable[Line],
        decoder: FrameDecoder,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
        deadline: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._lines: Iterator[Line] = iter(lines)
        self._decoder = decoder
        self.provider = provider
        self.model = model
        self._logger = logger or get_logger("chatrelay.stream")
        self._ctx = ctx or LogContext(provider=provider, model=model, stream=True)
        self._deadline = deadline
        self._timeout_seconds = timeout_seconds
        self._clock = clock
        self._on_close = on_close
        self._closed = False
        self._started = False
        self._t0 = clock()
        self._parts: List[str] = []
        self.state = StreamState.READING
        self.finish_reason: Optional[str] = None
        self.error: Optional[ProviderError] = None
        self.metrics = StreamMetrics()

    # Iteration ---------------------------------------------------------
    def __iter__(self) -> "ChatStream":
        return self

    def __next__(self) -> str:
        if self.state is not StreamState.READING:
            raise StopIteration
        if not self._started:
            self._started = True
            normalized_log_event(self._logger, "stream.start", self._ctx, phase="start")
        while True:
            raw = self._read_line()
            if raw is None:
                self._finish()
                raise StopIteration
            line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
            line = line.rstrip("\r")
            try:
                chunk = self._decoder(line)
            except ValueError as exc:
                self.metrics.skipped += 1
                log_event(
                    self._logger,
                    "stream.decode_error",
                    self._ctx,
                    level=logging.WARNING,
                    error=str(exc),
                    line=line[:200],
                )
                continue
            if chunk is None:
                continue
            if chunk.is_error:
                self._abort(
                    APIError(
                        chunk.error_message or "",
                        status=200,
                        error_type=chunk.error_type,
                        error_code=chunk.error_code,
                        provider=self.provider,
                        model=self.model,
                    )
                )
            if chunk.finish_reason:
                self.finish_reason = chunk.finish_reason
            if chunk.text:
                self._record(chunk.text)
                if chunk.done:
                    self._finish()
                return chunk.text
            if chunk.done:
                self._finish()
                raise StopIteration

    def _past_deadline(self) -> bool:
        return self._deadline is not None and self._clock() >= self._deadline

    def _read_line(self) -> Optional[Line]:
        """Return the next raw line, ``None`` at EOF; abort on failure.

        The pull runs under :func:`operation_timeout` for whatever is left of
        the budget, so a read blocked past the deadline is interrupted. A line
        that arrives after the deadline is discarded.
        """
        budget = 0.0
        if self._deadline is not None:
            budget = self._deadline - self._clock()
            if budget <= 0:
                self._abort(self._timeout_error())
        failure: Optional[BaseException] = None
        line: Optional[Line] = None
        try:
            with operation_timeout(budget):
                line = next(self._lines, None)
        except Exception as exc:  # noqa: BLE001 - normalized into the taxonomy
            failure = exc
        if failure is not None:
            self._abort(
                wrap_transport_exception(
                    failure,
                    provider=self.provider,
                    model=self.model,
                    timeout_seconds=self._timeout_seconds,
                )
            )
        if self._past_deadline():
            self._abort(self._timeout_error())
        return line

    def _timeout_error(self) -> RequestTimeoutError:
        return RequestTimeoutError(self._timeout_seconds, provider=self.provider, model=self.model)

    def _record(self, text: str) -> None:
        if self.metrics.time_to_first_chunk_ms is None:
            self.metrics.time_to_first_chunk_ms = (self._clock() - self._t0) * 1000.0
        self._parts.append(text)
        self.metrics.emitted += 1
        self.metrics.chars += len(text)
        log_event(self._logger, "stream.chunk", self._ctx, level=logging.DEBUG, index=self.metrics.emitted, size=len(text))

    # Terminal transitions ---------------------------------------------
    def _finish(self, *, cancelled: bool = False) -> None:
        self.state = StreamState.DONE
        self._release()
        finalize_stream(
            logger=self._logger,
            ctx=self._ctx,
            metrics=self.metrics,
            finish_reason=self.finish_reason,
            cancelled=cancelled,
        )

    def _abort(self, error: ProviderError) -> None:
        self.state = StreamState.ABORTED
        self.error = error
        self._release()
        finalize_stream(logger=self._logger, ctx=self._ctx, metrics=self.metrics, error=error)
        raise error

    def _release(self) -> None:
        self.metrics.total_duration_ms = (self._clock() - self._t0) * 1000.0
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()

    # Public API -------------------------------------------------------
    @property
    def text(self) -> str:
        """Concatenation of every chunk emitted so far, in arrival order."""
        return "".join(self._parts)

    @property
    def chunk_count(self) -> int:
        return self.metrics.emitted

    def close(self) -> None:
        """Stop reading and release the response. Safe to call repeatedly."""
        if self.state is StreamState.READING:
            self._finish(cancelled=True)
        else:
            self._release()

    def read_all(self) -> str:
        """Drain the stream and return the full text (raises on abort)."""
        for _ in self:
            pass
        return self.text

    def __enter__(self) -> "ChatStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ChatStream", "FrameDecoder", "Line"]
