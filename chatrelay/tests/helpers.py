"""Helpers shared by the tests: SSE/NDJSON body builders and a recording transport."""

from __future__ import annotations

import json
from typing import Callable, Iterable, Iterator, List

import httpx


def sse_lines(frames: Iterable[object], *, done: bool = True) -> List[str]:
    """Render objects (or raw strings) as SSE ``data:`` lines with separators."""
    out: List[str] = []
    for frame in frames:
        payload = frame if isinstance(frame, str) else json.dumps(frame)
        out.extend([f"data: {payload}", ""])
    if done:
        out.extend(["data: [DONE]", ""])
    return out


def ndjson_lines(objects: Iterable[dict]) -> List[str]:
    return [json.dumps(o) for o in objects]


def delta(text: str, finish_reason=None) -> dict:
    return {"choices": [{"delta": {"content": text}, "finish_reason": finish_reason}]}


def body_of(lines: Iterable[str]) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


class RecordingTransport(httpx.MockTransport):
    """``MockTransport`` that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


class FailingStream(httpx.SyncByteStream):
    """Body that yields ``chunks`` and then raises ``exc``."""

    def __init__(self, chunks: Iterable[bytes], exc: Exception) -> None:
        self._chunks = list(chunks)
        self._exc = exc
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks
        raise self._exc

    def close(self) -> None:
        self.closed = True


class StepClock:
    """Monotonic clock advancing by ``step`` seconds on each call."""

    def __init__(self, step: float = 0.0, start: float = 0.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value
