"""Timeout configuration and wall-clock guards.

One overall budget bounds every chat invocation. ``get_timeout_config``
resolves it from the environment (cached until the relevant variables
change) and ``operation_timeout`` enforces it around blocking sections.

Environment variables (optional):
    CHATRELAY_TIMEOUT_SECONDS   overall request budget, default 60
    CHATRELAY_CONNECT_SECONDS   connect-phase cap, default 10

``operation_timeout(seconds)`` uses SIGALRM where available (Unix main
thread) and a cooperative ``threading.Timer`` fallback otherwise. Both raise
the builtin ``TimeoutError`` which callers map to ``RequestTimeoutError``.
"""
from __future__ import annotations

from contextlib import contextmanager, suppress
from dataclasses import dataclass
import os
import signal
import threading
import time
from typing import Any, Iterator, NamedTuple, Optional, Tuple

DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_CONNECT_SECONDS = 10.0

TIMEOUT_ENV = "CHATRELAY_TIMEOUT_SECONDS"
CONNECT_ENV = "CHATRELAY_CONNECT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in seconds.

    Attributes:
        overall_timeout_seconds: Absolute cap for one request, from send
            through the last streamed line.
        connect_timeout_seconds: Cap on establishing the TCP/TLS connection;
            never larger than the overall budget.
    """

    overall_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_SECONDS

    def for_overall(self, seconds: Optional[float]) -> "TimeoutConfig":
        """Return a copy with a different overall budget."""
        if seconds is None or seconds <= 0:
            return self
        return TimeoutConfig(
            overall_timeout_seconds=float(seconds),
            connect_timeout_seconds=min(self.connect_timeout_seconds, float(seconds)),
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached ``TimeoutConfig``, re-reading env when it changed."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join([os.getenv(TIMEOUT_ENV, ""), os.getenv(CONNECT_ENV, "")])
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    overall = _parse_env_float(TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS)
    connect = _parse_env_float(CONNECT_ENV, DEFAULT_CONNECT_SECONDS)
    _CACHED = TimeoutConfig(
        overall_timeout_seconds=overall,
        connect_timeout_seconds=min(connect, overall),
    )
    _ENV_GUARD = guard
    return _CACHED


class _SavedAlarm(NamedTuple):
    """SIGALRM state displaced by an active guard."""

    handler: Any
    timer: Tuple[float, float]
    armed_at: float


def _can_use_alarm() -> bool:
    return hasattr(signal, "setitimer") and threading.current_thread() is threading.main_thread()


def _arm_alarm(seconds: float) -> Optional[_SavedAlarm]:
    """Point SIGALRM at a ``TimeoutError`` raiser; ``None`` when unavailable."""
    if not _can_use_alarm():
        return None

    def _on_alarm(signum, frame):  # noqa: ARG001
        raise TimeoutError(f"operation exceeded {seconds}s")

    try:  # pragma: no cover - platform specific
        previous = signal.getsignal(signal.SIGALRM)
        signal.signal(signal.SIGALRM, _on_alarm)
        outer = signal.setitimer(signal.ITIMER_REAL, seconds)
    except (ValueError, OSError):  # pragma: no cover - platform specific
        return None
    return _SavedAlarm(handler=previous, timer=outer, armed_at=time.monotonic())


def _disarm_alarm(saved: _SavedAlarm) -> None:
    """Cancel our timer, then hand the outer guard whatever time it had left."""
    with suppress(ValueError, OSError):  # pragma: no cover - platform specific
        signal.setitimer(signal.ITIMER_REAL, 0)
        if saved.handler is not None:
            signal.signal(signal.SIGALRM, saved.handler)
        outer_delay, outer_interval = saved.timer
        if outer_delay <= 0:
            return
        left = outer_delay - (time.monotonic() - saved.armed_at)
        if left > 0:
            signal.setitimer(signal.ITIMER_REAL, left, outer_interval)


@contextmanager
def operation_timeout(seconds: float) -> Iterator[None]:
    """Raise ``TimeoutError`` if the body runs longer than ``seconds``.

    A non-positive ``seconds`` disables the guard. Nested guards restore the
    outer alarm on exit.
    """
    if seconds <= 0:
        yield
        return

    saved = _arm_alarm(seconds)
    if saved is not None:
        try:
            yield
        finally:
            _disarm_alarm(saved)
        return

    # Off the main thread: the body cannot be interrupted, so check on exit.
    fired = threading.Event()
    timer = threading.Timer(seconds, fired.set)
    timer.daemon = True
    timer.start()
    try:
        yield
    finally:
        timer.cancel()
    if fired.is_set():
        raise TimeoutError(f"operation exceeded {seconds}s")


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "TimeoutConfig",
    "get_timeout_config",
    "operation_timeout",
]
