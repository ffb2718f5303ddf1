"""Lifecycle states of a :class:`ChatStream`."""
from __future__ import annotations

from enum import Enum


class StreamState(str, Enum):
    """``READING`` until exactly one terminal state is reached."""

    READING = "reading"
    DONE = "done"
    ABORTED = "aborted"

    @property
    def terminal(self) -> bool:
        return self is not StreamState.READING


__all__ = ["StreamState"]
