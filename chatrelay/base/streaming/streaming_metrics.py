"""Per-stream counters collected while a :class:`ChatStream` is consumed."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streamed reply.

    ``emitted`` counts text chunks handed to the consumer; ``skipped`` counts
    malformed frames that were dropped.
    """

    emitted: int = 0
    skipped: int = 0
    chars: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None


__all__ = ["StreamMetrics"]
