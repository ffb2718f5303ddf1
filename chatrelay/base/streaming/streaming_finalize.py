"""Terminal logging for a finished or aborted stream."""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import ProviderError
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext],
    metrics: StreamMetrics,
    finish_reason: Optional[str] = None,
    error: Optional[ProviderError] = None,
    cancelled: bool = False,
) -> None:
    """Emit ``stream.end`` or ``stream.error`` with the collected metrics."""
    normalized_log_event(
        logger,
        "stream.end" if error is None else "stream.error",
        ctx,
        phase="finalize",
        emitted=metrics.emitted > 0,
        error_code=error.code.value if error is not None else None,
        emitted_count=metrics.emitted,
        skipped_count=metrics.skipped,
        chars=metrics.chars,
        time_to_first_chunk_ms=metrics.time_to_first_chunk_ms,
        total_duration_ms=metrics.total_duration_ms,
        finish_reason=finish_reason,
        cancelled=cancelled or None,
        error=error.message if error is not None else None,
    )


__all__ = ["finalize_stream"]
