"""Streaming package: the pull-based ``ChatStream`` and its helpers."""

from .chat_stream import ChatStream, FrameDecoder
from .line_splitter import iter_newline_lines
from .stream_state import StreamState
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

__all__ = [
    "ChatStream",
    "FrameDecoder",
    "iter_newline_lines",
    "StreamState",
    "StreamMetrics",
    "finalize_stream",
]
