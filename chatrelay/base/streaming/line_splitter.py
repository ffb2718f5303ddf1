"""Split a response body into lines on ``\\n`` only."""
from __future__ import annotations

from typing import Iterable, Iterator


def iter_newline_lines(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Yield each line of ``chunks`` without its terminating ``\\n``.

    U+2028, U+2029, U+0085 and a bare ``\\r`` stay inside the line: JSON
    strings may carry them unescaped, and SSE and NDJSON frames end at
    ``\\n``. A trailing ``\\r`` is left for the consumer. An unterminated
    last line is yielded at end of input.
    """
    pending = b""
    for chunk in chunks:
        if not chunk:
            continue
        pending += chunk
        *complete, pending = pending.split(b"\n")
        yield from complete
    if pending:
        yield pending


__all__ = ["iter_newline_lines"]
