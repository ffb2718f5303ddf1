"""Prompt acquisition for the CLI.

Sources in priority order: ``--file``, a non-empty ``--prompt``, then standard
input. The file size is checked against the configured limit before anything
is read. The result is trimmed; an optional pre-prompt is prepended as
``pre + "\\n\\n" + input``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from ..base.errors import EmptyInputError, ErrorCode, InputTooLargeError, ProviderError
from ..config.defaults import DEFAULT_MAX_FILE_SIZE_BYTES


def _read_file(path: Path, max_file_size: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ProviderError(code=ErrorCode.VALIDATION, message=f"failed to read file '{path}': {exc}", cause=exc) from exc
    if size > max_file_size:
        raise InputTooLargeError(size, max_file_size, path=str(path))
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ProviderError(code=ErrorCode.VALIDATION, message=f"failed to read file '{path}': {exc}", cause=exc) from exc


def _read_stdin(stdin: Optional[TextIO]) -> str:
    stream = stdin if stdin is not None else sys.stdin
    if stream is None or stream.isatty():
        raise EmptyInputError("no input provided: use --prompt, --file or pipe text on stdin")
    return stream.read()


def read_prompt(
    file_path: Optional[Union[str, Path]] = None,
    prompt: Optional[str] = None,
    stdin: Optional[TextIO] = None,
    *,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE_BYTES,
    pre_prompt: Optional[str] = None,
) -> str:
    """Return the prompt text to send.

    Raises:
        InputTooLargeError: the file exceeds ``max_file_size`` bytes.
        EmptyInputError: the selected source is empty after trimming, or no
            source is available (interactive terminal on stdin).
        ProviderError: the file cannot be read (``VALIDATION`` code).
    """
    if file_path:
        raw = _read_file(Path(file_path).expanduser(), max_file_size)
    elif prompt:
        raw = prompt
    else:
        raw = _read_stdin(stdin)

    text = raw.strip()
    if not text:
        raise EmptyInputError()
    if pre_prompt and pre_prompt.strip():
        text = pre_prompt.strip() + "\n\n" + text
    return text


__all__ = ["read_prompt"]
