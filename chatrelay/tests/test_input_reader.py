"""Prompt acquisition from file, flag or stdin."""

from __future__ import annotations

import io

import pytest

from chatrelay.base.errors import EmptyInputError, ErrorCode, InputTooLargeError, ProviderError
from chatrelay.service import read_prompt


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_file_wins_over_prompt_and_stdin(tmp_path) -> None:
    f = tmp_path / "q.txt"
    f.write_text("  from file\n", encoding="utf-8")
    assert read_prompt(str(f), "from flag", io.StringIO("from stdin")) == "from file"  # nosec B101


def test_prompt_wins_over_stdin() -> None:
    assert read_prompt(None, " from flag ", io.StringIO("from stdin")) == "from flag"  # nosec B101


def test_empty_prompt_flag_falls_back_to_stdin() -> None:
    assert read_prompt(None, "", io.StringIO("from stdin")) == "from stdin"  # nosec B101


def test_stdin_used_last() -> None:
    assert read_prompt(stdin=io.StringIO("piped text\n")) == "piped text"  # nosec B101


def test_pre_prompt_is_prepended() -> None:
    assert read_prompt(prompt="question", pre_prompt="Be brief.") == "Be brief.\n\nquestion"  # nosec B101


def test_oversize_file_rejected_before_reading(tmp_path) -> None:
    f = tmp_path / "big.txt"
    f.write_bytes(b"x" * 11)
    with pytest.raises(InputTooLargeError) as info:
        read_prompt(str(f), max_file_size=10)
    assert info.value.size == 11  # nosec B101
    assert info.value.limit == 10  # nosec B101


def test_missing_file_is_validation_error(tmp_path) -> None:
    with pytest.raises(ProviderError) as info:
        read_prompt(str(tmp_path / "absent.txt"))
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101
    assert "absent.txt" in info.value.message  # nosec B101


def test_interactive_stdin_is_empty_input() -> None:
    with pytest.raises(EmptyInputError, match="no input provided"):
        read_prompt(stdin=_Tty("ignored"))


def test_whitespace_only_is_empty_input(tmp_path) -> None:
    f = tmp_path / "blank.txt"
    f.write_text(" \n\t\n", encoding="utf-8")
    with pytest.raises(EmptyInputError):
        read_prompt(str(f))
