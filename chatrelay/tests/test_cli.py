"""End-to-end CLI behaviour with mocked HTTP."""

from __future__ import annotations

import io
import json
import sys

import httpx
import pytest

from chatrelay.service import cli as chat_cli
from chatrelay.service.cli import cli_actions
from chatrelay.service.cli.cli_parser import _str2bool, build_parser
from chatrelay.tests.helpers import FailingStream, body_of, delta, sse_lines


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture()
def mock_http(monkeypatch: pytest.MonkeyPatch):
    """Route every ``ChatClient`` built by the CLI through a ``MockTransport``."""
    served = []

    def install(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            served.append(request)
            return handler(request)

        transport = httpx.MockTransport(_record)
        real = cli_actions.ChatClient
        monkeypatch.setattr(
            cli_actions,
            "ChatClient",
            lambda provider, config, transport_=None, **kw: real(provider, config, transport=transport),
        )
        return served

    return install


def _last_json(text: str) -> dict:
    return json.loads(text.strip().splitlines()[-1])


def test_dry_run_prints_redacted_request(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-live")
    code = chat_cli.main(["run", "--prompt", "hello", "--model", "gpt-4", "--dry-run"])
    out = capsys.readouterr().out
    assert code == 0  # nosec B101
    plan = json.loads(out)
    assert plan["provider"] == "openrouter"  # nosec B101
    assert plan["model"] == "openai/gpt-4"  # nosec B101
    assert plan["api_key_present"] is True  # nosec B101
    assert plan["request"]["headers"]["Authorization"] == "***"  # nosec B101
    assert plan["request"]["body"]["messages"] == [{"role": "user", "content": "hello"}]  # nosec B101
    assert "sk-live" not in out  # nosec B101


def test_run_is_the_default_subcommand(capsys) -> None:
    code = chat_cli.main(["-p", "hi", "--provider", "ollama", "--dry-run", "--stream", "--timeout", "7"])
    plan = json.loads(capsys.readouterr().out)
    assert code == 0  # nosec B101
    assert plan["request"]["url"] == "http://localhost:11434/api/chat"  # nosec B101
    assert plan["stream"] is True  # nosec B101
    assert plan["timeout_seconds"] == 7  # nosec B101


def test_provider_and_pre_prompt_from_environment(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("CHATRELAY_PROVIDER", "local-openai")
    monkeypatch.setenv("OPENROUTER_PRE_PROMPT", "Answer in French.")
    monkeypatch.setenv("OPENROUTER_STREAM", "true")
    chat_cli.main(["-p", "hi", "--dry-run"])
    plan = json.loads(capsys.readouterr().out)
    assert plan["provider"] == "lmstudio"  # nosec B101
    assert plan["stream"] is True  # nosec B101
    assert plan["request"]["body"]["messages"][0]["content"] == "Answer in French.\n\nhi"  # nosec B101


def test_missing_key_exits_2_with_hint(capsys) -> None:
    code = chat_cli.main(["--provider", "openrouter", "--prompt", "hi"])
    err = _last_json(capsys.readouterr().err)
    assert code == 2  # nosec B101
    assert err["error"].startswith("missing API key")  # nosec B101
    assert err["set_env"] == ["OPENROUTER_API_KEY"]  # nosec B101


def test_unknown_provider_exits_2(capsys) -> None:
    code = chat_cli.main(["--provider", "bard", "-p", "hi"])
    err = _last_json(capsys.readouterr().err)
    assert code == 2  # nosec B101
    assert err["code"] == "not_found"  # nosec B101
    assert "bard" in err["error"]  # nosec B101


def test_no_input_exits_2(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", _Tty())
    code = chat_cli.main(["--provider", "ollama"])
    assert code == 2  # nosec B101
    assert _last_json(capsys.readouterr().err)["code"] == "validation"  # nosec B101


def test_oversize_file_exits_2(tmp_path, capsys) -> None:
    assert chat_cli.main(["config", "set", "max_file_size_bytes", "4"]) == 0  # nosec B101
    big = tmp_path / "prompt.txt"
    big.write_text("more than four bytes", encoding="utf-8")
    code = chat_cli.main(["--provider", "ollama", "--file", str(big)])
    assert code == 2  # nosec B101
    assert "exceeds maximum allowed size" in _last_json(capsys.readouterr().err)["error"]  # nosec B101


def test_piped_stdin_complete_call(monkeypatch: pytest.MonkeyPatch, mock_http, capsys) -> None:
    served = mock_http(
        lambda request: httpx.Response(200, json={"message": {"role": "assistant", "content": "pong"}, "done": True})
    )
    monkeypatch.setattr(sys, "stdin", io.StringIO("ping\n"))
    code = chat_cli.main(["--provider", "ollama", "--no-stream"])
    assert code == 0  # nosec B101
    assert capsys.readouterr().out == "pong\n"  # nosec B101
    assert json.loads(served[0].content)["messages"][0]["content"] == "ping"  # nosec B101


def test_streaming_writes_chunks_then_newline(monkeypatch: pytest.MonkeyPatch, mock_http, capsys) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-1")
    body = body_of(sse_lines([delta("He"), delta("llo")]))
    served = mock_http(lambda request: httpx.Response(200, content=body))
    code = chat_cli.main(["-p", "hi", "--stream"])
    assert code == 0  # nosec B101
    assert capsys.readouterr().out == "Hello\n"  # nosec B101
    assert served[0].headers["authorization"] == "Bearer sk-1"  # nosec B101


def test_request_failure_exits_1(monkeypatch: pytest.MonkeyPatch, mock_http, capsys) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-bad")
    mock_http(lambda request: httpx.Response(401, json={"error": {"message": "User not found.", "code": 401}}))
    code = chat_cli.main(["-p", "hi"])
    captured = capsys.readouterr()
    assert code == 1  # nosec B101
    assert captured.out == ""  # nosec B101
    err = _last_json(captured.err)
    assert err == {"error": "User not found.", "code": "auth", "provider": "openrouter", "model": err["model"]}  # nosec B101


def test_server_404_is_runtime_failure(mock_http, capsys) -> None:
    mock_http(lambda request: httpx.Response(404, json={"error": "model 'x' not found"}))
    code = chat_cli.main(["--provider", "ollama", "-p", "hi", "-m", "x"])
    assert code == 1  # nosec B101
    assert _last_json(capsys.readouterr().err)["code"] == "not_found"  # nosec B101


def test_stream_abort_keeps_partial_output(mock_http, capsys) -> None:
    body = FailingStream([body_of(sse_lines([delta("par")], done=False))], httpx.ReadError("reset"))
    mock_http(lambda request: httpx.Response(200, stream=body))
    code = chat_cli.main(["--provider", "lmstudio", "-p", "hi", "--stream"])
    captured = capsys.readouterr()
    assert code == 1  # nosec B101
    assert captured.out == "par\n"  # nosec B101
    assert _last_json(captured.err)["code"] == "transient"  # nosec B101


def test_verbose_emits_structured_logs(mock_http, capsys) -> None:
    mock_http(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}))
    code = chat_cli.main(["--provider", "lmstudio", "-p", "hi", "--verbose"])
    captured = capsys.readouterr()
    assert code == 0  # nosec B101
    events = [json.loads(line)["event"] for line in captured.err.splitlines() if line.startswith("{")]
    assert "cli.start" in events  # nosec B101
    assert "chat.end" in events  # nosec B101
    assert "cli.finalize" in events  # nosec B101


def test_log_file_receives_events(mock_http, tmp_path, capsys) -> None:
    mock_http(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}))
    log_path = tmp_path / "logs" / "chatrelay.log"
    code = chat_cli.main(["--provider", "lmstudio", "-p", "hi", "-v", "--log-file", str(log_path)])
    capsys.readouterr()
    assert code == 0  # nosec B101
    assert "cli.finalize" in log_path.read_text(encoding="utf-8")  # nosec B101


def test_config_set_alias_show(config_path, capsys) -> None:
    assert chat_cli.main(["config", "set", "default_provider", "local-native"]) == 0  # nosec B101
    assert chat_cli.main(["config", "set", "default_model", "llama3"]) == 0  # nosec B101
    assert chat_cli.main(["config", "alias", "fast", "qwen2.5:7b"]) == 0  # nosec B101
    assert chat_cli.main(["config", "unalias", "gpt-4"]) == 0  # nosec B101
    capsys.readouterr()

    assert chat_cli.main(["config", "show"]) == 0  # nosec B101
    shown = json.loads(capsys.readouterr().out)
    assert shown["path"] == str(config_path)  # nosec B101
    assert shown["default_provider"] == "ollama"  # nosec B101
    assert shown["models"]["fast"] == "qwen2.5:7b"  # nosec B101
    assert "gpt-4" not in shown["models"]  # nosec B101

    chat_cli.main(["-p", "hi", "--dry-run"])
    plan = json.loads(capsys.readouterr().out)
    assert plan["provider"] == "ollama"  # nosec B101
    assert plan["model"] == "llama3"  # nosec B101


@pytest.mark.parametrize(
    "argv",
    [
        ["config", "set", "timeout_seconds", "soon"],
        ["config", "set", "default_provider", "nowhere"],
        ["config", "unalias", "missing"],
    ],
)
def test_config_errors_exit_2(argv, capsys) -> None:
    assert chat_cli.main(argv) == 2  # nosec B101
    assert _last_json(capsys.readouterr().err)["code"] == "config"  # nosec B101


def test_corrupt_config_file_blocks_run(config_path, capsys) -> None:
    config_path.write_text("{broken", encoding="utf-8")
    assert chat_cli.main(["-p", "hi", "--dry-run"]) == 2  # nosec B101
    assert _last_json(capsys.readouterr().err)["code"] == "config"  # nosec B101


def test_providers_listing(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("OLLAMA_HOST", "box:11434")
    assert chat_cli.main(["providers"]) == 0  # nosec B101
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    by_name = {row["provider"]: row for row in rows}
    assert set(by_name) == {"openrouter", "ollama", "lmstudio"}  # nosec B101
    assert by_name["ollama"]["url"] == "http://box:11434/api/chat"  # nosec B101
    assert by_name["ollama"]["streaming"] == "ndjson"  # nosec B101
    assert by_name["openrouter"]["requires_api_key"] is True  # nosec B101
    assert by_name["openrouter"]["api_key_present"] is False  # nosec B101


@pytest.mark.parametrize("raw,expected", [("yes", True), ("OFF", False), (None, True), ("1", True)])
def test_str2bool(raw, expected) -> None:
    assert _str2bool(raw) is expected  # nosec B101


def test_stream_flag_defaults_to_unset() -> None:
    p = build_parser()
    assert p.parse_args(["run"]).stream is None  # nosec B101
    assert p.parse_args(["run", "--stream", "false"]).stream is False  # nosec B101
    assert p.parse_args(["run", "--no-stream"]).stream is False  # nosec B101
    assert p.parse_args(["config"]).config_cmd == "show"  # nosec B101


def test_top_level_help_lists_subcommands(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as info:
        chat_cli.main(["--help"])
    assert info.value.code == 0  # nosec B101
    out = capsys.readouterr().out
    assert "providers" in out and "config" in out  # nosec B101
