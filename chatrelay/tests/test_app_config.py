"""Persisted configuration file: load, save, validation and aliases."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from chatrelay.base.errors import ConfigError, ErrorCode
from chatrelay.config.app_config import AppConfig, config_file_path, load_app_config, save_app_config


def test_missing_file_yields_defaults(config_path) -> None:
    cfg = load_app_config()
    assert not config_path.exists()  # nosec B101
    assert cfg.default_provider == "openrouter"  # nosec B101
    assert cfg.default_model is None  # nosec B101
    assert cfg.max_file_size_bytes == 10 * 1024 * 1024  # nosec B101
    assert cfg.models["claude-3-opus"] == "anthropic/claude-3-opus"  # nosec B101


def test_save_then_load(config_path) -> None:
    cfg = AppConfig(default_provider="lm-studio", default_model="qwen", models={"q": "qwen2.5:14b"})
    written = save_app_config(cfg)
    assert written == config_path  # nosec B101
    assert not config_path.with_name("config.json.tmp").exists()  # nosec B101
    loaded = load_app_config()
    assert loaded == cfg  # nosec B101
    assert loaded.default_provider == "lmstudio"  # nosec B101


def test_save_creates_directories(tmp_path) -> None:
    target = tmp_path / "nested" / "dir" / "cfg.json"
    save_app_config(AppConfig(), target)
    assert json.loads(target.read_text(encoding="utf-8"))["default_provider"] == "openrouter"  # nosec B101


@pytest.mark.parametrize("content", ["{not json", "[]", '{"timeout_seconds": -1}', '{"default_provider": "nope"}'])
def test_invalid_file_raises_config_error(config_path, content: str) -> None:
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError) as info:
        load_app_config()
    assert info.value.code is ErrorCode.CONFIG  # nosec B101
    assert str(config_path) in info.value.message  # nosec B101


def test_resolve_model_aliases() -> None:
    cfg = AppConfig(models={"fast": "openai/gpt-4o-mini"})
    assert cfg.resolve_model("fast") == "openai/gpt-4o-mini"  # nosec B101
    assert cfg.resolve_model(" fast ") == "openai/gpt-4o-mini"  # nosec B101
    assert cfg.resolve_model("meta/llama") == "meta/llama"  # nosec B101
    assert cfg.resolve_model(None) is None  # nosec B101


def test_blank_default_model_is_none() -> None:
    assert AppConfig(default_model="  ").default_model is None  # nosec B101


def test_unknown_provider_rejected_by_model() -> None:
    with pytest.raises(ValidationError):
        AppConfig(default_provider="gemini")


def test_config_path_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.delenv("CHATRELAY_CONFIG_FILE")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    assert config_file_path() == tmp_path / "xdg" / "chatrelay" / "config.json"  # nosec B101
