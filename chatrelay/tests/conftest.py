"""Shared fixtures for the chatrelay test suite.

Every test runs with a scrubbed environment: provider variables are removed,
the config file points into ``tmp_path`` and no ``.env`` file is loaded, so
results never depend on the developer's machine.
"""

from __future__ import annotations

import logging

import pytest

from chatrelay.base.logging import configure_logger
from chatrelay.config import loader
from chatrelay.tests.helpers import RecordingTransport

_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "OPENROUTER_BASE_URL",
    "OPENROUTER_PRE_PROMPT",
    "OPENROUTER_STREAM",
    "OPENROUTER_VERBOSE",
    "OLLAMA_HOST",
    "OLLAMA_MODEL",
    "LMSTUDIO_BASE_URL",
    "LMSTUDIO_MODEL",
    "CHATRELAY_PROVIDER",
    "CHATRELAY_TIMEOUT_SECONDS",
    "CHATRELAY_CONNECT_SECONDS",
    "CHATRELAY_LOG_LEVEL",
    "XDG_CONFIG_HOME",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Remove provider env vars and point config/.env lookups into ``tmp_path``."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CHATRELAY_CONFIG_FILE", str(tmp_path / "config.json"))
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setattr(loader, "_DOTENV_LOADED", False)
    yield tmp_path
    configure_logger(level=logging.WARNING, file_path=None)


@pytest.fixture()
def config_path(isolated_env):
    return isolated_env / "config.json"


@pytest.fixture()
def recording_transport():
    """Factory: ``recording_transport(handler)`` returns a ``RecordingTransport``."""
    return RecordingTransport
