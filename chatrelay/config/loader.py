"""Merge configuration sources into a ``ClientConfig``.

Merge order (later wins): defaults -> app config file -> env vars -> overrides.

Environment conventions
-----------------------
``OPENROUTER_API_KEY``, ``OPENROUTER_MODEL``, ``OPENROUTER_BASE_URL``,
``OLLAMA_HOST``, ``OLLAMA_MODEL``, ``LMSTUDIO_BASE_URL``, ``LMSTUDIO_MODEL``,
``CHATRELAY_TIMEOUT_SECONDS``. Base URLs may be given either as the API root
(``https://openrouter.ai/api/v1``) or the full chat endpoint.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

from ..base.dto import ClientConfig
from ..base.logging import get_logger, log_event
from ..base.models import Provider
from . import env as env_names
from .app_config import AppConfig
from .defaults import OLLAMA_CHAT_PATH
from .env import env_str, get_api_key, is_placeholder

_OPENAI_CHAT_PATH = "/chat/completions"

_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Load ``KEY=VALUE`` lines from ``$DOTENV_FILE`` (default ``.env``) once.

    Real environment values win unless they look like placeholders. The load
    is best-effort: an unreadable or non-UTF-8 file is skipped.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(env_names.DOTENV_FILE, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                if line.startswith("export "):
                    line = line[len("export "):]
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    except (OSError, UnicodeDecodeError) as exc:
        log_event(get_logger("chatrelay.config"), "config.dotenv_skipped", level=logging.DEBUG, path=path, error=str(exc))
    finally:
        _DOTENV_LOADED = True


def _with_scheme(url: str) -> str:
    return url if "://" in url else f"http://{url}"


def openai_chat_url(base: str) -> str:
    """Return the chat endpoint for an OpenAI-style API root or endpoint."""
    base = base.rstrip("/")
    return base if base.endswith(_OPENAI_CHAT_PATH) else base + _OPENAI_CHAT_PATH


def ollama_chat_url(host: str) -> str:
    """Return ``/api/chat`` on ``host`` (scheme optional, as Ollama accepts)."""
    host = _with_scheme(host).rstrip("/")
    return host if host.endswith(OLLAMA_CHAT_PATH) else host + OLLAMA_CHAT_PATH


def _positive_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        val = float(raw)
    except ValueError:
        return None
    return val if val > 0 else None


def _app_overrides(app: AppConfig) -> Dict[str, Any]:
    out: Dict[str, Any] = {"timeout_seconds": app.timeout_seconds}
    if app.default_model:
        out[f"{Provider.parse(app.default_provider).value}_model"] = app.resolve_model(app.default_model)
    return out


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if key := get_api_key(Provider.OPENROUTER.value):
        out["api_key"] = key
    if model := env_str(env_names.OPENROUTER_MODEL):
        out["openrouter_model"] = model
    if base := env_str(env_names.OPENROUTER_BASE_URL):
        out["openrouter_url"] = openai_chat_url(base)
    if host := env_str(env_names.OLLAMA_HOST):
        out["ollama_url"] = ollama_chat_url(host)
    if model := env_str(env_names.OLLAMA_MODEL):
        out["ollama_model"] = model
    if base := env_str(env_names.LMSTUDIO_BASE_URL):
        out["lmstudio_url"] = openai_chat_url(base)
    if model := env_str(env_names.LMSTUDIO_MODEL):
        out["lmstudio_model"] = model
    if (timeout := _positive_float(env_str(env_names.CHATRELAY_TIMEOUT_SECONDS))) is not None:
        out["timeout_seconds"] = timeout
    return out


def get_client_config(
    overrides: Optional[Mapping[str, Any]] = None,
    app_config: Optional[AppConfig] = None,
) -> ClientConfig:
    """Return the merged, validated :class:`ClientConfig`.

    ``None`` values in ``overrides`` are ignored so CLI flags that were not
    given do not erase lower layers.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = {}
    if app_config is not None:
        cfg |= _app_overrides(app_config)
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return ClientConfig(**cfg)


__all__ = [
    "get_client_config",
    "openai_chat_url",
    "ollama_chat_url",
]
