"""Persisted user configuration (``config.json``).

Holds the choices a user makes once and reuses: default provider and model,
request timeout, maximum input file size and short model aliases. Stored as
JSON under the XDG config directory (``$XDG_CONFIG_HOME/chatrelay`` or
``~/.config/chatrelay``) unless ``CHATRELAY_CONFIG_FILE`` names a file.

A missing file yields defaults; an unreadable or invalid file raises
:class:`ConfigError` rather than being silently replaced. Saves are atomic
(temp file + ``os.replace``).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..base.errors import ConfigError, UnknownProviderError
from ..base.logging import get_logger, log_event
from ..base.models import Provider
from .defaults import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_MAX_FILE_SIZE_BYTES,
    DEFAULT_MODEL_ALIASES,
    DEFAULT_PROVIDER,
    DEFAULT_TIMEOUT_SECONDS,
)
from .env import CHATRELAY_CONFIG_FILE, env_str

PathLike = Union[str, Path]


class AppConfig(BaseModel):
    """User preferences persisted between runs."""

    default_provider: str = DEFAULT_PROVIDER
    default_model: Optional[str] = None
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    max_file_size_bytes: int = Field(default=DEFAULT_MAX_FILE_SIZE_BYTES, gt=0)
    models: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MODEL_ALIASES))

    @field_validator("default_provider")
    @classmethod
    def _known_provider(cls, v: str) -> str:
        # UnknownProviderError is not a ValueError; pydantic needs one.
        try:
            return Provider.parse(v).value
        except UnknownProviderError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("default_model")
    @classmethod
    def _blank_model_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    def resolve_model(self, name: Optional[str]) -> Optional[str]:
        """Expand an alias to its full model id; unknown names pass through."""
        if name is None:
            return None
        key = name.strip()
        return self.models.get(key, key)


def _xdg_config_dir() -> Path:
    root = os.environ.get("XDG_CONFIG_HOME")
    base = Path(root).expanduser() if root else Path.home() / ".config"
    return base / CONFIG_DIR_NAME


def config_file_path() -> Path:
    """Resolve the config file location (env override first)."""
    override = env_str(CHATRELAY_CONFIG_FILE)
    if override:
        return Path(override).expanduser()
    return _xdg_config_dir() / CONFIG_FILE_NAME


def load_app_config(path: Optional[PathLike] = None) -> AppConfig:
    """Load the config file at ``path`` (default location when ``None``).

    Raises:
        ConfigError: the file exists but cannot be read, is not valid JSON or
            fails validation.
    """
    cfg_path = Path(path) if path is not None else config_file_path()
    if not cfg_path.is_file():
        return AppConfig()
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"failed to read config file {cfg_path}: {exc}", cause=exc) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {cfg_path} must contain a JSON object")
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid config file {cfg_path}: {exc}", cause=exc) from exc


def save_app_config(cfg: AppConfig, path: Optional[PathLike] = None) -> Path:
    """Persist ``cfg`` atomically and return the written path."""
    cfg_path = Path(path) if path is not None else config_file_path()
    tmp_path = cfg_path.with_name(cfg_path.name + ".tmp")
    try:
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(cfg.model_dump(), ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, cfg_path)
    except OSError as exc:
        raise ConfigError(f"failed to write config file {cfg_path}: {exc}", cause=exc) from exc
    log_event(get_logger("chatrelay.config"), "config.saved", None, path=str(cfg_path))
    return cfg_path


__all__ = [
    "AppConfig",
    "config_file_path",
    "load_app_config",
    "save_app_config",
]
