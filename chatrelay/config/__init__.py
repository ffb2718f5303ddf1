"""Configuration layer for chatrelay.

Sources, merged in this order (later wins):
    1. Built-in defaults (:mod:`.defaults`)
    2. Persisted user config file (:mod:`.app_config`)
    3. Environment variables, after a one-time ``.env`` load (:mod:`.env`)
    4. Explicit in-code or command-line overrides

``chatrelay.config.loader.get_client_config`` performs the merge and returns
a validated ``ClientConfig``. This package module only re-exports the
dependency-free constants and env helpers so the base layer can import them
without a cycle.
"""
from __future__ import annotations

from .defaults import (
    DEFAULT_MAX_FILE_SIZE_BYTES,
    DEFAULT_MODEL_ALIASES,
    DEFAULT_PROVIDER,
    DEFAULT_TIMEOUT_SECONDS,
)
from .env import env_flag, env_str, get_api_key, is_placeholder, is_truthy

__all__ = [
    "DEFAULT_MAX_FILE_SIZE_BYTES",
    "DEFAULT_MODEL_ALIASES",
    "DEFAULT_PROVIDER",
    "DEFAULT_TIMEOUT_SECONDS",
    "env_flag",
    "env_str",
    "get_api_key",
    "is_placeholder",
    "is_truthy",
]
