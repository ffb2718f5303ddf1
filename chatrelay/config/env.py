"""chatrelay.config.env
====================

Environment variable names and small lookup helpers.

All variables are optional. Helpers never raise on unset or malformed
values; they return ``None`` (or the given default) and let the caller decide.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

OPENROUTER_API_KEY = "OPENROUTER_API_KEY"
OPENROUTER_MODEL = "OPENROUTER_MODEL"
OPENROUTER_BASE_URL = "OPENROUTER_BASE_URL"
OPENROUTER_PRE_PROMPT = "OPENROUTER_PRE_PROMPT"
OPENROUTER_STREAM = "OPENROUTER_STREAM"
OPENROUTER_VERBOSE = "OPENROUTER_VERBOSE"
OLLAMA_HOST = "OLLAMA_HOST"
OLLAMA_MODEL = "OLLAMA_MODEL"
LMSTUDIO_BASE_URL = "LMSTUDIO_BASE_URL"
LMSTUDIO_MODEL = "LMSTUDIO_MODEL"
CHATRELAY_PROVIDER = "CHATRELAY_PROVIDER"
CHATRELAY_TIMEOUT_SECONDS = "CHATRELAY_TIMEOUT_SECONDS"
CHATRELAY_CONFIG_FILE = "CHATRELAY_CONFIG_FILE"
DOTENV_FILE = "DOTENV_FILE"

# Provider -> env var holding its API key. Local servers take none.
ENV_MAP: Dict[str, str] = {
    "openrouter": OPENROUTER_API_KEY,
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder rather than a real key.

    Heuristics: contains 'placeholder', 'changeme' or 'your_', case-insensitive.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or v.startswith("your_")


def is_truthy(val: Optional[str]) -> bool:
    """``1``, ``true``, ``yes`` and ``on`` (any case) are true; all else false."""
    if val is None:
        return False
    return val.strip().lower() in _TRUTHY


def env_flag(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Read ``name`` as a boolean flag; unset returns ``default``."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return is_truthy(raw)


def env_str(name: str) -> Optional[str]:
    """Return the stripped value of ``name`` or ``None`` when unset/blank."""
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the API key variable for ``provider`` (``None`` if keyless)."""
    return ENV_MAP.get((provider or "").strip().lower())


def get_api_key(provider: str) -> Optional[str]:
    """Return a non-placeholder API key for ``provider`` from the environment."""
    name = get_env_var_name(provider)
    if not name:
        return None
    val = env_str(name)
    if val is None or is_placeholder(val):
        return None
    return val


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "is_truthy",
    "env_flag",
    "env_str",
    "get_env_var_name",
    "get_api_key",
]
