"""chatrelay.config.defaults
=========================

Stable default values shared by the dialects, the client configuration and
the CLI. Plain constants only: this module imports nothing from the rest of
the package so any layer may depend on it.
"""

from __future__ import annotations

# ---- Endpoints ----
OPENROUTER_DEFAULT_URL = "https://openrouter.ai/api/v1/chat/completions"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"
OLLAMA_CHAT_PATH = "/api/chat"
OLLAMA_DEFAULT_URL = OLLAMA_DEFAULT_HOST + OLLAMA_CHAT_PATH
LMSTUDIO_DEFAULT_URL = "http://localhost:1234/v1/chat/completions"

# ---- Models ----
OPENROUTER_DEFAULT_MODEL = "openai/gpt-oss-20b:free"
OLLAMA_DEFAULT_MODEL = "gpt-oss:20b"
LMSTUDIO_DEFAULT_MODEL = "local-model"

# ---- Request identity ----
DEFAULT_USER_AGENT = "chatrelay/0.1"
DEFAULT_REFERER = "https://github.com/chatrelay/chatrelay"
DEFAULT_TITLE = "chatrelay"

# ---- Limits ----
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

# ---- CLI ----
DEFAULT_PROVIDER = "openrouter"
CONFIG_DIR_NAME = "chatrelay"
CONFIG_FILE_NAME = "config.json"

# Seed aliases written to a fresh config file.
DEFAULT_MODEL_ALIASES = {
    "claude-3-opus": "anthropic/claude-3-opus",
    "claude-3-sonnet": "anthropic/claude-3-sonnet",
    "claude-3-haiku": "anthropic/claude-3-haiku",
    "claude-thinking": "anthropic/claude-3.7-sonnet:thinking",
    "gpt-4": "openai/gpt-4",
    "gpt-4-turbo": "openai/gpt-4-turbo",
    "gpt-3.5-turbo": "openai/gpt-3.5-turbo",
}
