"""Ollama native API dialect."""

from .client import OllamaDialect

__all__ = ["OllamaDialect"]
