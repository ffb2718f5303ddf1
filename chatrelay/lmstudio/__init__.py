"""OpenAI-compatible local server dialect."""

from .client import LMStudioDialect

__all__ = ["LMStudioDialect"]
