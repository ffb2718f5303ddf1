"""OpenRouter cloud aggregator dialect."""

from .client import OpenRouterDialect

__all__ = ["OpenRouterDialect"]
