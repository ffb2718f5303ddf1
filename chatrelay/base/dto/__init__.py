"""Data transfer objects shared across the base layer."""

from .client_config import ClientConfig

__all__ = ["ClientConfig"]
