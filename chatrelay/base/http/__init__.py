"""HTTP utilities: per-call ``httpx`` clients and transport error mapping."""

from .client import build_timeout, new_httpx_client, wrap_transport_exception

__all__ = ["build_timeout", "new_httpx_client", "wrap_transport_exception"]
