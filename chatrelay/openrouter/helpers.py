"""Header helpers for the OpenRouter dialect.

OpenRouter is the only provider that takes a bearer token and the two
attribution headers (``HTTP-Referer``, ``X-Title``) it uses to credit the
calling application.
"""

from __future__ import annotations

from typing import Dict, Optional


class OpenRouterCommonMixin:
    """Mixin adding OpenRouter auth and attribution headers.

    Consumers must expose ``config`` (a ``ClientConfig``) and a base
    ``_build_headers`` to extend.
    """

    def _auth_headers(self) -> Dict[str, str]:
        """Return ``Authorization`` when a key is configured, else nothing.

        A missing key is left for the caller to reject; the CLI does so
        before building the request.
        """
        api_key: Optional[str] = self.config.api_key  # type: ignore[attr-defined]
        if api_key:
            return {"Authorization": f"Bearer {api_key}"}
        return {}

    def _attribution_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        referer = self.config.referer  # type: ignore[attr-defined]
        title = self.config.title  # type: ignore[attr-defined]
        if referer:
            headers["HTTP-Referer"] = referer
        if title:
            headers["X-Title"] = title
        return headers

    def _build_headers(self) -> Dict[str, str]:
        headers = super()._build_headers()  # type: ignore[misc]
        headers |= self._auth_headers()
        headers |= self._attribution_headers()
        return headers


__all__ = ["OpenRouterCommonMixin"]
