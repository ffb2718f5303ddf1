"""Dialect factory.

Purpose
-------
Resolve a :class:`Provider` to its dialect class through a dispatch table
and construct it with a :class:`ClientConfig`. Dialect modules are imported
lazily with ``importlib`` so importing the base layer never pulls in every
provider package.

Failure semantics
-----------------
No retries or fallbacks: either a dialect instance is returned or
:class:`UnknownProviderError` is raised with an actionable message.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Optional, Tuple, Type, Union

from .dialect import BaseDialect
from .dto import ClientConfig
from .errors import UnknownProviderError
from .models import Provider


class ProviderFactory:
    """Create dialects by provider (enum member, wire name or alias)."""

    _DIALECTS: Dict[Provider, Dict[str, str]] = {
        Provider.OPENROUTER: {"module": "chatrelay.openrouter.client", "class": "OpenRouterDialect"},
        Provider.OLLAMA: {"module": "chatrelay.ollama.client", "class": "OllamaDialect"},
        Provider.LMSTUDIO: {"module": "chatrelay.lmstudio.client", "class": "LMStudioDialect"},
    }

    @classmethod
    def dialect_class(cls, provider: Union[Provider, str]) -> Type[BaseDialect]:
        """Return the dialect class registered for ``provider``."""
        member = Provider.parse(provider)
        entry = cls._DIALECTS[member]
        mod = import_module(entry["module"])
        try:
            return getattr(mod, entry["class"])
        except AttributeError as exc:  # pragma: no cover - registration error
            raise UnknownProviderError(member.value) from exc

    @classmethod
    def create(cls, provider: Union[Provider, str], config: Optional[ClientConfig] = None) -> BaseDialect:
        """Instantiate the dialect for ``provider`` with ``config``."""
        return cls.dialect_class(provider)(config)

    @classmethod
    def supported(cls) -> Tuple[Provider, ...]:
        """Supported providers in deterministic order."""
        return tuple(cls._DIALECTS.keys())


def create_dialect(provider: Union[Provider, str], config: Optional[ClientConfig] = None) -> BaseDialect:
    """Module-level shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, config)


__all__ = ["ProviderFactory", "create_dialect"]
