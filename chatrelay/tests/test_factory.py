from __future__ import annotations

import pytest

from chatrelay.base import ProviderDialect
from chatrelay.base.dto import ClientConfig
from chatrelay.base.errors import UnknownProviderError
from chatrelay.base.factory import ProviderFactory, create_dialect
from chatrelay.base.models import Provider
from chatrelay.lmstudio import LMStudioDialect
from chatrelay.ollama import OllamaDialect
from chatrelay.openrouter import OpenRouterDialect


@pytest.mark.parametrize(
    "name,cls",
    [
        ("openrouter", OpenRouterDialect),
        ("OLLAMA", OllamaDialect),
        (Provider.LMSTUDIO, LMStudioDialect),
        ("cloud", OpenRouterDialect),
    ],
)
def test_factory_resolves_dialects(name, cls) -> None:
    dialect = ProviderFactory.create(name)
    assert isinstance(dialect, cls)  # nosec B101
    assert isinstance(dialect, ProviderDialect)  # nosec B101


def test_factory_threads_config() -> None:
    cfg = ClientConfig(lmstudio_url="http://x/v1/chat/completions")
    assert create_dialect("lmstudio", cfg).endpoint() == "http://x/v1/chat/completions"  # nosec B101


def test_supported_order() -> None:
    assert ProviderFactory.supported() == (Provider.OPENROUTER, Provider.OLLAMA, Provider.LMSTUDIO)  # nosec B101


@pytest.mark.parametrize("member", list(Provider))
def test_every_provider_has_a_dialect(member: Provider) -> None:
    assert member in ProviderFactory.supported()  # nosec B101
    assert ProviderFactory.dialect_class(member).provider is member  # nosec B101


@pytest.mark.parametrize("name", ["", "openai", "ollama2"])
def test_unknown_provider(name: str) -> None:
    with pytest.raises(UnknownProviderError) as info:
        ProviderFactory.dialect_class(name)
    assert info.value.name == name  # nosec B101


def test_provider_capabilities() -> None:
    assert Provider.OPENROUTER.requires_api_key  # nosec B101
    assert not Provider.OLLAMA.requires_api_key  # nosec B101
    assert Provider.OLLAMA.streams_ndjson  # nosec B101
    assert not Provider.LMSTUDIO.streams_ndjson  # nosec B101
