from __future__ import annotations

import logging
from typing import Callable

from smartcart.config import MatchingConfig
from smartcart.llm.provider import MatchingProvider
from smartcart.llm.usage import TokenUsageTracker
from smartcart.schemas import ProviderInfo

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROVIDER = "openai"

ProviderFactory = Callable[[TokenUsageTracker], MatchingProvider]


def default_factories() -> dict[str, ProviderFactory]:
    from smartcart.llm.gemini_provider import GeminiMatchingProvider
    from smartcart.llm.openai_provider import OpenAIMatchingProvider

    return {
        "openai": lambda usage: OpenAIMatchingProvider(usage=usage),
        "gemini": lambda usage: GeminiMatchingProvider(usage=usage),
    }


class ProviderRegistry:
    """Resolves the active provider from the runtime config on every call."""

    def __init__(
        self,
        config: MatchingConfig,
        factories: dict[str, ProviderFactory] | None = None,
        usage: TokenUsageTracker | None = None,
    ) -> None:
        self.config = config
        self.usage = usage or TokenUsageTracker()
        self._factories = factories if factories is not None else default_factories()
        self._instances: dict[str, MatchingProvider] = {}

    def get(self, name: str) -> MatchingProvider:
        if name not in self._instances:
            self._instances[name] = self._factories[name](self.usage)
        return self._instances[name]

    def current(self) -> MatchingProvider:
        name = (self.config.ai_provider or DEFAULT_PROVIDER).strip().lower()
        if name not in self._factories:
            _LOGGER.warning("unknown ai provider=%s, using %s", name, DEFAULT_PROVIDER)
            name = DEFAULT_PROVIDER
        provider = self.get(name)
        if name != DEFAULT_PROVIDER and not provider.is_configured():
            _LOGGER.warning("ai provider=%s has no credentials, falling back to %s", name, DEFAULT_PROVIDER)
            return self.get(DEFAULT_PROVIDER)
        return provider

    def available(self) -> list[ProviderInfo]:
        infos: list[ProviderInfo] = []
        for name in self._factories:
            provider = self.get(name)
            label = f"{provider.display_name} ({provider.model})" if provider.model else provider.display_name
            infos.append(ProviderInfo(provider=name, name=label, available=provider.is_configured()))
        return infos
