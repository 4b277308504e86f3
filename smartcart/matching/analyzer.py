from __future__ import annotations

import logging

from smartcart.errors import MatchingError
from smartcart.llm.registry import ProviderRegistry
from smartcart.schemas import StructuredQuery

_LOGGER = logging.getLogger(__name__)


class QueryAnalyzer:
    """Splits a shopping-list entry into subject and modifiers with one model call."""

    def __init__(self, providers: ProviderRegistry) -> None:
        self.providers = providers

    def analyze(self, text: str) -> StructuredQuery | None:
        provider = self.providers.current()
        try:
            query = provider.analyze(text)
        except MatchingError as exc:
            _LOGGER.warning("query analysis failed provider=%s item=%r error=%s", provider.provider_id, text, exc)
            return None
        _LOGGER.info("query analysis subject=%r modifiers=%s", query.subject, query.modifiers)
        return query
