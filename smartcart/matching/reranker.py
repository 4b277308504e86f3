from __future__ import annotations

import logging

from smartcart.errors import MatchingError
from smartcart.llm.registry import ProviderRegistry
from smartcart.schemas import MatchCandidate, StructuredQuery

_LOGGER = logging.getLogger(__name__)


class Reranker:
    """
    Lets the model pick and order product ids from the lexical candidates.
    The returned order is final; nothing downstream sorts it again.
    """

    def __init__(self, providers: ProviderRegistry) -> None:
        self.providers = providers

    def rerank(self, query: StructuredQuery, candidates: list[MatchCandidate], max_results: int) -> list[str]:
        if not candidates or max_results <= 0:
            return []
        provider = self.providers.current()
        try:
            ids = provider.rerank(query, candidates, max_results)
        except MatchingError as exc:
            _LOGGER.warning("rerank failed provider=%s subject=%r error=%s", provider.provider_id, query.subject, exc)
            return []
        _LOGGER.info("rerank subject=%r candidates=%d recommended=%s", query.subject, len(candidates), ids)
        return ids
