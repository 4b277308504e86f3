from __future__ import annotations

import logging

from smartcart.config import MatchingConfig
from smartcart.errors import MatchingError
from smartcart.llm.registry import ProviderRegistry
from smartcart.schemas import CatalogProduct

_LOGGER = logging.getLogger(__name__)

HEURISTIC_BASE = 0.85
HEURISTIC_MIN = 0.70
SEMANTIC_MIN = 0.30
MAX_CONFIDENCE = 0.95


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def heuristic_confidence(query: str, product: CatalogProduct, position: int, total: int) -> float:
    confidence = HEURISTIC_BASE
    if total > 0:
        confidence += (total - position) / total * 0.10

    words = (query or "").lower().split()
    name = (product.name or "").lower()
    if words:
        matching = sum(1 for word in words if len(word) > 2 and word in name)
        confidence += matching / len(words) * 0.10

    if product.brand and product.brand.strip():
        confidence += 0.03
    if product.price and product.price > 0:
        confidence += 0.02
    return _clamp(confidence, HEURISTIC_MIN, MAX_CONFIDENCE)


class ConfidenceScorer:
    """
    Positional/lexical heuristic by default; with semantic scoring switched on
    the model rates the pair and any failure drops back to the heuristic.
    """

    def __init__(self, config: MatchingConfig, providers: ProviderRegistry) -> None:
        self.config = config
        self.providers = providers

    def score(self, query: str, product: CatalogProduct, position: int, total: int) -> float:
        if not self.config.semantic_scoring_enabled:
            return heuristic_confidence(query, product, position, total)

        provider = self.providers.current()
        try:
            evaluation = provider.score_semantic(query, product)
        except MatchingError as exc:
            _LOGGER.warning(
                "semantic scoring failed item=%r product=%s error=%s; using heuristic",
                query,
                product.id,
                exc,
            )
            return heuristic_confidence(query, product, position, total)

        _LOGGER.info(
            "semantic score item=%r product=%r confidence=%s match=%s reasoning=%r",
            query,
            product.name,
            evaluation.confidence,
            evaluation.semantic_match,
            evaluation.reasoning,
        )
        return _clamp(evaluation.confidence / 100, SEMANTIC_MIN, MAX_CONFIDENCE)
