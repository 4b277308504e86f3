from __future__ import annotations

import json
from abc import ABC, abstractmethod

from smartcart.errors import AnalysisFailure, RerankFailure, ScoringFailure
from smartcart.llm.parser import parse_recommended_ids, parse_semantic_evaluation, parse_structured_query
from smartcart.llm.prompts import (
    ANALYZE_QUERY_PROMPT,
    ANALYZE_QUERY_SYSTEM_PROMPT,
    RERANK_PROMPT,
    RERANK_SYSTEM_PROMPT,
    SEMANTIC_EVALUATION_PROMPT,
)
from smartcart.llm.usage import TokenUsageTracker
from smartcart.schemas import CatalogProduct, MatchCandidate, SemanticEvaluation, StructuredQuery


class MatchingProvider(ABC):
    """
    The three model-backed capabilities the matching pipeline needs.

    Subclasses only supply ``complete_json`` (one chat call that must answer
    with a JSON object) and ``is_configured``. Every public method raises the
    matching stage's error on any failure; callers decide how to degrade.
    """

    provider_id = ""
    display_name = ""
    model = ""

    def __init__(self, usage: TokenUsageTracker | None = None) -> None:
        self.usage = usage or TokenUsageTracker()

    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @abstractmethod
    def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        operation: str,
    ) -> str:
        ...

    def analyze(self, text: str) -> StructuredQuery:
        prompt = ANALYZE_QUERY_PROMPT.format(user_query=text)
        try:
            raw = self.complete_json(
                ANALYZE_QUERY_SYSTEM_PROMPT,
                prompt,
                temperature=0.2,
                max_tokens=200,
                operation="query analysis",
            )
            return parse_structured_query(raw)
        except Exception as exc:
            raise AnalysisFailure(f"{exc.__class__.__name__}: {exc}") from exc

    def rerank(self, query: StructuredQuery, candidates: list[MatchCandidate], max_results: int) -> list[str]:
        simplified = [
            {
                "id": c.product.id,
                "name": c.product.name,
                "brand": c.product.brand,
                "category": c.product.category,
            }
            for c in candidates
        ]
        prompt = RERANK_PROMPT.format(
            subject=query.subject,
            modifiers=json.dumps(query.modifiers, ensure_ascii=False),
            candidate_products=json.dumps(simplified, ensure_ascii=False, indent=2),
            max_results=max_results,
        )
        try:
            raw = self.complete_json(
                RERANK_SYSTEM_PROMPT,
                prompt,
                temperature=0.1,
                max_tokens=800,
                operation="rerank",
            )
            return parse_recommended_ids(raw, max_results)
        except Exception as exc:
            raise RerankFailure(f"{exc.__class__.__name__}: {exc}") from exc

    def score_semantic(self, query: str, product: CatalogProduct) -> SemanticEvaluation:
        prompt = SEMANTIC_EVALUATION_PROMPT.format(
            user_query=query,
            name=product.name or "",
            brand=product.brand or "",
            category=product.category or "",
            description=product.sales_description or "",
            price=product.price or 0,
        )
        try:
            raw = self.complete_json(
                "",
                prompt,
                temperature=0.3,
                max_tokens=300,
                operation="semantic evaluation",
            )
            return parse_semantic_evaluation(raw)
        except Exception as exc:
            raise ScoringFailure(f"{exc.__class__.__name__}: {exc}") from exc
