from __future__ import annotations

import logging
from typing import Any, Iterable

from smartcart.config import MatchingConfig, settings
from smartcart.errors import (
    AnalysisFailure,
    CatalogUnavailable,
    HydrationMiss,
    MatchingError,
    RerankFailure,
    RetrievalEmpty,
)
from smartcart.llm.registry import ProviderRegistry
from smartcart.matching.analyzer import QueryAnalyzer
from smartcart.matching.pricing import estimate_price, image_url, product_url
from smartcart.matching.reranker import Reranker
from smartcart.matching.scoring import ConfidenceScorer
from smartcart.rag.candidates import LexicalCandidateGenerator
from smartcart.rag.catalog_store import CatalogStore
from smartcart.schemas import CatalogProduct, CatalogStats, EcommerceMatch, ProviderInfo

_LOGGER = logging.getLogger(__name__)

DEFAULT_PLATFORM = "carrefour"
DEFAULT_CATEGORY = "Alimentari"


class ProductMatchingService:
    """
    Entry point for matching shopping-list entries to catalog products.

    Per item: catalog check, query analysis, lexical retrieval, model rerank
    (over-fetched past the requested page), page slice, then hydration and
    scoring. Every stage degrades to an empty result for that item; nothing
    is raised to the caller. The service keeps no state between calls, so
    "load more" is just another call with a larger ``skip``.
    """

    def __init__(
        self,
        store: CatalogStore | None = None,
        config: MatchingConfig | None = None,
        providers: ProviderRegistry | None = None,
        candidates: LexicalCandidateGenerator | None = None,
        rerank_buffer: int | None = None,
    ) -> None:
        self.store = store or CatalogStore()
        if store is None:
            self.store.load()
        self.config = config or MatchingConfig.from_settings(settings)
        self.providers = providers or ProviderRegistry(self.config)
        self.candidates = candidates or LexicalCandidateGenerator(self.store)
        self.analyzer = QueryAnalyzer(self.providers)
        self.reranker = Reranker(self.providers)
        self.scorer = ConfidenceScorer(self.config, self.providers)
        self.rerank_buffer = settings.rerank_buffer if rerank_buffer is None else rerank_buffer

    def match_items(
        self,
        items: Iterable[Any],
        platform: str = DEFAULT_PLATFORM,
        skip: int = 0,
        page_size: int | None = None,
    ) -> list[EcommerceMatch]:
        results: list[EcommerceMatch] = []
        # Sequential on purpose: keeps model traffic bounded and logs readable.
        for item in items:
            results.extend(self.match_item(self._item_name(item), platform, skip=skip, page_size=page_size))
        return results

    def match_item(
        self,
        item_name: str,
        platform: str = DEFAULT_PLATFORM,
        skip: int = 0,
        page_size: int | None = None,
    ) -> list[EcommerceMatch]:
        text = str(item_name or "").strip()
        if not text:
            return []
        try:
            skip, size = self._page_window(skip, page_size)
        except (TypeError, ValueError, OverflowError):
            _LOGGER.warning("invalid page window item=%r skip=%r page_size=%r", text, skip, page_size)
            return []
        if size == 0:
            return []
        _LOGGER.info("matching item=%r platform=%s skip=%d page_size=%d", text, platform, skip, size)

        try:
            matches = self._run_pipeline(text, platform, skip, size)
        except MatchingError as exc:
            _LOGGER.info("no match item=%r reason=%s: %s", text, exc.__class__.__name__, exc)
            return []
        except Exception:
            _LOGGER.exception("unexpected error while matching item=%r", text)
            return []
        _LOGGER.info("matched item=%r results=%d", text, len(matches))
        return matches

    def find_product_by_id(self, product_id: str) -> CatalogProduct | None:
        self.store.reload()
        product = self.store.find_by_id(str(product_id).strip())
        if product is not None:
            _LOGGER.info("barcode lookup hit id=%s name=%r", product.id, product.name)
        return product

    def get_catalog_stats(self) -> CatalogStats:
        self.store.reload()
        return self.store.stats()

    def available_providers(self) -> list[ProviderInfo]:
        return self.providers.available()

    def token_usage(self) -> dict[str, object]:
        return self.providers.usage.snapshot()

    def _run_pipeline(self, text: str, platform: str, skip: int, page_size: int) -> list[EcommerceMatch]:
        if not self.store.is_available():
            raise CatalogUnavailable("catalog snapshot not loaded")

        query = self.analyzer.analyze(text)
        if query is None:
            raise AnalysisFailure("could not understand the main product of the request")

        candidates = self.candidates.generate(text)
        if not candidates:
            raise RetrievalEmpty("no catalog product is lexically similar to the request")

        ranked_ids = self.reranker.rerank(query, candidates, skip + page_size + self.rerank_buffer)
        if not ranked_ids:
            raise RerankFailure("reranker recommended no product")

        page_ids = ranked_ids[skip : skip + page_size]
        if not page_ids:
            _LOGGER.info("page empty item=%r ranked=%d skip=%d", text, len(ranked_ids), skip)
            return []

        products: list[CatalogProduct] = []
        for product_id in page_ids:
            try:
                products.append(self._hydrate(product_id))
            except HydrationMiss as exc:
                _LOGGER.warning("skipping stale id: %s", exc)

        return [
            self._to_match(text, platform, product, position, len(products))
            for position, product in enumerate(products)
        ]

    def _hydrate(self, product_id: str) -> CatalogProduct:
        product = self.store.find_by_id(product_id)
        if product is None:
            raise HydrationMiss(product_id)
        return product

    def _to_match(
        self,
        item: str,
        platform: str,
        product: CatalogProduct,
        position: int,
        total: int,
    ) -> EcommerceMatch:
        return EcommerceMatch(
            original_item=item,
            matched_product=product.name,
            brand=product.brand or "",
            category=product.category or DEFAULT_CATEGORY,
            price=product.price or estimate_price(item, product.name),
            description=product.sales_description or product.name,
            image_url=product.image_url or image_url(product.id, platform),
            product_url=product.product_url or product_url(product.id, platform),
            confidence=self.scorer.score(item, product, position, total),
            product_id=product.id,
            platform=platform,
        )

    @staticmethod
    def _page_window(skip: Any, page_size: Any) -> tuple[int, int]:
        start = 0 if skip is None else max(0, int(skip))
        size = settings.match_page_size if page_size is None else max(0, int(page_size))
        return start, size

    @staticmethod
    def _item_name(item: Any) -> str:
        if isinstance(item, dict):
            return str(item.get("name") or "")
        return str(item or "")
