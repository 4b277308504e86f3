from __future__ import annotations

import json
import logging
from pathlib import Path

from smartcart.config import settings
from smartcart.rag.catalog_store import CatalogStore
from smartcart.schemas import MatchCandidate

_LOGGER = logging.getLogger(__name__)

DEFAULT_SYNONYMS_PATH = Path(__file__).resolve().parent / "synonyms.json"

TERM_IN_TEXT = 2.0
TERM_IN_NAME = 1.0
EXPANDED_IN_TEXT = 0.8
EXPANDED_IN_NAME = 0.5
SYNONYM_IN_CATEGORY = 0.3


def load_synonyms(path: Path | str | None = None) -> dict[str, list[str]]:
    source = Path(path or settings.synonyms_file or DEFAULT_SYNONYMS_PATH)
    raw = json.loads(source.read_text(encoding="utf-8"))
    table = {str(term).lower(): [str(s).lower() for s in synonyms] for term, synonyms in raw.items()}
    _LOGGER.debug("synonym table loaded path=%s terms=%d", source, len(table))
    return table


def _tokenize(text: str) -> list[str]:
    return text.lower().split()


class LexicalCandidateGenerator:
    """
    Stand-in for vector retrieval: scores every catalog product on term
    overlap plus a static synonym table. No network, deterministic.
    """

    def __init__(
        self,
        store: CatalogStore,
        synonyms: dict[str, list[str]] | None = None,
        limit: int | None = None,
    ) -> None:
        self.store = store
        self.synonyms = synonyms if synonyms is not None else load_synonyms()
        self.limit = settings.candidate_limit if limit is None else limit

    def expand(self, tokens: list[str]) -> list[str]:
        expanded = dict.fromkeys(tokens)
        for token in tokens:
            for synonym in self.synonyms.get(token, []):
                expanded.setdefault(synonym)
        return list(expanded)

    def generate(self, query: str, limit: int | None = None) -> list[MatchCandidate]:
        if not self.store.is_available():
            _LOGGER.info("lexical search skipped: catalog unavailable")
            return []

        tokens = _tokenize(query or "")
        if not tokens:
            return []
        expanded = self.expand(tokens)
        _LOGGER.debug("expanded terms=%s", ", ".join(expanded))

        scored: list[MatchCandidate] = []
        for product in self.store.products():
            name = (product.name or "").lower()
            brand = (product.brand or "").lower()
            category = (product.category or "").lower()
            text = f"{name} {brand} {category}"

            score = 0.0
            for token in tokens:
                if token in text:
                    score += TERM_IN_TEXT
                if token in name:
                    score += TERM_IN_NAME
            for term in expanded:
                if len(term) > 2 and term in text:
                    score += EXPANDED_IN_TEXT
                if len(term) > 2 and term in name:
                    score += EXPANDED_IN_NAME
            for token in tokens:
                for synonym in self.synonyms.get(token, []):
                    if synonym in category:
                        score += SYNONYM_IN_CATEGORY

            if score > 0:
                scored.append(MatchCandidate(product=product, score=score))

        scored.sort(key=lambda c: c.score, reverse=True)
        cap = self.limit if limit is None else limit
        top = scored[: max(0, cap)]
        _LOGGER.info("lexical candidates query=%r found=%d kept=%d", query, len(scored), len(top))
        if top:
            _LOGGER.debug("top candidates: %s", ", ".join(c.product.name for c in top[:5]))
        return top
