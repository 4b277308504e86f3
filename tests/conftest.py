import pytest

from smartcart.config import MatchingConfig
from smartcart.llm.registry import ProviderRegistry
from smartcart.rag.candidates import LexicalCandidateGenerator, load_synonyms
from smartcart.rag.catalog_store import CatalogStore
from smartcart.services.matching_service import ProductMatchingService
from tests.helpers import CATALOG, FakeProvider, write_snapshot


@pytest.fixture
def catalog_store(tmp_path) -> CatalogStore:
    products_path, index_path = write_snapshot(tmp_path / "data", CATALOG)
    store = CatalogStore(products_path, index_path)
    store.load()
    return store


@pytest.fixture
def empty_store(tmp_path) -> CatalogStore:
    store = CatalogStore(tmp_path / "missing" / "products.json", tmp_path / "missing" / "index.json")
    store.load()
    return store


@pytest.fixture
def make_service():
    def _make(store: CatalogStore, provider: FakeProvider, semantic: bool = False) -> ProductMatchingService:
        config = MatchingConfig(semantic_scoring_enabled=semantic, ai_provider="openai")
        registry = ProviderRegistry(config, factories={"openai": lambda usage: provider})
        candidates = LexicalCandidateGenerator(store, synonyms=load_synonyms(), limit=50)
        return ProductMatchingService(
            store=store,
            config=config,
            providers=registry,
            candidates=candidates,
            rerank_buffer=5,
        )

    return _make
