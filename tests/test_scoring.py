import pytest

from smartcart.config import MatchingConfig
from smartcart.llm.registry import ProviderRegistry
from smartcart.matching.scoring import ConfidenceScorer, heuristic_confidence
from smartcart.schemas import CatalogProduct
from tests.helpers import FakeProvider

PRODUCT = CatalogProduct(id="p2", name="Latte Intero", brand="Granarolo", category="Latticini", price=1.49)
BARE = CatalogProduct(id="x", name="Prodotto generico")


def _scorer(provider: FakeProvider, semantic: bool) -> tuple[ConfidenceScorer, MatchingConfig]:
    config = MatchingConfig(semantic_scoring_enabled=semantic)
    registry = ProviderRegistry(config, factories={"openai": lambda usage: provider})
    return ConfidenceScorer(config, registry), config


def test_heuristic_clamps_to_upper_bound():
    # 0.85 + 0.10 + 0.10 + 0.03 + 0.02 = 1.10 before clamping
    assert heuristic_confidence("latte intero", PRODUCT, 0, 3) == pytest.approx(0.95)


def test_heuristic_components_below_clamp():
    # 0.85 + (3-2)/3*0.1 + 0/2*0.1
    assert heuristic_confidence("pane fresco", BARE, 2, 3) == pytest.approx(0.85 + 0.1 / 3)


def test_heuristic_ignores_short_words():
    product = CatalogProduct(id="y", name="te verde")
    # "te" is too short to count as a matching word
    assert heuristic_confidence("te", product, 0, 1) == pytest.approx(0.95)
    assert heuristic_confidence("te", product, 4, 5) == pytest.approx(0.85 + 0.1 / 5)


@pytest.mark.parametrize("position,total", [(0, 1), (2, 3), (0, 0), (7, 3)])
@pytest.mark.parametrize("product", [PRODUCT, BARE])
def test_heuristic_range(product, position, total):
    value = heuristic_confidence("latte di capra fresco", product, position, total)
    assert 0.70 <= value <= 0.95


def test_semantic_rescales_model_confidence():
    provider = FakeProvider({"semantic evaluation": '{"confidence": 88, "reasoning": "ok", "semanticMatch": "good"}'})
    scorer, _ = _scorer(provider, semantic=True)
    assert scorer.score("latte", PRODUCT, 0, 3) == pytest.approx(0.88)


@pytest.mark.parametrize("raw,expected", [('{"confidence": 5}', 0.30), ('{"confidence": 140}', 0.95)])
def test_semantic_clamps(raw, expected):
    scorer, _ = _scorer(FakeProvider({"semantic evaluation": raw}), semantic=True)
    assert scorer.score("latte", PRODUCT, 0, 3) == pytest.approx(expected)


@pytest.mark.parametrize("response", [RuntimeError("timeout"), "not json", '{"reasoning": "x"}'])
def test_semantic_failure_falls_back_to_heuristic(response):
    scorer, _ = _scorer(FakeProvider({"semantic evaluation": response}), semantic=True)
    assert scorer.score("pane fresco", BARE, 2, 3) == pytest.approx(heuristic_confidence("pane fresco", BARE, 2, 3))


def test_strategy_flag_read_on_every_call():
    provider = FakeProvider({"semantic evaluation": '{"confidence": 50}'})
    scorer, config = _scorer(provider, semantic=False)

    assert scorer.score("latte", PRODUCT, 0, 3) == pytest.approx(0.95)
    assert provider.calls == []

    config.semantic_scoring_enabled = True
    assert scorer.score("latte", PRODUCT, 0, 3) == pytest.approx(0.50)
    assert provider.operations() == ["semantic evaluation"]
