import pytest

from smartcart.llm.parser import parse_recommended_ids, parse_semantic_evaluation, parse_structured_query


def test_parse_structured_query_valid_json():
    raw = '{"subject":" latte ","modifiers":["parzialmente scremato", ""]}'
    parsed = parse_structured_query(raw)
    assert parsed.subject == "latte"
    assert parsed.modifiers == ["parzialmente scremato"]


def test_parse_structured_query_strips_code_fence():
    raw = '```json\n{"subject":"spaghetti","modifiers":["barilla"]}\n```'
    parsed = parse_structured_query(raw)
    assert parsed.subject == "spaghetti"
    assert parsed.modifiers == ["barilla"]


@pytest.mark.parametrize("raw", ["not-json", "", '{"modifiers":["bio"]}', '{"subject":"  "}', "[1, 2]"])
def test_parse_structured_query_rejects_unusable_output(raw):
    with pytest.raises(ValueError):
        parse_structured_query(raw)


def test_parse_recommended_ids_keeps_model_order_and_drops_duplicates():
    raw = '{"recommended_products": ["p3", "p1", "p3", 42, null, "p9"]}'
    assert parse_recommended_ids(raw, max_results=10) == ["p3", "p1", "42", "p9"]


def test_parse_recommended_ids_truncates_to_max_results():
    raw = '{"recommended_products": ["a", "b", "c", "d"]}'
    assert parse_recommended_ids(raw, max_results=2) == ["a", "b"]


def test_parse_recommended_ids_missing_key_is_empty():
    assert parse_recommended_ids("{}", max_results=5) == []


def test_parse_semantic_evaluation_normalizes_label():
    parsed = parse_semantic_evaluation('{"confidence": 82, "reasoning": "same product", "semanticMatch": "Excellent"}')
    assert parsed.confidence == 82
    assert parsed.semantic_match == "excellent"

    odd = parse_semantic_evaluation('{"confidence": 40, "semanticMatch": "meh"}')
    assert odd.semantic_match == "good"


def test_parse_semantic_evaluation_requires_confidence():
    with pytest.raises(ValueError):
        parse_semantic_evaluation('{"reasoning": "no score"}')
