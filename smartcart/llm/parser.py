import json
import re

from pydantic import ValidationError

from smartcart.schemas import SemanticEvaluation, StructuredQuery

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def load_json_object(raw_text: str) -> dict:
    text = _FENCE.sub("", (raw_text or "").strip()).strip()
    if not text:
        raise ValueError("empty model response")
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def parse_structured_query(raw_text: str) -> StructuredQuery:
    payload = load_json_object(raw_text)
    try:
        return StructuredQuery.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"invalid query analysis: {exc.error_count()} error(s)") from exc


def parse_recommended_ids(raw_text: str, max_results: int) -> list[str]:
    payload = load_json_object(raw_text)
    ids = payload.get("recommended_products") or []
    if not isinstance(ids, list):
        raise ValueError("recommended_products must be a list")

    seen: list[str] = []
    for item in ids:
        if isinstance(item, (int, str)) and not isinstance(item, bool):
            product_id = str(item).strip()
            if product_id and product_id not in seen:
                seen.append(product_id)
    return seen[: max(0, max_results)]


def parse_semantic_evaluation(raw_text: str) -> SemanticEvaluation:
    payload = load_json_object(raw_text)
    try:
        return SemanticEvaluation.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"invalid semantic evaluation: {exc.error_count()} error(s)") from exc
