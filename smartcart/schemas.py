from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


SemanticMatch = Literal["excellent", "good", "fair", "poor"]


def _to_float(value: Any) -> float | None:
    try:
        if value is None or value == "":
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


class CatalogProduct(BaseModel):
    """One entry of the catalog snapshot (the ``product_details`` block)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str = Field(alias="nome")
    brand: Optional[str] = Field(default=None, alias="marca")
    category: Optional[str] = Field(default=None, alias="categoria")
    price: Optional[float] = Field(default=None, alias="prezzo")
    available: bool = Field(default=True, alias="disponibile")
    product_url: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="immagine_url")
    sales_description: Optional[str] = Field(default=None, alias="denom_vendita")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # EAN codes sometimes arrive as JSON numbers.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> float | None:
        return _to_float(value)

    @field_validator("available", mode="before")
    @classmethod
    def _coerce_available(cls, value: Any) -> Any:
        return True if value is None else value


class StructuredQuery(BaseModel):
    subject: str = Field(min_length=1)
    modifiers: list[str] = Field(default_factory=list)

    @field_validator("subject", mode="before")
    @classmethod
    def _strip_subject(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("modifiers", mode="before")
    @classmethod
    def _clean_modifiers(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        cleaned: list[str] = []
        for item in value:
            text = str(item).strip()
            if text:
                cleaned.append(text)
        return cleaned


class MatchCandidate(BaseModel):
    product: CatalogProduct
    score: float


class SemanticEvaluation(BaseModel):
    confidence: float
    reasoning: str = ""
    semantic_match: SemanticMatch = Field(default="good", alias="semanticMatch")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("semantic_match", mode="before")
    @classmethod
    def _normalize_label(cls, value: Any) -> str:
        label = str(value or "").strip().lower()
        return label if label in {"excellent", "good", "fair", "poor"} else "good"


class EcommerceMatch(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_item: str
    matched_product: str
    brand: str = ""
    category: str = ""
    price: Optional[float] = None
    description: str = ""
    image_url: str = ""
    product_url: str = ""
    confidence: float = Field(ge=0.30, le=0.95)
    product_id: Optional[str] = None
    platform: str


class CatalogStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_count: int = 0
    index_count: int = 0
    is_available: bool = False


class ProviderInfo(BaseModel):
    provider: str
    name: str
    available: bool
