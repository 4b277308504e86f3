from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from smartcart.config import settings
from smartcart.schemas import CatalogProduct, CatalogStats

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    products: dict[str, CatalogProduct] = field(default_factory=dict)
    index: dict[str, int] = field(default_factory=dict)

    @property
    def is_available(self) -> bool:
        return len(self.products) > 0


class CatalogStore:
    """
    In-memory product catalog loaded from the precomputed snapshot files.
    A load builds a complete snapshot first and then publishes it with one
    assignment, so readers see either the old catalog or the new one.
    """

    def __init__(self, products_path: Path | str | None = None, index_path: Path | str | None = None) -> None:
        self.products_path = Path(products_path) if products_path else settings.catalog_products_path
        self.index_path = Path(index_path) if index_path else settings.catalog_index_path
        self._snapshot = CatalogSnapshot()

    def load(self) -> None:
        try:
            products = self._read_products(self.products_path)
            index = self._read_index(self.index_path)
        except Exception as exc:
            # Unreadable snapshot: keep serving whatever was loaded before.
            _LOGGER.error(
                "catalog load failed path=%s error=%s",
                self.products_path,
                exc.__class__.__name__,
                exc_info=True,
            )
            return

        self._snapshot = CatalogSnapshot(products=products, index=index)
        _LOGGER.info("catalog loaded products=%d index_entries=%d", len(products), len(index))
        if not self._snapshot.is_available:
            _LOGGER.warning("catalog snapshot is empty; product matching is disabled")

    def reload(self) -> None:
        if self._snapshot.is_available:
            _LOGGER.debug("catalog already loaded products=%d", len(self._snapshot.products))
            return
        self.load()

    def is_available(self) -> bool:
        return self._snapshot.is_available

    def find_by_id(self, product_id: str) -> CatalogProduct | None:
        product = self._snapshot.products.get(str(product_id))
        if product is None:
            _LOGGER.debug("catalog miss id=%s", product_id)
        return product

    def products(self) -> list[CatalogProduct]:
        return list(self._snapshot.products.values())

    def stats(self) -> CatalogStats:
        snapshot = self._snapshot
        return CatalogStats(
            product_count=len(snapshot.products),
            index_count=len(snapshot.index),
            is_available=snapshot.is_available,
        )

    @staticmethod
    def _read_products(path: Path) -> dict[str, CatalogProduct]:
        if not path.exists():
            _LOGGER.warning("catalog products file not found path=%s", path)
            return {}
        raw: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"expected a JSON object in {path.name}")

        products: dict[str, CatalogProduct] = {}
        skipped = 0
        for key, entry in raw.items():
            details = entry.get("product_details") if isinstance(entry, dict) else None
            if not isinstance(details, dict):
                skipped += 1
                continue
            try:
                products[str(key)] = CatalogProduct.model_validate({**details, "id": key})
            except ValidationError as exc:
                skipped += 1
                _LOGGER.warning("skipping catalog entry id=%s errors=%d", key, exc.error_count())
        if skipped:
            _LOGGER.warning("catalog entries skipped=%d", skipped)
        return products

    @staticmethod
    def _read_index(path: Path) -> dict[str, int]:
        if not path.exists():
            _LOGGER.warning("catalog index file not found path=%s", path)
            return {}
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"expected a JSON object in {path.name}")
        return {str(key): int(value) for key, value in raw.items()}
