from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from smartcart.config import settings
from smartcart.schemas import CatalogProduct

_LOGGER = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Alimentari"
DEFAULT_PRICE = 3.50


class SnapshotBuildResult(BaseModel):
    success: bool
    message: str
    products_written: int = 0
    source_files: int = 0
    skipped_records: int = 0


class SnapshotFolderStatus(BaseModel):
    folder_exists: bool
    json_files: int
    snapshot_exists: bool
    example_files: list[str] = Field(default_factory=list)


class SnapshotBuilder:
    """
    Turns raw retailer product dumps (one JSON array or object per file) into
    the two snapshot files the catalog store reads.
    """

    def __init__(
        self,
        source_dir: Path | str | None = None,
        products_path: Path | str | None = None,
        index_path: Path | str | None = None,
    ) -> None:
        self.source_dir = Path(source_dir or settings.catalog_raw_products_dir)
        self.products_path = Path(products_path) if products_path else settings.catalog_products_path
        self.index_path = Path(index_path) if index_path else settings.catalog_index_path

    def build(self) -> SnapshotBuildResult:
        records, source_files = self._read_records()
        if not records:
            return SnapshotBuildResult(
                success=False,
                message=f"No products found in {self.source_dir}. Add the raw JSON files first.",
                source_files=source_files,
            )

        index: dict[str, int] = {}
        products: dict[str, dict[str, Any]] = {}
        skipped = 0
        for position, record in enumerate(records):
            product_id = record.get("id")
            if not product_id:
                skipped += 1
                _LOGGER.debug("skipping record without id position=%d", position)
                continue
            product = to_catalog_product(record)
            index[product.id] = position
            products[product.id] = {"product_details": product.model_dump(by_alias=True)}

        try:
            self._write_pair(index, products)
        except OSError as exc:
            _LOGGER.error("snapshot write failed error=%s: %s", exc.__class__.__name__, exc)
            return SnapshotBuildResult(success=False, message=f"Error: {exc}", source_files=source_files)

        _LOGGER.info(
            "snapshot built products=%d files=%d skipped=%d", len(products), source_files, skipped
        )
        return SnapshotBuildResult(
            success=True,
            message="Catalog snapshot built",
            products_written=len(products),
            source_files=source_files,
            skipped_records=skipped,
        )

    def _write_pair(self, index: dict[str, int], products: dict[str, dict[str, Any]]) -> None:
        # Both files are staged before either target is touched.
        staged: list[tuple[Path, Path]] = []
        try:
            for target, payload in ((self.products_path, products), (self.index_path, index)):
                target.parent.mkdir(parents=True, exist_ok=True)
                temp = target.with_name(f"{target.name}.tmp")
                staged.append((temp, target))
                temp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError:
            for temp, _ in staged:
                temp.unlink(missing_ok=True)
            raise
        for temp, target in staged:
            os.replace(temp, target)

    def status(self) -> SnapshotFolderStatus:
        exists = self.source_dir.is_dir()
        files = sorted(self.source_dir.glob("*.json")) if exists else []
        return SnapshotFolderStatus(
            folder_exists=exists,
            json_files=len(files),
            snapshot_exists=self.products_path.exists() and self.index_path.exists(),
            example_files=[f.name for f in files[:3]],
        )

    def _read_records(self) -> tuple[list[dict[str, Any]], int]:
        if not self.source_dir.is_dir():
            _LOGGER.warning("raw products folder not found path=%s", self.source_dir)
            return [], 0
        files = sorted(self.source_dir.glob("*.json"))
        records: list[dict[str, Any]] = []
        for path in files:
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                _LOGGER.error("cannot read %s error=%s", path.name, exc.__class__.__name__)
                continue
            if isinstance(data, list):
                records.extend(item for item in data if isinstance(item, dict))
            elif isinstance(data, dict):
                records.append(data)
            else:
                _LOGGER.warning("file %s holds neither an array nor an object", path.name)
        return records, len(files)


def to_catalog_product(record: dict[str, Any]) -> CatalogProduct:
    return CatalogProduct(
        id=str(record["id"]),
        name=str(record.get("nome") or ""),
        brand=str(record.get("brand") or ""),
        category=extract_category(record),
        price=extract_price(record),
        available=record.get("disponibile") is not False,
        product_url=str(record.get("product_url") or ""),
        image_url=str(record.get("immagine_url") or ""),
        sales_description=str(record.get("C4_SalesDenomination") or ""),
    )


def extract_category(record: dict[str, Any]) -> str:
    breadcrumbs = [
        value
        for key, value in record.items()
        if key.startswith("breadcrumbs_")
        and key.endswith("_htmlValue")
        and isinstance(value, str)
        and value.strip()
    ]
    return breadcrumbs[-1] if breadcrumbs else DEFAULT_CATEGORY


def extract_price(record: dict[str, Any]) -> float:
    price: float | None = None
    if _is_number(record.get("price_sales_value")) and record["price_sales_value"]:
        price = float(record["price_sales_value"])
    elif record.get("price_sales_decimalPrice"):
        price = _parse_float(record["price_sales_decimalPrice"])
    elif record.get("impression_price"):
        price = _parse_float(record["impression_price"])
    elif _is_number(record.get("prezzo")):
        price = float(record["prezzo"])
    elif _is_number(record.get("price")):
        price = float(record["price"])

    if price is None or price != price or price <= 0:
        return DEFAULT_PRICE
    return price


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_float(value: Any) -> float | None:
    try:
        return float(str(value).replace(",", "."))
    except ValueError:
        return None
