import json

from smartcart.rag.catalog_store import CatalogStore
from tests.helpers import CATALOG, write_snapshot


def test_load_populates_store(catalog_store):
    assert catalog_store.is_available()
    stats = catalog_store.stats()
    assert stats.product_count == len(CATALOG)
    assert stats.index_count == len(CATALOG)
    assert stats.is_available is True
    assert stats.model_dump(by_alias=True) == {
        "productCount": len(CATALOG),
        "indexCount": len(CATALOG),
        "isAvailable": True,
    }


def test_find_by_id_returns_stored_fields(catalog_store):
    product = catalog_store.find_by_id("p10")
    assert product is not None
    assert product.name == "Latte Fresco Alta Qualita"
    assert product.brand == "Granarolo"
    assert product.category == "Latticini"
    assert product.price == 1.79
    assert product.available is True
    assert product.product_url == "https://example.test/p10"
    assert product.image_url == "https://example.test/p10.jpg"
    assert product.sales_description == "Latte fresco pastorizzato intero"

    unavailable = catalog_store.find_by_id("p5")
    assert unavailable.available is False
    assert unavailable.price is None

    assert catalog_store.find_by_id("does-not-exist") is None


def test_missing_files_leave_store_unavailable(empty_store):
    assert not empty_store.is_available()
    assert empty_store.stats().product_count == 0
    assert empty_store.find_by_id("p1") is None


def test_entries_without_details_are_skipped(tmp_path):
    products_path = tmp_path / "products.json"
    products_path.write_text(
        json.dumps(
            {
                "8001234567890": {"product_details": {"nome": "Passata di pomodoro", "prezzo": "1.10"}},
                "broken": {"ai_result": {}},
                "no-name": {"product_details": {"marca": "X"}},
            }
        ),
        encoding="utf-8",
    )
    store = CatalogStore(products_path, tmp_path / "index.json")
    store.load()

    assert store.stats().product_count == 1
    product = store.find_by_id("8001234567890")
    assert product.id == "8001234567890"
    assert product.price == 1.10


def test_malformed_file_keeps_previous_snapshot(tmp_path):
    products_path, index_path = write_snapshot(tmp_path, CATALOG[:2])
    store = CatalogStore(products_path, index_path)
    store.load()
    assert store.stats().product_count == 2

    products_path.write_text("{not json", encoding="utf-8")
    store.load()

    assert store.is_available()
    assert store.stats().product_count == 2


def test_reload_is_noop_once_populated(tmp_path):
    products_path, index_path = write_snapshot(tmp_path, CATALOG[:2])
    store = CatalogStore(products_path, index_path)
    store.load()

    write_snapshot(tmp_path, CATALOG)
    store.reload()
    assert store.stats().product_count == 2

    store.load()
    assert store.stats().product_count == len(CATALOG)


def test_reload_loads_when_empty(tmp_path):
    store = CatalogStore(tmp_path / "catalog_products.json", tmp_path / "catalog_index.json")
    store.load()
    assert not store.is_available()

    write_snapshot(tmp_path, CATALOG)
    store.reload()
    assert store.is_available()


def test_index_with_unrepresentable_number_does_not_raise(tmp_path):
    products_path, index_path = write_snapshot(tmp_path, CATALOG[:2])
    index_path.write_text('{"p1": 1e400}', encoding="utf-8")
    store = CatalogStore(products_path, index_path)

    store.load()

    assert not store.is_available()
    assert store.find_by_id("p1") is None


def test_deeply_nested_file_keeps_previous_snapshot(tmp_path):
    products_path, index_path = write_snapshot(tmp_path, CATALOG[:3])
    store = CatalogStore(products_path, index_path)
    store.load()

    products_path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    store.load()

    assert store.stats().product_count == 3
    assert store.find_by_id("p2").name == "Latte Intero"
