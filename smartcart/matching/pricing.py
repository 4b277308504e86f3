DEFAULT_PRICE = 3.50

# First keyword hit wins, so order matters.
PRICE_TABLE: list[tuple[tuple[str, ...], float]] = [
    (("carne", "manzo"), 8.50),
    (("formaggio", "parmigiano"), 12.00),
    (("pasta", "spaghetti"), 1.20),
    (("latte",), 1.30),
    (("pane", "panino"), 2.50),
]

PRODUCT_URL_TEMPLATES = {
    "carrefour": "https://www.carrefour.it/prodotti/{product_id}",
    "esselunga": "https://www.esselunga.it/prodotti/{product_id}",
    "coop": "https://www.coopshop.it/product/{product_id}",
}

IMAGE_URL_TEMPLATES = {
    "carrefour": "https://static.carrefour.it/images/products/{product_id}.jpg",
    "esselunga": "https://www.esselunga.it/images/products/{product_id}.jpg",
    "coop": "https://www.coopshop.it/images/{product_id}.jpg",
}


def _keyword_price(text: str) -> float | None:
    lowered = (text or "").lower()
    for keywords, price in PRICE_TABLE:
        if any(k in lowered for k in keywords):
            return price
    return None


def estimate_price(item: str, product_name: str = "") -> float:
    """Flat category price for catalog entries without one.

    The shopping-list text decides first; the product name is only consulted
    when the list text has no known keyword.
    """
    for text in (item, product_name):
        price = _keyword_price(text)
        if price is not None:
            return price
    return DEFAULT_PRICE


def product_url(product_id: str, platform: str) -> str:
    key = (platform or "").lower()
    template = PRODUCT_URL_TEMPLATES.get(key, "https://www.{platform}.it/prodotti/{product_id}")
    return template.format(product_id=product_id, platform=key)


def image_url(product_id: str, platform: str) -> str:
    key = (platform or "").lower()
    template = IMAGE_URL_TEMPLATES.get(key, "https://www.{platform}.it/images/{product_id}.jpg")
    return template.format(product_id=product_id, platform=key)
