import json
from pathlib import Path

from smartcart.llm.provider import MatchingProvider

CATALOG = [
    {"id": "p1", "nome": "Patatine Classiche", "marca": "San Carlo", "categoria": "Snack salati", "prezzo": 1.99},
    {"id": "p2", "nome": "Latte Intero", "marca": "Granarolo", "categoria": "Latticini", "prezzo": 1.49},
    {"id": "p3", "nome": "Latte Parzialmente Scremato", "marca": "Parmalat", "categoria": "Latticini"},
    {"id": "p4", "nome": "Spaghetti n.5", "marca": "Barilla", "categoria": "Pasta di semola", "prezzo": 0.99},
    {"id": "p5", "nome": "Pasta Fresca Tagliatelle", "marca": "", "disponibile": False},
    {"id": "p6", "nome": "Cioccolato al Latte", "marca": "Milka", "categoria": "Dolci", "prezzo": 2.10},
    {"id": "p7", "nome": "Latte Senza Lattosio", "marca": "Zymil", "categoria": "Latticini", "prezzo": 1.89},
    {"id": "p8", "nome": "Latte di Soia", "marca": "Alpro", "categoria": "Bevande vegetali", "prezzo": 2.29},
    {"id": "p9", "nome": "Latte in Polvere", "marca": "Nestle", "categoria": "Latticini", "prezzo": 6.50},
    {
        "id": "p10",
        "nome": "Latte Fresco Alta Qualita",
        "marca": "Granarolo",
        "categoria": "Latticini",
        "prezzo": 1.79,
        "product_url": "https://example.test/p10",
        "immagine_url": "https://example.test/p10.jpg",
        "denom_vendita": "Latte fresco pastorizzato intero",
    },
    {"id": "p11", "nome": "Latte di Capra", "marca": "Jermi", "categoria": "Latticini", "prezzo": 2.49},
]


def write_snapshot(directory: Path, products: list[dict]) -> tuple[Path, Path]:
    directory.mkdir(parents=True, exist_ok=True)
    products_path = directory / "catalog_products.json"
    index_path = directory / "catalog_index.json"
    products_path.write_text(
        json.dumps({p["id"]: {"product_details": p, "ai_result": {}} for p in products}),
        encoding="utf-8",
    )
    index_path.write_text(json.dumps({p["id"]: i for i, p in enumerate(products)}), encoding="utf-8")
    return products_path, index_path


class FakeProvider(MatchingProvider):
    """Answers each operation from a canned response, an exception or a callable."""

    provider_id = "fake"
    display_name = "Fake"

    def __init__(self, responses: dict | None = None, configured: bool = True) -> None:
        super().__init__()
        self.responses = responses or {}
        self.configured = configured
        self.calls: list[tuple[str, str]] = []

    def is_configured(self) -> bool:
        return self.configured

    def complete_json(self, system_prompt, user_prompt, *, temperature, max_tokens, operation):
        self.calls.append((operation, user_prompt))
        response = self.responses.get(operation)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(user_prompt)
        if response is None:
            raise RuntimeError(f"no canned response for {operation}")
        return response

    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]


