import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from smartcart.config import configure_logging
from smartcart.services.matching_service import ProductMatchingService


def main() -> None:
    configure_logging()
    service = ProductMatchingService()
    print(f"stats={service.get_catalog_stats().model_dump(by_alias=True)}")
    for term in sys.argv[1:] or ["latte", "pasta barilla", "cipster"]:
        first_page = service.match_item(term, "carrefour", skip=0)
        second_page = service.match_item(term, "carrefour", skip=len(first_page))
        print(f"query={term} page1={len(first_page)} page2={len(second_page)}")
        for match in first_page + second_page:
            print(
                f"- {match.matched_product} | brand={match.brand or 'n/a'} "
                f"| price={match.price} | confidence={match.confidence:.2f} | id={match.product_id}"
            )
        print("---")
    print(f"tokens={service.token_usage()}")


if __name__ == "__main__":
    main()
