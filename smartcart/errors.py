class MatchingError(Exception):
    """Base class for failures inside the product-matching pipeline."""


class CatalogUnavailable(MatchingError):
    pass


class AnalysisFailure(MatchingError):
    pass


class RetrievalEmpty(MatchingError):
    pass


class RerankFailure(MatchingError):
    pass


class ScoringFailure(MatchingError):
    pass


class HydrationMiss(MatchingError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"product id '{product_id}' is not in the catalog snapshot")
        self.product_id = product_id


class ProviderNotConfigured(MatchingError):
    pass
