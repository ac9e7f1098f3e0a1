from .card_catalogue import CardCatalogue, CardCatalogueResponse

__all__ = [
    "CardCatalogue",
    "CardCatalogueResponse",
]
