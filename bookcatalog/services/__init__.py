from bookcatalog.services import (
    book_service,
    catalog_service,
    review_service,
    search_service,
)

__all__ = [
    "book_service",
    "catalog_service",
    "review_service",
    "search_service",
]
