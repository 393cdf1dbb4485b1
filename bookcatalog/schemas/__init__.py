from bookcatalog.schemas.book import (
    BookCollectionResponse,
    BookDetailResponse,
    BookListResponse,
    BookPagination,
    CatalogBook,
)
from bookcatalog.schemas.catalog import (
    AuthorListResponse,
    AuthorSummary,
    GenreListResponse,
    GenreSummary,
)
from bookcatalog.schemas.review import (
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewListResponse,
    ReviewResponse,
)
from bookcatalog.schemas.search import SearchCounts, SearchResponse, SearchResults

__all__ = [
    "CatalogBook",
    "BookPagination",
    "BookListResponse",
    "BookDetailResponse",
    "BookCollectionResponse",
    "AuthorSummary",
    "AuthorListResponse",
    "GenreSummary",
    "GenreListResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ReviewListResponse",
    "ReviewCreatedResponse",
    "SearchResults",
    "SearchCounts",
    "SearchResponse",
]
