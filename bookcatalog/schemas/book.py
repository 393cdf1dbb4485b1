from bookcatalog.schemas.base import CamelModel


class CatalogBook(CamelModel):
    """Canonical book, the only shape books are served in."""

    id: str
    title: str
    author: str
    description: str
    cover_image: str
    rating: float | None  # None means unrated
    published_year: int
    genre: list[str]
    isbn: str
    pages: int | None  # None means unknown
    language: str


class BookPagination(CamelModel):
    current_page: int
    total_pages: int
    total_books: int
    has_next_page: bool
    has_prev_page: bool
    limit: int
    batch: int
    should_load_next_batch: bool
    max_pages_in_batch: int
    total_matching: int


class BookListResponse(CamelModel):
    books: list[CatalogBook]
    pagination: BookPagination


class BookDetailResponse(CamelModel):
    book: CatalogBook


class BookCollectionResponse(CamelModel):
    books: list[CatalogBook]
