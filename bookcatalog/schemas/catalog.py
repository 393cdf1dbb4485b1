from pydantic import field_validator

from bookcatalog.schemas.base import CamelModel


class AuthorSummary(CamelModel):
    id: str
    name: str
    bio: str | None = None
    nationality: str | None = None
    image: str | None = None
    total_books: int = 0
    average_rating: float = 0.0

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v) -> str:
        return str(v)


class GenreSummary(CamelModel):
    id: str
    name: str
    description: str | None = None
    image: str | None = None
    total_books: int = 0
    average_rating: float = 0.0
    popularity: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v) -> str:
        return str(v)


class AuthorPagination(CamelModel):
    current_page: int
    total_pages: int
    total_authors: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class GenrePagination(CamelModel):
    current_page: int
    total_pages: int
    total_genres: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class AuthorListResponse(CamelModel):
    authors: list[AuthorSummary]
    pagination: AuthorPagination


class GenreListResponse(CamelModel):
    genres: list[GenreSummary]
    pagination: GenrePagination
