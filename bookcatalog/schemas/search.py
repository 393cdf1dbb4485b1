from pydantic import Field

from bookcatalog.schemas.base import CamelModel
from bookcatalog.schemas.book import CatalogBook
from bookcatalog.schemas.catalog import AuthorSummary, GenreSummary


class SearchResults(CamelModel):
    books: list[CatalogBook] = Field(default_factory=list)
    authors: list[AuthorSummary] = Field(default_factory=list)
    genres: list[GenreSummary] = Field(default_factory=list)


class SearchCounts(CamelModel):
    """Per-branch match counts; None for branches that did not run."""

    books: int | None = None
    authors: int | None = None
    genres: int | None = None


class SearchResponse(CamelModel):
    results: SearchResults
    # Books branch only
    total: int
    total_pages: int
    counts: SearchCounts = Field(default_factory=SearchCounts)
