"""
Federated search over books, authors and genres.
"""

import asyncio
import math

from sqlalchemy import func, or_, select
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from bookcatalog.core.database import MAX_BIGINT
from bookcatalog.core.logging import get_logger
from bookcatalog.models.book import Book
from bookcatalog.models.directory import Author, Genre
from bookcatalog.schemas.catalog import AuthorSummary, GenreSummary
from bookcatalog.schemas.search import SearchCounts, SearchResponse, SearchResults
from bookcatalog.services.book_service import count_books, fetch_books
from bookcatalog.services.query_builder import icontains

logger = get_logger(__name__)

SEARCH_TYPES = ("all", "books", "authors", "genres")


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def empty_search_response() -> SearchResponse:
    return SearchResponse(results=SearchResults(), total=0, total_pages=1, counts=SearchCounts())


def _book_filters(term: str) -> list:
    return [
        or_(
            icontains(Book.title, term),
            icontains(Book.author, term),
            icontains(Book.description, term),
        )
    ]


def _search_directory(session_factory: sessionmaker, model, term: str, limit: int) -> tuple[list, int]:
    name_filter = icontains(model.name, term)
    with session_factory() as db:
        count = db.scalar(select(func.count()).select_from(model).where(name_filter)) or 0
        rows = db.scalars(
            select(model).where(name_filter).order_by(model.name.asc(), model.id.asc()).limit(limit)
        ).all()
        return rows, count


def search_authors(session_factory: sessionmaker, term: str, limit: int) -> tuple[list[AuthorSummary], int]:
    rows, count = _search_directory(session_factory, Author, term, limit)
    return [AuthorSummary.model_validate(row) for row in rows], count


def search_genres(session_factory: sessionmaker, term: str, limit: int) -> tuple[list[GenreSummary], int]:
    rows, count = _search_directory(session_factory, Genre, term, limit)
    return [GenreSummary.model_validate(row) for row in rows], count


async def search(
    session_factory: sessionmaker,
    query: str | None,
    search_type: str = "all",
    page: int = 1,
    limit: int = 10,
) -> SearchResponse:
    """Search the requested entity types concurrently.

    ``total``/``totalPages`` always describe the books branch, whichever
    types were requested; ``counts`` reports each branch that ran.
    """
    term = normalize_query(query)
    if not term:
        return empty_search_response()

    run_books = search_type in ("all", "books")
    run_authors = search_type in ("all", "authors")
    run_genres = search_type in ("all", "genres")

    book_filters = _book_filters(term)
    order_by = [Book.title.asc(), Book.id.asc()]
    skip = (page - 1) * limit

    async def no_results() -> tuple[list, None]:
        return [], None

    async def fetch_page() -> list:
        if not run_books or skip + limit > MAX_BIGINT:
            return []
        return await run_in_threadpool(fetch_books, session_factory, book_filters, order_by, skip, limit)

    total, books, (authors, author_count), (genres, genre_count) = await asyncio.gather(
        run_in_threadpool(count_books, session_factory, book_filters),
        fetch_page(),
        run_in_threadpool(search_authors, session_factory, term, limit) if run_authors else no_results(),
        run_in_threadpool(search_genres, session_factory, term, limit) if run_genres else no_results(),
    )

    if search_type not in SEARCH_TYPES:
        logger.info(f"Unrecognized search type {search_type!r}, no branch searched")

    return SearchResponse(
        results=SearchResults(books=books, authors=authors, genres=genres),
        total=total,
        total_pages=max(1, math.ceil(total / limit)),
        counts=SearchCounts(
            books=total if run_books else None,
            authors=author_count,
            genres=genre_count,
        ),
    )
