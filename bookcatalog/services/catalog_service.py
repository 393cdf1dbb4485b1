import math
from collections import defaultdict

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from bookcatalog.core.logging import get_logger
from bookcatalog.models.book import Book
from bookcatalog.models.directory import Author, Genre
from bookcatalog.schemas.catalog import (
    AuthorListResponse,
    AuthorPagination,
    AuthorSummary,
    GenreListResponse,
    GenrePagination,
    GenreSummary,
)
from bookcatalog.services.normalizer import DEFAULT_AUTHOR, DEFAULT_GENRE, normalize_book
from bookcatalog.services.query_builder import icontains

logger = get_logger(__name__)


def _page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def _page_rows(db: Session, query, page: int, limit: int, total: int) -> list:
    skip = (page - 1) * limit
    if skip >= total:
        return []
    return list(db.scalars(query.offset(skip).limit(limit)).all())


def list_authors(db: Session, page: int = 1, limit: int = 24, search: str = "") -> AuthorListResponse:
    """List authors, best rated and most prolific first."""
    filters = [icontains(Author.name, search.strip())] if search.strip() else []

    total = db.scalar(select(func.count()).select_from(Author).where(*filters)) or 0
    query = (
        select(Author)
        .where(*filters)
        .order_by(Author.average_rating.desc(), Author.total_books.desc(), Author.id.asc())
    )
    rows = _page_rows(db, query, page, limit, total)

    total_pages = _page_count(total, limit)
    return AuthorListResponse(
        authors=[AuthorSummary.model_validate(row) for row in rows],
        pagination=AuthorPagination(
            current_page=page,
            total_pages=total_pages,
            total_authors=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            limit=limit,
        ),
    )


def list_genres(db: Session, page: int = 1, limit: int = 24, search: str = "") -> GenreListResponse:
    """List genres, most popular first."""
    filters = [icontains(Genre.name, search.strip())] if search.strip() else []

    total = db.scalar(select(func.count()).select_from(Genre).where(*filters)) or 0
    query = (
        select(Genre)
        .where(*filters)
        .order_by(Genre.popularity.desc(), Genre.total_books.desc(), Genre.id.asc())
    )
    rows = _page_rows(db, query, page, limit, total)

    total_pages = _page_count(total, limit)
    return GenreListResponse(
        genres=[GenreSummary.model_validate(row) for row in rows],
        pagination=GenrePagination(
            current_page=page,
            total_pages=total_pages,
            total_genres=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            limit=limit,
        ),
    )


def _average(ratings: list[float]) -> float:
    if not ratings:
        return 0.0
    return round(sum(ratings) / len(ratings), 2)


def rebuild_directory(db: Session) -> tuple[int, int]:
    """
    Recompute the author and genre directories from the books table.

    Existing bios, descriptions and images are kept; counts, average
    ratings and genre popularity are derived from the canonical books.
    Unrated books count towards totals but not towards averages.

    Returns:
        (authors, genres) entry counts after the rebuild
    """
    author_books: dict[str, list[float | None]] = defaultdict(list)
    genre_books: dict[str, list[float | None]] = defaultdict(list)

    for row in db.scalars(select(Book)).yield_per(500):
        book = normalize_book(row)
        if book.author != DEFAULT_AUTHOR:
            author_books[book.author].append(book.rating)
        for genre in dict.fromkeys(book.genre):
            if genre != DEFAULT_GENRE:
                genre_books[genre].append(book.rating)

    existing_authors = {a.name: a for a in db.scalars(select(Author))}
    existing_genres = {g.name: g for g in db.scalars(select(Genre))}

    for name, ratings in author_books.items():
        author = existing_authors.pop(name, None) or Author(name=name)
        author.total_books = len(ratings)
        author.average_rating = _average([r for r in ratings if r is not None])
        db.add(author)

    for name, ratings in genre_books.items():
        genre = existing_genres.pop(name, None) or Genre(name=name)
        genre.total_books = len(ratings)
        genre.average_rating = _average([r for r in ratings if r is not None])
        genre.popularity = len(ratings)
        db.add(genre)

    # Entries no longer backed by any book
    if existing_authors:
        db.execute(delete(Author).where(Author.id.in_([a.id for a in existing_authors.values()])))
    if existing_genres:
        db.execute(delete(Genre).where(Genre.id.in_([g.id for g in existing_genres.values()])))

    db.commit()
    logger.info(f"Directory rebuilt: {len(author_books)} authors, {len(genre_books)} genres")
    return len(author_books), len(genre_books)
