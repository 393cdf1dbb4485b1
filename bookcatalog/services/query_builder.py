"""
Translate listing parameters into SQLAlchemy filter and ordering clauses.

Nothing here touches the database; callers apply the clauses to their
own ``select()``.
"""

from dataclasses import dataclass

from sqlalchemy import String, cast, or_
from sqlalchemy.sql.elements import ColumnElement

from bookcatalog.models.book import Book

SORT_COLUMNS = {
    "title": Book.title,
    "author": Book.author,
    "rating": Book.rating,
}
SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_SORT_ORDER = "desc"

LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class BookQueryParams:
    """Filter and sort parameters of a book listing."""

    search: str = ""
    genre: str = ""
    author: str = ""
    sort_by: str = "createdAt"
    sort_order: str = DEFAULT_SORT_ORDER


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere in the value."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def icontains(column, term: str) -> ColumnElement[bool]:
    return column.ilike(contains_pattern(term), escape=LIKE_ESCAPE)


def build_filters(params: BookQueryParams) -> list[ColumnElement[bool]]:
    """Filter clauses, combined with AND. No clauses means match all."""
    filters: list[ColumnElement[bool]] = []

    search = params.search.strip()
    if search:
        filters.append(
            or_(
                icontains(Book.title, search),
                icontains(Book.author, search),
                icontains(Book.description, search),
            )
        )

    genre = params.genre.strip()
    if genre:
        # Genres are stored raw (list or string); match against their text form
        filters.append(icontains(cast(Book.genres, String), genre))

    author = params.author.strip()
    if author:
        filters.append(icontains(Book.author, author))

    return filters


def build_order_by(params: BookQueryParams) -> list:
    """Ordering clauses; id breaks ties so repeated queries page identically."""
    descending = params.sort_order != "asc"
    column = SORT_COLUMNS.get(params.sort_by)

    order_by = []
    if column is not None:
        primary = column.desc() if descending else column.asc()
        order_by.append(primary.nulls_last())
    order_by.append(Book.id.desc() if descending else Book.id.asc())
    return order_by


def build_book_query(params: BookQueryParams) -> tuple[list[ColumnElement[bool]], list]:
    return build_filters(params), build_order_by(params)
