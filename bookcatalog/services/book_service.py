import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from bookcatalog.core.database import MAX_BIGINT
from bookcatalog.core.logging import get_logger
from bookcatalog.models.book import Book
from bookcatalog.schemas.book import BookListResponse, BookPagination, CatalogBook
from bookcatalog.services.normalizer import normalize_book
from bookcatalog.services.pagination import page_skip, paginate
from bookcatalog.services.query_builder import BookQueryParams, build_book_query
from bookcatalog.services.record_adapter import adapt_document

logger = get_logger(__name__)


def count_books(session_factory: sessionmaker, filters: list) -> int:
    with session_factory() as db:
        return db.scalar(select(func.count()).select_from(Book).where(*filters)) or 0


def fetch_books(
    session_factory: sessionmaker,
    filters: list,
    order_by: list,
    skip: int,
    limit: int,
) -> list[CatalogBook]:
    with session_factory() as db:
        rows = db.scalars(
            select(Book).where(*filters).order_by(*order_by).offset(skip).limit(limit)
        ).all()
        return [normalize_book(row) for row in rows]


async def list_books(
    session_factory: sessionmaker,
    params: BookQueryParams,
    page: int = 1,
    limit: int = 24,
    batch: int = 1,
) -> BookListResponse:
    """List one page of one batch of matching books.

    The count and the page fetch run concurrently; the fetched rows are then
    trimmed to the part of the page that lies inside the batch.
    """
    filters, order_by = build_book_query(params)
    skip = page_skip(batch, page, limit)

    if skip + limit <= MAX_BIGINT:
        total_matching, books = await asyncio.gather(
            run_in_threadpool(count_books, session_factory, filters),
            run_in_threadpool(fetch_books, session_factory, filters, order_by, skip, limit),
        )
    else:
        # No table holds that many rows
        total_matching = await run_in_threadpool(count_books, session_factory, filters)
        books = []

    window = paginate(batch, page, limit, total_matching)
    books = books[: window.slice_length]

    logger.debug(
        "Listed books",
        extra={
            "extra_fields": {
                "batch": batch,
                "page": page,
                "limit": limit,
                "total_matching": total_matching,
                "returned": len(books),
            }
        },
    )

    return BookListResponse(
        books=books,
        pagination=BookPagination(
            current_page=window.page,
            total_pages=window.total_pages_in_batch,
            total_books=window.batch_total,
            has_next_page=window.has_next_page,
            has_prev_page=window.has_prev_page,
            limit=limit,
            batch=window.batch,
            should_load_next_batch=window.should_load_next_batch,
            max_pages_in_batch=window.max_pages_in_batch,
            total_matching=total_matching,
        ),
    )


def parse_book_id(book_id: str) -> int | None:
    """Stored ids are integers; anything else cannot name a book."""
    book_id = book_id.strip()
    if not (book_id.isascii() and book_id.isdecimal()):
        return None
    numeric_id = int(book_id)
    if numeric_id > MAX_BIGINT:
        return None
    return numeric_id


def get_book(db: Session, book_id: str) -> CatalogBook | None:
    """Get one canonical book by id."""
    numeric_id = parse_book_id(book_id)
    if numeric_id is None:
        return None

    book = db.get(Book, numeric_id)
    if not book:
        return None
    return normalize_book(book)


def top_rated_books(db: Session, min_rating: float = 4.0, limit: int = 10) -> list[CatalogBook]:
    """Highest rated books at or above ``min_rating``."""
    rows = db.scalars(
        select(Book)
        .where(Book.rating >= min_rating)
        .order_by(Book.rating.desc(), Book.id.asc())
        .limit(limit)
    ).all()
    return [normalize_book(row) for row in rows]


def insert_documents(db: Session, documents: Iterable[Mapping[str, Any]]) -> int:
    """Store source documents through the field adapter. Returns rows added."""
    added = 0
    for document in documents:
        db.add(Book(**adapt_document(document)))
        added += 1
    db.commit()
    logger.info(f"Stored {added} book documents")
    return added
