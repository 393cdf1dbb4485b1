"""
Canonical book normalization.

Every book leaves the service through ``normalize_book``; nothing else
applies defaults or interprets the stored genre field.
"""

import json
from collections.abc import Mapping
from typing import Any

from bookcatalog.models.book import Book
from bookcatalog.schemas.book import CatalogBook
from bookcatalog.services.record_adapter import adapt_document

DEFAULT_TITLE = "Untitled"
DEFAULT_AUTHOR = "Unknown Author"
DEFAULT_DESCRIPTION = "No description available."
DEFAULT_COVER_IMAGE = "/placeholder.svg"
DEFAULT_PUBLISHED_YEAR = 2000
DEFAULT_GENRE = "General"
DEFAULT_ISBN = "N/A"
DEFAULT_LANGUAGE = "English"

MIN_RATING = 0.0
MAX_RATING = 5.0


def _strings_only(items: list) -> list[str]:
    return [item for item in items if isinstance(item, str)]


def parse_genres(raw: Any) -> list[str]:
    """Resolve a stored genre value into a non-empty list of genre names.

    Accepts lists, JSON-ish strings (``"['Fantasy','War']"``), comma
    separated strings and single names. Never raises.
    """
    genres: list[str] = []

    if isinstance(raw, (list, tuple)):
        genres = _strings_only(list(raw))
    elif isinstance(raw, str) and raw:
        try:
            parsed = json.loads(raw.replace("'", '"'))
        except ValueError:
            if "," in raw:
                genres = [part.strip() for part in raw.split(",") if part.strip()]
            else:
                genres = [raw]
        else:
            if isinstance(parsed, list):
                genres = _strings_only(parsed)
            elif isinstance(parsed, str):
                genres = [parsed]

    if not genres:
        genres = [DEFAULT_GENRE]
    return genres


def clamp_rating(rating: float | None) -> float | None:
    if rating is None:
        return None
    return min(MAX_RATING, max(MIN_RATING, rating))


def _row_values(book: Book) -> dict[str, Any]:
    values = {column.key: getattr(book, column.key) for column in Book.__table__.columns}
    values["id"] = book.id
    return values


def normalize_book(record: Book | Mapping[str, Any]) -> CatalogBook:
    """Produce the canonical book for a stored row or a raw source document."""
    raw = _row_values(record) if isinstance(record, Book) else dict(record)
    values = adapt_document(raw)

    record_id = raw.get("id", raw.get("_id"))

    return CatalogBook(
        id="" if record_id is None else str(record_id),
        title=values["title"] or DEFAULT_TITLE,
        author=values["author"] or DEFAULT_AUTHOR,
        description=values["description"] or DEFAULT_DESCRIPTION,
        cover_image=values["cover_image"] or DEFAULT_COVER_IMAGE,
        rating=clamp_rating(values["rating"]),
        published_year=values["published_year"] or DEFAULT_PUBLISHED_YEAR,
        genre=parse_genres(values["genres"]),
        isbn=values["isbn"] or DEFAULT_ISBN,
        pages=values["pages"] or None,
        language=values["language"] or DEFAULT_LANGUAGE,
    )
