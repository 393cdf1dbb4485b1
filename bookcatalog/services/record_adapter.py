"""
Field mapping between heterogeneous source documents and stored book columns.

Book dumps come from several sources that disagree on field names
(``book_title`` vs ``title``, ``Category`` vs ``genres``, ...). All of that
is resolved here, once, so everything past the storage boundary only sees
canonical column names.
"""

import math
from collections.abc import Mapping
from typing import Any

# Canonical column -> source keys, first non-empty wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("book_title", "title", "Title"),
    "author": ("book_author", "author", "Author"),
    "description": ("Summary", "summary", "description"),
    "cover_image": ("img_l", "cover_image", "coverImage", "image", "img_m", "img_s"),
    "rating": ("rating", "average_rating", "Rating"),
    "published_year": ("year_of_publication", "published_year", "publishedYear", "year"),
    "pages": ("pages", "num_pages", "page_count"),
    "genres": ("Category", "genres", "genre"),
    "isbn": ("isbn", "ISBN", "isbn13"),
    "language": ("Language", "language"),
    "publisher": ("publisher", "Publisher"),
}

TEXT_FIELDS = ("title", "author", "description", "cover_image", "isbn", "language", "publisher")
INTEGER_FIELDS = ("published_year", "pages")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple)) and not value:
        return True
    return False


def pick(document: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the first non-empty value among ``keys``, or None."""
    for key in keys:
        value = document.get(key)
        if not _is_empty(value):
            return value
    return None


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return None


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def adapt_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Map one source document onto stored column values.

    Unparseable numbers become None; genres are kept raw (list or string)
    and resolved by the normalizer when served.
    """
    values: dict[str, Any] = {}
    for column, keys in FIELD_ALIASES.items():
        raw = pick(document, keys)
        if raw is None:
            values[column] = None
        elif column in TEXT_FIELDS:
            values[column] = str(raw).strip()
        elif column in INTEGER_FIELDS:
            values[column] = _to_int(raw)
        elif column == "rating":
            values[column] = _to_float(raw)
        else:
            values[column] = raw
    return values
