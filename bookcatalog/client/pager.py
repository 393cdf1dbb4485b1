"""
Navigation state for browsing ``/api/books`` by global page number.

The server pages inside 1000-book batches; users see one continuous run of
pages. ``ClientPager`` converts between the two and renders a compact
navigation bar.
"""

import math
from collections.abc import Mapping
from typing import Any

from bookcatalog.services.pagination import (
    BOOKS_PER_BATCH,
    max_pages_in_batch,
    to_batch_coordinates,
    to_global_page,
)

DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"

# Numbered buttons shown around the current page
WINDOW_SIZE = 5


class ClientPager:
    """Tracks batch coordinates, filters, sort and the known result size."""

    def __init__(self, page_size: int = 24):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.batch = 1
        self.page = 1
        self.total_known = 0
        self.search = ""
        self.genre = ""
        self.author = ""
        self.sort_by = DEFAULT_SORT_BY
        self.sort_order = DEFAULT_SORT_ORDER

    @property
    def max_pages_in_batch(self) -> int:
        return max_pages_in_batch(self.page_size)

    @property
    def current_global_page(self) -> int:
        return to_global_page(self.batch, self.page, self.page_size)

    @property
    def total_global_pages(self) -> int:
        """Pages needed for every known record at ``page_size``.

        When ``page_size`` does not divide a batch, each full batch holds
        records that no global page reaches, so the trailing pages of this
        count come back empty.
        """
        return math.ceil(self.total_known / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_global_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_global_page < self.total_global_pages

    def go_to(self, global_page: int) -> int:
        """Move to ``global_page``, clamped to the known pages."""
        last = max(1, self.total_global_pages)
        target = min(max(1, global_page), last)
        self.batch, self.page = to_batch_coordinates(target, self.page_size)
        return target

    def next(self) -> int:
        return self.go_to(self.current_global_page + 1)

    def previous(self) -> int:
        return self.go_to(self.current_global_page - 1)

    def reset(self) -> None:
        """Back to the first page; what was known about the results is dropped."""
        self.batch = 1
        self.page = 1
        self.total_known = 0

    def set_sort(self, sort_by: str, sort_order: str = DEFAULT_SORT_ORDER) -> None:
        if sort_order not in ("asc", "desc"):
            raise ValueError("sort_order must be 'asc' or 'desc'")
        self.sort_by = sort_by
        self.sort_order = sort_order
        self.reset()

    def set_filters(
        self,
        search: str | None = None,
        genre: str | None = None,
        author: str | None = None,
    ) -> None:
        """Replace the filters; ``None`` leaves a filter unchanged."""
        if search is not None:
            self.search = search
        if genre is not None:
            self.genre = genre
        if author is not None:
            self.author = author
        self.reset()

    def update(self, pagination: Mapping[str, Any]) -> None:
        """Absorb the ``pagination`` block of a ``/api/books`` response."""
        batch = int(pagination.get("batch", self.batch))
        batch_total = int(pagination.get("totalBooks", 0))
        if batch_total > 0:
            known = (batch - 1) * BOOKS_PER_BATCH + batch_total
            self.total_known = max(self.total_known, known)

    def query_params(self) -> dict[str, str]:
        params = {
            "page": str(self.page),
            "limit": str(self.page_size),
            "batch": str(self.batch),
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
        }
        for name in ("search", "genre", "author"):
            value = getattr(self, name)
            if value:
                params[name] = value
        return params

    def page_window(self) -> list[int | None]:
        """
        Page numbers to show, ``None`` marking an ellipsis.

        Up to five pages around the current one, plus the first and last
        page when they fall outside that window.
        """
        total = self.total_global_pages
        if total == 0:
            return []

        current = self.current_global_page
        start = max(1, current - WINDOW_SIZE // 2)
        end = min(total, start + WINDOW_SIZE - 1)
        start = max(1, end - WINDOW_SIZE + 1)

        window: list[int | None] = []
        if start > 1:
            window.append(1)
            if start > 2:
                window.append(None)
        window.extend(range(start, end + 1))
        if end < total:
            if end < total - 1:
                window.append(None)
            window.append(total)
        return window

    def render(self) -> str:
        """One-line navigation bar, current page in brackets."""
        parts: list[str] = []
        if self.has_previous:
            parts.append("< Prev")
        for number in self.page_window():
            if number is None:
                parts.append("...")
            elif number == self.current_global_page:
                parts.append(f"[{number}]")
            else:
                parts.append(str(number))
        if self.has_next:
            parts.append("Next >")
        return " ".join(parts)
