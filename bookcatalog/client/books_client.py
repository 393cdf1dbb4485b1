"""
HTTP client for browsing the catalog page by page.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx

from bookcatalog.client.pager import ClientPager
from bookcatalog.core.logging import get_logger

logger = get_logger(__name__)


class BooksClientError(Exception):
    """The catalog API answered with an error status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class BooksPage:
    books: list[dict[str, Any]]
    pagination: dict[str, Any]
    global_page: int
    total_global_pages: int
    navigation: str = ""
    prefetched_batches: list[int] = field(default_factory=list)


class BooksClient:
    """Drives ``/api/books`` with a ``ClientPager``.

    Works with any ``httpx.Client``, including FastAPI's ``TestClient``.
    """

    def __init__(self, http: httpx.Client, page_size: int = 24, path: str = "/api/books"):
        self.http = http
        self.path = path
        self.pager = ClientPager(page_size)
        self._prefetched: set[int] = set()

    def _get(self, params: dict[str, str]) -> dict[str, Any]:
        response = self.http.get(self.path, params=params)
        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise BooksClientError(message, response.status_code)
        return response.json()

    def _prefetch_next_batch(self) -> int | None:
        """Fetch the first page of the next batch to learn how far it reaches."""
        next_batch = self.pager.batch + 1
        if next_batch in self._prefetched:
            return None

        params = self.pager.query_params()
        params.update(batch=str(next_batch), page="1")
        data = self._get(params)
        self._prefetched.add(next_batch)
        self.pager.update(data["pagination"])
        logger.debug(f"Prefetched batch {next_batch}, {self.pager.total_known} books known")
        return next_batch

    def fetch(self) -> BooksPage:
        """Load the pager's current page."""
        data = self._get(self.pager.query_params())
        pagination = data["pagination"]
        self.pager.update(pagination)

        prefetched = []
        if pagination.get("shouldLoadNextBatch"):
            next_batch = self._prefetch_next_batch()
            if next_batch is not None:
                prefetched.append(next_batch)

        return BooksPage(
            books=data["books"],
            pagination=pagination,
            global_page=self.pager.current_global_page,
            total_global_pages=self.pager.total_global_pages,
            navigation=self.pager.render(),
            prefetched_batches=prefetched,
        )

    def go_to(self, global_page: int) -> BooksPage:
        self.pager.go_to(global_page)
        return self.fetch()

    def next_page(self) -> BooksPage:
        self.pager.next()
        return self.fetch()

    def previous_page(self) -> BooksPage:
        self.pager.previous()
        return self.fetch()

    def sort(self, sort_by: str, sort_order: str = "desc") -> BooksPage:
        self.pager.set_sort(sort_by, sort_order)
        self._prefetched.clear()
        return self.fetch()

    def filter(self, search: str | None = None, genre: str | None = None, author: str | None = None) -> BooksPage:
        self.pager.set_filters(search=search, genre=genre, author=author)
        self._prefetched.clear()
        return self.fetch()
