"""
Two-level pagination over large result sets.

Results are split into batches of ``BOOKS_PER_BATCH`` records and each batch
into pages. Clients address a page as ``(batch, page)``; a global page number
maps onto that pair with ``to_batch_coordinates`` / ``to_global_page``.
"""

import math
from dataclasses import dataclass

BOOKS_PER_BATCH = 1000

# Page within a batch from which clients should start loading the next batch
PREFETCH_PAGE_THRESHOLD = 35


def max_pages_in_batch(page_size: int) -> int:
    """Pages addressable inside one batch, independent of how full it is."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, BOOKS_PER_BATCH // page_size)


def to_batch_coordinates(global_page: int, page_size: int) -> tuple[int, int]:
    """Split a 1-based global page into ``(batch, page_within_batch)``."""
    if global_page < 1:
        raise ValueError("global_page must be >= 1")
    pages = max_pages_in_batch(page_size)
    return (global_page - 1) // pages + 1, (global_page - 1) % pages + 1


def to_global_page(batch: int, page_within_batch: int, page_size: int) -> int:
    return (batch - 1) * max_pages_in_batch(page_size) + page_within_batch


def page_skip(batch: int, page: int, page_size: int) -> int:
    """Records preceding ``page`` of ``batch`` in the full result set."""
    return (batch - 1) * BOOKS_PER_BATCH + (page - 1) * page_size


@dataclass(frozen=True)
class BatchPage:
    """Where a page lies in the result set and what to tell the client."""

    batch: int
    page: int
    page_size: int
    total_matching: int
    batch_offset: int
    skip: int
    batch_total: int
    total_pages_in_batch: int
    slice_length: int
    max_pages_in_batch: int
    should_load_next_batch: bool

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages_in_batch

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1


def paginate(batch: int, page: int, page_size: int, total_matching: int) -> BatchPage:
    """Compute the slice and metadata for ``page`` of ``batch``.

    Batches or pages past the end of the data give an empty slice.
    """
    if batch < 1 or page < 1:
        raise ValueError("batch and page are 1-based")

    pages_per_batch = max_pages_in_batch(page_size)
    total_matching = max(0, total_matching)

    batch_offset = (batch - 1) * BOOKS_PER_BATCH
    skip = page_skip(batch, page, page_size)
    batch_total = max(0, min(BOOKS_PER_BATCH, total_matching - batch_offset))
    total_pages_in_batch = math.ceil(batch_total / page_size)

    # Never hand out records belonging to the next batch
    batch_end = batch_offset + batch_total
    slice_length = max(0, min(page_size, batch_end - skip))

    should_load_next_batch = (
        page >= min(PREFETCH_PAGE_THRESHOLD, pages_per_batch)
        and batch * BOOKS_PER_BATCH < total_matching
    )

    return BatchPage(
        batch=batch,
        page=page,
        page_size=page_size,
        total_matching=total_matching,
        batch_offset=batch_offset,
        skip=skip,
        batch_total=batch_total,
        total_pages_in_batch=total_pages_in_batch,
        slice_length=slice_length,
        max_pages_in_batch=pages_per_batch,
        should_load_next_batch=should_load_next_batch,
    )
