import logging
import math
from dataclasses import dataclass

from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageWindow:
    """A 1-based page of fixed size. Pages below 1 are read as page 1."""

    page: int = 1
    page_size: int = 20

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")
        if self.page < 1:
            object.__setattr__(self, "page", 1)

    @property
    def bounds(self) -> tuple:
        """Inclusive 0-based row positions requested from the store."""
        start = (self.page - 1) * self.page_size
        return start, start + self.page_size - 1

    def bounded(self, total: int) -> tuple:
        """``bounds`` clipped to the last existing row, e.g. page 3 of 45 rows -> (40, 44)."""
        start, end = self.bounds
        return start, min(end, total - 1)


@dataclass
class Page:
    items: list
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def first_shown(self) -> int:
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_shown(self) -> int:
        if not self.items:
            return 0
        return self.first_shown + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def as_dict(self) -> dict:
        return {
            "results": self.items,
            "page": self.page,
            "page_size": self.page_size,
            "total": self.total,
            "total_pages": self.total_pages,
            "first_shown": self.first_shown,
            "last_shown": self.last_shown,
            "has_previous": self.has_previous,
            "has_next": self.has_next,
        }


class Paginator:
    """Runs one range-bounded query per page; the store reports the exact total."""

    def __init__(self, store, page_size: int = None):
        self.store = store
        self.page_size = page_size or settings.REGISTRY_PAGE_SIZE

    def get_page(self, search, predicate, page: int = 1) -> Page:
        """
        Fetch one page of ``search.table`` rows matching ``predicate``.

        Raises:
            StoreError: If the store call fails
        """
        window = PageWindow(page, self.page_size)
        start, end = window.bounds
        rows, total = self.store.fetch_page(search.table, predicate, search.ordering, start, end)
        logger.debug(f"{search.table} page {window.page}: {len(rows)} of {total}")
        return Page(items=rows, page=window.page, page_size=self.page_size, total=total)
