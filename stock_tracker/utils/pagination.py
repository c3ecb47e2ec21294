# stock_tracker/utils/pagination.py
import math
from dataclasses import dataclass, replace
from typing import Generic, List, Sequence, TypeVar, Union

from stock_tracker.utils.catalog import ALL_CATEGORIES

T = TypeVar("T")

ITEMS_PER_PAGE = 5
# Up to this many pages the strip shows every page number
PAGE_STRIP_LIMIT = 5
ELLIPSIS = "..."

PageLabel = Union[int, str]


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    total: int
    total_pages: int
    page_labels: List[PageLabel]

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages(count: int, page_size: int = ITEMS_PER_PAGE) -> int:
    # An empty list is still "page 1 of 1"
    return max(1, math.ceil(count / page_size))

def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), pages)

def page_items(items: Sequence[T], page: int, page_size: int = ITEMS_PER_PAGE) -> List[T]:
    page = clamp_page(page, total_pages(len(items), page_size))
    start = (page - 1) * page_size
    return list(items[start:start + page_size])

def page_labels(current: int, pages: int) -> List[PageLabel]:
    """
    Page numbers for the pagination strip.

    Short strips list every page. Longer ones keep the first and last page
    plus the current page and its neighbours, with an ellipsis marker where
    pages are skipped.
    """
    if pages <= PAGE_STRIP_LIMIT:
        return list(range(1, pages + 1))

    current = clamp_page(current, pages)
    shown = {1, pages}
    shown.update(p for p in (current - 1, current, current + 1) if 1 <= p <= pages)

    labels: List[PageLabel] = []
    previous = None
    for p in sorted(shown):
        if previous is not None and p - previous > 1:
            labels.append(ELLIPSIS)
        labels.append(p)
        previous = p
    return labels

def paginate(items: Sequence[T], page: int = 1, page_size: int = ITEMS_PER_PAGE) -> Page[T]:
    pages = total_pages(len(items), page_size)
    current = clamp_page(page, pages)
    return Page(
        items=page_items(items, current, page_size),
        page=current,
        total=len(items),
        total_pages=pages,
        page_labels=page_labels(current, pages),
    )

def next_page(current: int, pages: int) -> int:
    return clamp_page(current + 1, pages)

def previous_page(current: int) -> int:
    return max(1, current - 1)


@dataclass(frozen=True)
class ListState:
    """
    Explicit state of the product list screen.

    Any change of the search criteria, or a new store version, puts the
    list back on page 1.
    """
    query: str = ""
    category: str = ALL_CATEGORIES
    page: int = 1
    store_version: int = 0

    def with_criteria(self, query: str = None, category: str = None) -> "ListState":
        query = self.query if query is None else query
        category = self.category if category is None else category
        if query == self.query and category == self.category:
            return self
        return replace(self, query=query, category=category, page=1)

    def with_store_version(self, version: int) -> "ListState":
        if version == self.store_version:
            return self
        return replace(self, store_version=version, page=1)

    def go_to(self, page: int, pages: int) -> "ListState":
        return replace(self, page=clamp_page(page, pages))

    def next(self, pages: int) -> "ListState":
        return replace(self, page=next_page(self.page, pages))

    def previous(self) -> "ListState":
        return replace(self, page=previous_page(self.page))
