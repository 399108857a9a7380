"""Client-side pagination over an already-fetched list."""

import math
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

THOUGHTS_PER_PAGE = 10


def page_count(items: Sequence, per_page: int = THOUGHTS_PER_PAGE) -> int:
    return math.ceil(len(items) / per_page)


def paginate(items: Sequence[T], page: int, per_page: int = THOUGHTS_PER_PAGE) -> List[T]:
    """
    Return the 1-indexed ``page`` of ``items``.

    Pages past the end (and pages below 1) are empty.
    """
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    if page < 1:
        return []
    start = (page - 1) * per_page
    return list(items[start:start + per_page])


class Paginator(Generic[T]):
    """
    Tracks the current page over a source list.

    Handing it a different list object (even one with equal contents) resets
    it to page 1, the way a freshly fetched result does.
    """

    def __init__(self, items: Sequence[T], per_page: int = THOUGHTS_PER_PAGE):
        self.per_page = per_page
        self._items = items
        self.page = 1

    @property
    def items(self) -> Sequence[T]:
        return self._items

    @items.setter
    def items(self, items: Sequence[T]) -> None:
        if items is not self._items:
            self._items = items
            self.page = 1

    @property
    def pages(self) -> int:
        return page_count(self._items, self.per_page)

    @property
    def current(self) -> List[T]:
        return paginate(self._items, self.page, self.per_page)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    def go_to(self, page: int) -> List[T]:
        self.page = page
        return self.current

    def next(self) -> Optional[List[T]]:
        if not self.has_next:
            return None
        return self.go_to(self.page + 1)

    def previous(self) -> Optional[List[T]]:
        if not self.has_previous:
            return None
        return self.go_to(self.page - 1)
