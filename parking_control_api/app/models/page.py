"""
Pagination primitives shared by the repository, service and API layers.

A ``PageRequest`` describes which slice of a sorted full scan to
return; a ``Page`` carries that slice together with the totals needed
by clients to navigate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")

ASC = "ASC"
DESC = "DESC"

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 2000
# Largest OFFSET SQLite accepts (signed 64-bit).
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class SortOrder:
    property: str
    direction: str = ASC


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: Tuple[SortOrder, ...] = (SortOrder("id", ASC),)

    @classmethod
    def clamped(cls, page: int, size: int, sort: Tuple[SortOrder, ...]) -> "PageRequest":
        """Build a request from raw query values without rejecting any.

        A negative page becomes 0, a size below 1 becomes
        ``DEFAULT_PAGE_SIZE`` and a size above ``MAX_PAGE_SIZE`` is cut
        down to it.  Pages past ``MAX_OFFSET`` are pulled back to the
        last addressable one, which is empty for any real table.
        """
        if size < 1:
            size = DEFAULT_PAGE_SIZE
        size = min(size, MAX_PAGE_SIZE)
        page = min(max(page, 0), MAX_OFFSET // size)
        return cls(page=page, size=size, sort=sort)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    content: List[T]
    total_elements: int
    request: PageRequest = field(default_factory=PageRequest)

    @property
    def number(self) -> int:
        return self.request.page

    @property
    def size(self) -> int:
        return self.request.size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def first(self) -> bool:
        return self.number == 0

    @property
    def last(self) -> bool:
        return self.number + 1 >= self.total_pages

    @property
    def empty(self) -> bool:
        return not self.content
