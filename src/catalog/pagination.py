"""
Fixed-size pagination over a filtered product list.
"""

import math
from typing import Sequence, TypeVar

from src.errors import OutOfRangeError

T = TypeVar("T")

PAGE_SIZE = 16


class Paginator:
    """Slices a list into fixed-size, 1-based pages."""

    def __init__(self, page_size: int = PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size

    def total_pages(self, count: int) -> int:
        """Number of pages for ``count`` items; an empty list still has page 1."""
        return max(1, math.ceil(count / self.page_size))

    def page(self, items: Sequence[T], page_number: int) -> list[T]:
        """
        Return the items on ``page_number``.

        The caller clamps the page number; anything outside
        ``[1, total_pages]`` raises OutOfRangeError.
        """
        total = self.total_pages(len(items))
        if page_number < 1 or page_number > total:
            raise OutOfRangeError(
                f"Page {page_number} out of range (1-{total})"
            )
        start = (page_number - 1) * self.page_size
        return list(items[start : start + self.page_size])

    def clamp(self, page_number: int, count: int) -> int:
        """Clamp a requested page into the valid range for ``count`` items."""
        return min(max(1, page_number), self.total_pages(count))
