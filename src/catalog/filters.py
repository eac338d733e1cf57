"""
Catalog filter engine and storefront browsing state.

``apply_filters`` is a pure predicate filter: a product passes when every
set facet matches, and the input order is preserved. ``CatalogBrowser``
couples the filter state with pagination so that any filter change sends
the shopper back to page 1.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from . import facets
from .models import Product
from .pagination import PAGE_SIZE, Paginator


@dataclass(frozen=True)
class FilterState:
    """Facets selected in the sidebar. Empty string means unset."""

    category: str = ""
    size: str = ""
    color: str = ""
    query: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.category or self.size or self.color or self.query)


def matches(product: Product, state: FilterState) -> bool:
    """Check one product against every set facet."""
    if state.category and product.category != state.category:
        return False
    if state.size and product.size != state.size:
        return False
    if state.color and not any(
        c.color_name == state.color for c in product.colors
    ):
        return False
    if state.query:
        needle = state.query.lower()
        if (
            needle not in product.name.lower()
            and needle not in product.description.lower()
        ):
            return False
    return True


def apply_filters(products: Iterable[Product], state: FilterState) -> list[Product]:
    """Return the products matching ``state`` in their original order."""
    return [p for p in products if matches(p, state)]


class CatalogBrowser:
    """
    Storefront catalog page state.

    Holds the loaded products, the active filters and the current page.
    Changing any filter field resets the page to 1.
    """

    FILTER_FIELDS = ("category", "size", "color", "query")

    def __init__(self, products: Iterable[Product], page_size: int = PAGE_SIZE):
        self.products: list[Product] = list(products)
        self.paginator = Paginator(page_size)
        self.filters = FilterState()
        self.current_page = 1

    def set_filter(self, field: str, value: Optional[str]) -> None:
        """Set one filter field and go back to the first page."""
        if field not in self.FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {field}")
        self.filters = replace(self.filters, **{field: value or ""})
        self.current_page = 1

    def reset_filters(self) -> None:
        self.filters = FilterState()
        self.current_page = 1

    def replace_products(self, products: Iterable[Product]) -> None:
        """Swap in a freshly loaded product list, keeping the page in range."""
        self.products = list(products)
        self.current_page = self.paginator.clamp(
            self.current_page, len(self.filtered)
        )

    @property
    def filtered(self) -> list[Product]:
        return apply_filters(self.products, self.filters)

    @property
    def total_pages(self) -> int:
        return self.paginator.total_pages(len(self.filtered))

    def go_to_page(self, page_number: int) -> int:
        """Move to ``page_number`` clamped into range; returns the page used."""
        self.current_page = self.paginator.clamp(page_number, len(self.filtered))
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def prev_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    @property
    def page_items(self) -> list[Product]:
        """Products shown on the current page."""
        return self.paginator.page(self.filtered, self.current_page)

    @property
    def page_numbers(self) -> list[int]:
        return list(range(1, self.total_pages + 1))

    @property
    def show_pagination(self) -> bool:
        # The storefront hides the pager for a single page
        return self.total_pages > 1

    def facet_summary(self) -> dict:
        """Facet options for the sidebar, derived from all loaded products."""
        return {
            "categories": facets.categories(),
            "sizes": facets.sizes(self.products),
            "colors": facets.colors(self.products),
        }
