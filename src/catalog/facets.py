"""
Facet index for the catalog filter sidebar.

Categories come from the fixed vocabulary; sizes and colours are derived
from the products currently loaded.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import Category, Product


@dataclass(frozen=True)
class FacetOption:
    """A selectable facet value and the label shown for it."""

    value: str
    label: str


@dataclass(frozen=True)
class ColorFacet:
    """A distinct colour across the catalog."""

    name: str
    code: str


def categories() -> list[FacetOption]:
    """Return the static category vocabulary with display labels."""
    return [FacetOption(c.value, c.label) for c in Category]


def sizes(products: Iterable[Product]) -> list[str]:
    """
    Distinct non-empty sizes in first-seen order.

    Args:
        products: Products to scan

    Returns:
        Sizes with duplicates and empty strings removed
    """
    seen: dict[str, None] = {}
    for product in products:
        if product.size and product.size not in seen:
            seen[product.size] = None
    return list(seen)


def colors(products: Iterable[Product]) -> list[ColorFacet]:
    """
    Distinct colours across all variants, keyed by colour name.

    When two variants share a name with different codes, the first one
    seen wins.
    """
    by_name: dict[str, ColorFacet] = {}
    for product in products:
        for variant in product.colors:
            if variant.color_name not in by_name:
                by_name[variant.color_name] = ColorFacet(
                    variant.color_name, variant.color_code
                )
    return list(by_name.values())


def filter_options(options: Sequence, query: str) -> list:
    """
    Narrow facet options by a search query typed into the selector.

    Works on FacetOption (matches label), ColorFacet (matches name) and
    plain strings. Matching is a case-insensitive substring test.
    """
    if not query:
        return list(options)

    needle = query.lower()
    return [opt for opt in options if needle in _option_text(opt).lower()]


def _option_text(option) -> str:
    if isinstance(option, FacetOption):
        return option.label
    if isinstance(option, ColorFacet):
        return option.name
    return str(option)
