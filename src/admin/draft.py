"""
Admin product draft.

The form's in-progress state: text fields as typed, the ordered image list
and the colour variants. ``reset_draft()`` is the only way to get a blank
draft. ``validate_draft`` turns a draft into a store payload.
"""

import math
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional

from src.catalog.images import encode_images
from src.catalog.models import PRICE_FIELD, Category, Product
from src.errors import ValidationError

from .variants import VariantStore

MAX_IMAGES = 5

# Plain decimal notation only ("19.99", "20", ".5"); rejects "1e3", "19.99abc"
_PRICE_PATTERN = re.compile(r"^\d*\.?\d+$|^\d+\.$")

TEXT_FIELDS = ("name", "description", "price", "category", "stock", "size")


@dataclass(frozen=True)
class ProductDraft:
    """Unsaved product form state."""

    name: str = ""
    description: str = ""
    price: str = ""  # As typed
    category: str = ""
    stock: str = ""  # As typed
    size: str = ""
    images: tuple[str, ...] = ()
    variants: VariantStore = field(default_factory=VariantStore)

    @classmethod
    def from_product(cls, product: Product, variants=None) -> "ProductDraft":
        """Pre-populate a draft from a stored product and its variants."""
        return cls(
            name=product.name,
            description=product.description,
            price=format(product.price, "f"),
            category=product.category,
            stock="" if product.stock is None else str(product.stock),
            size=product.size,
            images=tuple(product.images),
            variants=VariantStore.from_variants(
                product.colors if variants is None else variants
            ),
        )

    def with_field(self, name: str, value: str) -> "ProductDraft":
        if name not in TEXT_FIELDS:
            raise ValueError(f"Unknown draft field: {name}")
        return replace(self, **{name: value})


def reset_draft() -> ProductDraft:
    """A fully blank draft."""
    return ProductDraft()


def parse_price(text: str) -> Decimal:
    """
    Parse the price field.

    Raises:
        ValidationError: if the text is not a plain non-negative number
    """
    cleaned = (text or "").strip()
    if not cleaned or not _PRICE_PATTERN.match(cleaned):
        raise ValidationError(f"Price must be a non-negative number, got {text!r}")
    return Decimal(cleaned)


def parse_stock(text: str) -> Optional[int]:
    """Blank stock means untracked; otherwise a non-negative integer."""
    cleaned = (text or "").strip()
    if not cleaned:
        return None
    if not cleaned.isdigit():
        raise ValidationError(f"Stock must be a whole number, got {text!r}")
    return int(cleaned)


def validate_draft(draft: ProductDraft, max_images: int = MAX_IMAGES) -> dict:
    """
    Check a draft and build the ``products`` payload.

    Args:
        draft: Draft to submit
        max_images: Image limit (CatalogConfig.max_images)

    Returns:
        Record ready for insert/update (legacy ``prince`` key, JSON image list)

    Raises:
        ValidationError: on the first failed check
    """
    if not draft.images:
        raise ValidationError("Add at least one image")
    if len(draft.images) > max_images:
        raise ValidationError(f"At most {max_images} images are allowed")
    if len(draft.variants) == 0:
        raise ValidationError("Add at least one colour")
    if not draft.name.strip():
        raise ValidationError("Name is required")
    if not Category.is_valid(draft.category):
        raise ValidationError(f"Unknown category: {draft.category!r}")

    price = parse_price(draft.price)
    stock = parse_stock(draft.stock)

    price_value = float(price)
    if math.isinf(price_value):
        raise ValidationError("Price is too large")

    return {
        "name": draft.name.strip(),
        "description": draft.description,
        PRICE_FIELD: price_value,
        "category": draft.category,
        "stock": stock,
        "size": draft.size.strip(),
        "image_url": encode_images(list(draft.images)),
    }
