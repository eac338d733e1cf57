"""
Catalog data models.

Products and their colour variants as read from the ``products`` and
``product_colors`` tables. Images are normalized to a URL list on load, and
the price is exposed as ``price`` while the store keeps the legacy ``prince``
column name.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .images import decode_images

# Literal column name in the store. Misspelled, kept for compatibility.
PRICE_FIELD = "prince"


class Category(str, Enum):
    """Fixed catalog category vocabulary (values are the stored ids)."""

    CLOTHING = "ropa"
    FOOTWEAR = "zapatos"
    ACCESSORIES = "accesorios"
    OTHER = "otros"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in {c.value for c in cls}


CATEGORY_LABELS = {
    Category.CLOTHING: "Ropa",
    Category.FOOTWEAR: "Zapatos",
    Category.ACCESSORIES: "Accesorios",
    Category.OTHER: "Otros",
}


def _coerce_id(v: Any) -> Optional[str]:
    if v is None:
        return None
    return str(v)


class ColorVariant(BaseModel):
    """A colour option belonging to one product."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    product_id: Optional[str] = None
    color_name: str = ""
    color_code: str = ""

    @field_validator("id", "product_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Optional[str]:
        return _coerce_id(v)

    @field_validator("color_name", "color_code", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else v


class Product(BaseModel):
    """A catalog product with its ordered image list and colour variants."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), alias=PRICE_FIELD, ge=0)
    category: str = ""
    stock: Optional[int] = Field(default=None, ge=0)
    size: str = ""
    images: list[str] = Field(default_factory=list, alias="image_url")
    colors: list[ColorVariant] = Field(default_factory=list, alias="product_colors")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Optional[str]:
        """Store ids may come back as integers."""
        return _coerce_id(v)

    @field_validator("name", "description", "size", "category", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        """Null text columns read as empty strings."""
        return "" if v is None else v

    @field_validator("stock", mode="before")
    @classmethod
    def blank_stock(cls, v: Any) -> Any:
        """The old form stored stock as text; blank means untracked."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("images", mode="before")
    @classmethod
    def normalize_images(cls, v: Any) -> list[str]:
        """Accept both the JSON-array and the legacy bare-URL forms."""
        return decode_images(v)

    @field_validator("colors", mode="before")
    @classmethod
    def null_colors(cls, v: Any) -> Any:
        return v or []

    @property
    def first_image(self) -> str:
        """Cover image, or empty string when there are no images."""
        return self.images[0] if self.images else ""

    @property
    def category_label(self) -> str:
        if Category.is_valid(self.category):
            return Category(self.category).label
        return self.category

    @classmethod
    def from_record(cls, record: dict) -> "Product":
        """Build a product from a raw store record."""
        return cls.model_validate(record)

    def with_colors(self, colors: list[ColorVariant]) -> "Product":
        """Copy of this product carrying a different variant list."""
        return self.model_copy(update={"colors": list(colors)})
