"""
Tests for Product and ColorVariant record parsing.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.catalog.models import Category, ColorVariant, Product


class TestProductFromRecord:
    def test_legacy_price_column(self):
        product = Product.from_record({"id": 1, "prince": "19.99"})
        assert product.id == "1"
        assert product.price == Decimal("19.99")

    def test_images_and_colors(self):
        product = Product.from_record(
            {
                "id": "p1",
                "image_url": '["a.jpg", "b.jpg"]',
                "product_colors": [
                    {"id": 7, "product_id": "p1", "color_name": "Rojo", "color_code": "#f00"}
                ],
            }
        )
        assert product.images == ["a.jpg", "b.jpg"]
        assert product.first_image == "a.jpg"
        assert product.colors == [
            ColorVariant(id="7", product_id="p1", color_name="Rojo", color_code="#f00")
        ]

    def test_nulls_read_as_empty(self):
        product = Product.from_record(
            {
                "id": "p1",
                "name": None,
                "description": None,
                "size": None,
                "image_url": None,
                "product_colors": None,
                "stock": "",
            }
        )
        assert product.name == ""
        assert product.description == ""
        assert product.images == []
        assert product.first_image == ""
        assert product.colors == []
        assert product.stock is None

    def test_negative_price_rejected(self):
        with pytest.raises(PydanticValidationError):
            Product.from_record({"id": "p1", "prince": -1})

    def test_category_label(self):
        assert Product.from_record({"id": "1", "category": "zapatos"}).category_label == "Zapatos"
        # Unknown ids are shown as stored
        assert Product.from_record({"id": "1", "category": "misc"}).category_label == "misc"


class TestCategory:
    def test_vocabulary(self):
        assert [c.value for c in Category] == ["ropa", "zapatos", "accesorios", "otros"]
        assert Category.is_valid("accesorios")
        assert not Category.is_valid("Ropa")


class TestColorVariant:
    def test_null_colour_fields_read_as_empty(self):
        variant = ColorVariant.model_validate(
            {"id": 1, "product_id": "p1", "color_name": None, "color_code": None}
        )
        assert variant.color_name == ""
        assert variant.color_code == ""
