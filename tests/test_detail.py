"""
Tests for the product detail page state and cart gating.
"""

import pytest

from conftest import make_product
from src.catalog.detail import CartAction, ProductDetail, SessionContext, cart_action


class TestCarousel:
    def test_wraps_around(self):
        detail = ProductDetail(make_product("1", image_url='["a", "b", "c"]'))
        assert detail.current_image == "a"
        assert detail.prev_image() == 2
        assert detail.current_image == "c"
        assert detail.next_image() == 0

    def test_show_image(self):
        detail = ProductDetail(make_product("1", image_url='["a", "b"]'))
        assert detail.show_image(1) == 1
        assert detail.show_image(5) == 1

    def test_no_images(self):
        detail = ProductDetail(make_product("1", image_url=None))
        assert detail.current_image == ""
        assert detail.next_image() == 0
        assert detail.prev_image() == 0


class TestSelection:
    def test_default_colour_is_first_variant(self):
        product = make_product(
            "1",
            product_colors=[
                {"id": "c1", "color_name": "Negro", "color_code": "#000"},
                {"id": "c2", "color_name": "Rojo", "color_code": "#f00"},
            ],
        )
        detail = ProductDetail(product)
        assert detail.selected_color_id == "c1"

        detail.select_color("c2")
        assert detail.selected_color_id == "c2"
        detail.select_color("missing")
        assert detail.selected_color_id == "c2"

    def test_no_variants(self):
        assert ProductDetail(make_product("1")).selected_color_id is None

    def test_quantity_never_below_one(self):
        detail = ProductDetail(make_product("1"))
        assert detail.change_quantity(2) == 3
        assert detail.change_quantity(-10) == 1


class TestCartAction:
    @pytest.mark.parametrize(
        "session,expected",
        [
            (SessionContext(is_authenticated=True, role="admin"), CartAction.HIDDEN),
            (SessionContext(is_authenticated=False), CartAction.SIGN_IN),
            (SessionContext(is_authenticated=True, role="customer"), CartAction.ADD),
        ],
    )
    def test_gating(self, session, expected):
        assert cart_action(session) == expected
