"""
Tests for the filter engine, pagination and catalog page state.
"""

import pytest

from conftest import make_product
from src.catalog.filters import CatalogBrowser, FilterState, apply_filters
from src.catalog.pagination import PAGE_SIZE, Paginator
from src.errors import OutOfRangeError


@pytest.fixture
def catalog():
    return [
        make_product("1", name="Faja Negra", category="ropa", size="M",
                     product_colors=[{"color_name": "Negro", "color_code": "#000"}]),
        make_product("2", name="Sandalia", description="Ideal para la playa",
                     category="zapatos", size="38"),
        make_product("3", name="Faja Beige", category="ropa", size="L",
                     product_colors=[{"color_name": "Beige", "color_code": "#eee"}]),
        make_product("4", name="Bolso", category="accesorios", size=""),
    ]


def ids(products):
    return [p.id for p in products]


class TestApplyFilters:
    def test_empty_filter_returns_everything(self, catalog):
        assert ids(apply_filters(catalog, FilterState())) == ["1", "2", "3", "4"]

    def test_category_keeps_order(self, catalog):
        assert ids(apply_filters(catalog, FilterState(category="ropa"))) == ["1", "3"]

    def test_size_and_color(self, catalog):
        assert ids(apply_filters(catalog, FilterState(size="M"))) == ["1"]
        assert ids(apply_filters(catalog, FilterState(color="Beige"))) == ["3"]

    def test_query_matches_name_or_description(self, catalog):
        assert ids(apply_filters(catalog, FilterState(query="FAJA"))) == ["1", "3"]
        assert ids(apply_filters(catalog, FilterState(query="playa"))) == ["2"]

    def test_all_facets_must_match(self, catalog):
        state = FilterState(category="ropa", color="Negro", query="beige")
        assert apply_filters(catalog, state) == []

    def test_result_is_subset(self, catalog):
        result = apply_filters(catalog, FilterState(category="ropa", size="L"))
        assert all(p in catalog for p in result)


class TestPaginator:
    def test_page_size_default(self):
        assert PAGE_SIZE == 16

    @pytest.mark.parametrize("count,pages", [(0, 1), (1, 1), (16, 1), (17, 2), (33, 3)])
    def test_total_pages(self, count, pages):
        assert Paginator().total_pages(count) == pages

    def test_pages_cover_every_item_once(self):
        items = list(range(40))
        paginator = Paginator()
        pages = [paginator.page(items, n) for n in range(1, paginator.total_pages(40) + 1)]
        assert [len(p) for p in pages] == [16, 16, 8]
        assert sum(pages, []) == items

    def test_empty_list_has_empty_first_page(self):
        assert Paginator().page([], 1) == []

    @pytest.mark.parametrize("page", [0, 4, -1])
    def test_out_of_range(self, page):
        with pytest.raises(OutOfRangeError):
            Paginator().page(list(range(40)), page)

    def test_clamp(self):
        paginator = Paginator()
        assert paginator.clamp(9, 20) == 2
        assert paginator.clamp(0, 20) == 1


class TestCatalogBrowser:
    def test_filter_change_resets_page(self):
        products = [make_product(str(i), category="ropa" if i % 2 else "otros") for i in range(60)]
        browser = CatalogBrowser(products)
        assert browser.go_to_page(3) == 3

        browser.set_filter("category", "ropa")
        assert browser.current_page == 1
        assert len(browser.page_items) == 16

    def test_go_to_page_clamps(self, catalog):
        browser = CatalogBrowser(catalog)
        assert browser.go_to_page(5) == 1
        assert browser.next_page() == 1
        assert browser.prev_page() == 1

    def test_pagination_hidden_for_one_page(self, catalog):
        browser = CatalogBrowser(catalog)
        assert browser.page_numbers == [1]
        assert not browser.show_pagination

    def test_unknown_filter_field(self, catalog):
        with pytest.raises(ValueError):
            CatalogBrowser(catalog).set_filter("price", "10")

    def test_reset_and_replace(self, catalog):
        browser = CatalogBrowser(catalog, page_size=1)
        browser.set_filter("category", "ropa")
        browser.go_to_page(2)
        browser.replace_products(catalog[:1])
        assert browser.current_page == 1

        browser.reset_filters()
        assert browser.filters.is_empty

    def test_facet_summary_uses_all_products(self, catalog):
        browser = CatalogBrowser(catalog)
        browser.set_filter("category", "zapatos")
        summary = browser.facet_summary()
        assert summary["sizes"] == ["M", "38", "L"]
        assert [c.name for c in summary["colors"]] == ["Negro", "Beige"]
