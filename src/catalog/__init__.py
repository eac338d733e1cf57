"""
Storefront catalog: data model, image codec, facets, filtering and pagination.
"""

from .detail import CartAction, ProductDetail, SessionContext, cart_action
from .facets import ColorFacet, FacetOption, categories, colors, filter_options, sizes
from .filters import CatalogBrowser, FilterState, apply_filters
from .images import decode_images, encode_images
from .models import PRICE_FIELD, Category, ColorVariant, Product
from .pagination import PAGE_SIZE, Paginator
from .service import CatalogService

__all__ = [
    # Models
    "Product",
    "ColorVariant",
    "Category",
    "PRICE_FIELD",
    # Images
    "decode_images",
    "encode_images",
    # Facets
    "FacetOption",
    "ColorFacet",
    "categories",
    "sizes",
    "colors",
    "filter_options",
    # Filtering & pagination
    "FilterState",
    "apply_filters",
    "CatalogBrowser",
    "Paginator",
    "PAGE_SIZE",
    # Store reads
    "CatalogService",
    # Detail page
    "ProductDetail",
    "SessionContext",
    "CartAction",
    "cart_action",
]
