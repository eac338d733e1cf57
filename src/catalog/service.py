"""
Catalog reads against the collection store.
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from config.settings import AppConfig, config as default_config
from src.loaders.base_store import CollectionStore

from .models import Product

console = Console()


class CatalogService:
    """Loads products (with their colour variants) for the storefront."""

    def __init__(self, store: CollectionStore, app_config: Optional[AppConfig] = None):
        self.store = store
        self.config = app_config or default_config

    @property
    def _columns(self) -> str:
        return f"*, {self.config.store.colors_table}(*)"

    def _to_products(self, records: list[dict]) -> list[Product]:
        products = []
        for record in records:
            try:
                products.append(Product.from_record(record))
            except PydanticValidationError as e:
                console.print(
                    f"[yellow]Warning: skipping product {record.get('id')}: "
                    f"{e.error_count()} invalid field(s)[/yellow]"
                )
        return products

    async def load_products(self) -> list[Product]:
        """All products in store order."""
        records = await self.store.list(
            self.config.store.products_table, columns=self._columns
        )
        products = self._to_products(records)
        if self.config.logging.show_debug:
            console.print(
                f"[dim]Loaded {len(products)} of {len(records)} product records[/dim]"
            )
        return products

    async def featured(self) -> list[Product]:
        """The first few products, shown on the home page."""
        records = await self.store.list(
            self.config.store.products_table,
            columns=self._columns,
            limit=self.config.catalog.featured_limit,
        )
        return self._to_products(records)

    async def get_product(self, product_id: str) -> Optional[Product]:
        """
        Fetch one product with its variants.

        Returns:
            The product, or None when no valid record has that id
        """
        records = await self.store.query(
            self.config.store.products_table, {"id": product_id}, columns=self._columns
        )
        products = self._to_products(records)
        return products[0] if products else None
