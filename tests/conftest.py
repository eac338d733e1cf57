"""
pytest configuration and shared fixtures for the catalog tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import AppConfig  # noqa: E402
from src.catalog.models import Product  # noqa: E402
from src.errors import StoreError, UploadError  # noqa: E402
from src.loaders.memory_store import MemoryStore  # noqa: E402
from src.uploaders.cloudinary_uploader import ImageHost  # noqa: E402


class FailingStore(MemoryStore):
    """
    MemoryStore that records every call and can be told to fail.

    ``fail_on`` maps ``(operation, collection)`` to an error message; the
    matching call raises StoreError instead of touching the data.
    """

    def __init__(self, data=None):
        super().__init__(data)
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[tuple[str, str], str] = {}

    def _check(self, operation: str, collection: str) -> None:
        self.calls.append((operation, collection))
        message = self.fail_on.get((operation, collection))
        if message:
            raise StoreError(message)

    async def list(self, collection, columns="*", limit=None):
        self._check("list", collection)
        return await super().list(collection, columns, limit)

    async def query(self, collection, filters, columns="*"):
        self._check("query", collection)
        return await super().query(collection, filters, columns)

    async def insert_many(self, collection, records):
        self._check("insert_many", collection)
        return await super().insert_many(collection, records)

    async def update(self, collection, record_id, fields):
        self._check("update", collection)
        return await super().update(collection, record_id, fields)

    async def delete(self, collection, record_id):
        self._check("delete", collection)
        return await super().delete(collection, record_id)

    async def delete_where(self, collection, filters):
        self._check("delete_where", collection)
        return await super().delete_where(collection, filters)


class FakeImageHost(ImageHost):
    """Returns predictable URLs; filenames listed in ``fail`` are rejected."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.uploaded: list[str] = []

    async def upload(self, file):
        filename = file[0] if isinstance(file, tuple) else file.name
        if filename in self.fail:
            raise UploadError(f"Upload of {filename} rejected")
        self.uploaded.append(filename)
        return f"https://img.example.com/{filename}"


def make_product(product_id="1", **fields) -> Product:
    """Build a Product from store-style keyword fields."""
    record = {
        "id": product_id,
        "name": f"Producto {product_id}",
        "description": "",
        "prince": 10,
        "category": "ropa",
        "size": "M",
        "image_url": '["https://img.example.com/a.jpg"]',
        "product_colors": [],
    }
    record.update(fields)
    return Product.from_record(record)


@pytest.fixture
def sample_records():
    """Store contents for two products, one with a legacy image value."""
    return {
        "products": [
            {
                "id": "p1",
                "name": "Faja Clásica",
                "description": "Faja de compresión alta",
                "prince": 45.5,
                "category": "ropa",
                "stock": 10,
                "size": "M",
                "image_url": '["https://img.example.com/faja1.jpg", "https://img.example.com/faja2.jpg"]',
            },
            {
                "id": "p2",
                "name": "Sandalia Playa",
                "description": "Sandalia cómoda",
                "prince": 20,
                "category": "zapatos",
                "stock": None,
                "size": "38",
                "image_url": "https://img.example.com/sandalia.jpg",
            },
        ],
        "product_colors": [
            {"id": "c1", "product_id": "p1", "color_name": "Negro", "color_code": "#000000"},
            {"id": "c2", "product_id": "p1", "color_name": "Beige", "color_code": "#f5f5dc"},
            {"id": "c3", "product_id": "p2", "color_name": "Negro", "color_code": "#111111"},
        ],
    }


@pytest.fixture
def store(sample_records):
    return FailingStore(sample_records)


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def app_config():
    return AppConfig()
