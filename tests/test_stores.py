"""
Tests for the collection stores and catalog reads.

SupabaseStore is exercised against a stand-in client object; no network.
"""

import asyncio
import json
from types import SimpleNamespace

import pytest

from config.settings import StoreConfig
from src.catalog.service import CatalogService
from src.errors import StoreError
from src.loaders.memory_store import MemoryStore
from src.loaders.supabase_store import SupabaseStore


class TestMemoryStore:
    def test_embedded_select(self, store):
        rows = asyncio.run(store.list("products", columns="*, product_colors(*)"))
        assert [c["id"] for c in rows[0]["product_colors"]] == ["c1", "c2"]
        assert [c["id"] for c in rows[1]["product_colors"]] == ["c3"]

    def test_plain_select_has_no_embed(self, store):
        rows = asyncio.run(store.list("products", limit=1))
        assert len(rows) == 1
        assert "product_colors" not in rows[0]

    def test_insert_assigns_id(self):
        store = MemoryStore()
        row = asyncio.run(store.insert("products", {"name": "Nuevo"}))
        assert row["id"]
        assert asyncio.run(store.query("products", {"id": row["id"]}))[0]["name"] == "Nuevo"

    def test_update_and_delete_missing_row(self, store):
        with pytest.raises(StoreError):
            asyncio.run(store.update("products", "nope", {"name": "x"}))
        with pytest.raises(StoreError):
            asyncio.run(store.delete("products", "nope"))

    def test_unfiltered_delete_refused(self, store):
        with pytest.raises(StoreError):
            asyncio.run(store.delete_where("product_colors", {}))

    def test_json_round_trip(self, store, tmp_path):
        path = tmp_path / "seed.json"
        store.save_json(path)
        loaded = MemoryStore.from_json(path)
        assert loaded.collections == json.loads(path.read_text(encoding="utf-8"))


class TestCatalogService:
    def test_load_products(self, store, app_config):
        products = asyncio.run(CatalogService(store, app_config).load_products())
        assert [p.id for p in products] == ["p1", "p2"]
        assert products[1].images == ["https://img.example.com/sandalia.jpg"]

    def test_null_color_code_keeps_product(self, store, app_config):
        store.collections["product_colors"][0]["color_code"] = None
        products = asyncio.run(CatalogService(store, app_config).load_products())
        assert [p.id for p in products] == ["p1", "p2"]
        assert products[0].colors[0].color_code == ""

    def test_invalid_records_skipped(self, app_config):
        store = MemoryStore({"products": [{"id": "ok"}, {"id": "bad", "prince": -5}]})
        products = asyncio.run(CatalogService(store, app_config).load_products())
        assert [p.id for p in products] == ["ok"]

    def test_featured_limit(self, app_config):
        store = MemoryStore({"products": [{"id": str(i)} for i in range(10)]})
        featured = asyncio.run(CatalogService(store, app_config).featured())
        assert len(featured) == app_config.catalog.featured_limit

    def test_get_product(self, store, app_config):
        service = CatalogService(store, app_config)
        assert asyncio.run(service.get_product("p2")).name == "Sandalia Playa"
        assert asyncio.run(service.get_product("missing")) is None


class FakeRequest:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, log, data=None, error=None):
        self.log = log
        self.data = data
        self.error = error

    def __getattr__(self, name):
        def step(*args):
            self.log.append((name, args))
            return self

        return step

    def execute(self):
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)


class FakeClient:
    def __init__(self, data=None, error=None):
        self.log = []
        self.data = data
        self.error = error

    def table(self, name):
        self.log.append(("table", (name,)))
        return FakeRequest(self.log, self.data, self.error)


class TestSupabaseStore:
    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            SupabaseStore(StoreConfig(supabase_url=None, supabase_key=None))

    def test_query_builds_filters(self):
        client = FakeClient(data=[{"id": "c1"}])
        store = SupabaseStore(StoreConfig(), client=client)

        rows = asyncio.run(store.query("product_colors", {"product_id": "p1"}))

        assert rows == [{"id": "c1"}]
        assert ("eq", ("product_id", "p1")) in client.log

    def test_client_errors_become_store_errors(self):
        store = SupabaseStore(StoreConfig(), client=FakeClient(error=RuntimeError("boom")))
        with pytest.raises(StoreError, match="boom"):
            asyncio.run(store.list("products"))

    def test_empty_insert_result(self):
        store = SupabaseStore(StoreConfig(), client=FakeClient(data=[]))
        with pytest.raises(StoreError):
            asyncio.run(store.insert("products", {"name": "x"}))
