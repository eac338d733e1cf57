"""
In-memory collection store.

Used for local runs without Supabase (seeded from a JSON file) and as the
base for test doubles. Supports the one embedded-select form the catalog
uses: ``"*, product_colors(*)"``.
"""

import copy
import json
import re
import uuid
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console

from src.errors import StoreError

from .base_store import CollectionStore

console = Console()

_EMBED_PATTERN = re.compile(r"(\w+)\s*\(\s*\*\s*\)")


class MemoryStore(CollectionStore):
    """Dict-of-lists store keeping insertion order."""

    def __init__(self, data: Optional[dict[str, list[dict]]] = None):
        self.collections: dict[str, list[dict]] = {}
        for name, records in (data or {}).items():
            self.collections[name] = [self._with_id(dict(r)) for r in records]

    @classmethod
    def from_json(cls, path: Path) -> "MemoryStore":
        """
        Load a store from a JSON file of ``{collection: [records]}``.

        Args:
            path: JSON seed file

        Returns:
            A populated MemoryStore
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        store = cls(data)
        counts = ", ".join(f"{k}={len(v)}" for k, v in store.collections.items())
        console.print(f"[dim]✓ Loaded local store from {path} ({counts})[/dim]")
        return store

    def _with_id(self, record: dict) -> dict:
        if record.get("id") is None:
            record["id"] = str(uuid.uuid4())
        return record

    def _rows(self, collection: str) -> List[dict]:
        return self.collections.setdefault(collection, [])

    def _embed(self, collection: str, record: dict, columns: str) -> dict:
        out = copy.deepcopy(record)
        # products -> product_id
        foreign_key = f"{collection.rstrip('s')}_id"
        for child in _EMBED_PATTERN.findall(columns):
            out[child] = [
                copy.deepcopy(r)
                for r in self._rows(child)
                if str(r.get(foreign_key)) == str(record["id"])
            ]
        return out

    @staticmethod
    def _matches(record: dict, filters: dict[str, Any]) -> bool:
        return all(str(record.get(k)) == str(v) for k, v in filters.items())

    async def list(
        self, collection: str, columns: str = "*", limit: Optional[int] = None
    ) -> List[dict]:
        rows = self._rows(collection)
        if limit is not None:
            rows = rows[:limit]
        return [self._embed(collection, r, columns) for r in rows]

    async def query(
        self, collection: str, filters: dict[str, Any], columns: str = "*"
    ) -> List[dict]:
        return [
            self._embed(collection, r, columns)
            for r in self._rows(collection)
            if self._matches(r, filters)
        ]

    async def insert(self, collection: str, record: dict) -> dict:
        rows = await self.insert_many(collection, [record])
        return rows[0]

    async def insert_many(self, collection: str, records: List[dict]) -> List[dict]:
        stored = [self._with_id(copy.deepcopy(r)) for r in records]
        self._rows(collection).extend(stored)
        return copy.deepcopy(stored)

    async def update(self, collection: str, record_id: str, fields: dict) -> dict:
        for row in self._rows(collection):
            if str(row["id"]) == str(record_id):
                row.update(copy.deepcopy(fields))
                return copy.deepcopy(row)
        raise StoreError(f"Update on '{collection}' matched no row {record_id}")

    async def delete(self, collection: str, record_id: str) -> None:
        rows = self._rows(collection)
        remaining = [r for r in rows if str(r["id"]) != str(record_id)]
        if len(remaining) == len(rows):
            raise StoreError(f"Delete on '{collection}' matched no row {record_id}")
        self.collections[collection] = remaining

    async def delete_where(self, collection: str, filters: dict[str, Any]) -> None:
        if not filters:
            raise StoreError(f"Refusing unfiltered delete on '{collection}'")
        self.collections[collection] = [
            r for r in self._rows(collection) if not self._matches(r, filters)
        ]

    def save_json(self, path: Path) -> None:
        """Write all collections back to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.collections, f, indent=2, ensure_ascii=False, default=str)
