"""
Collection store interface.

The catalog engine treats the hosted database as a set of named collections
supporting plain CRUD. Every method is a single awaitable call; failures are
raised as StoreError.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class CollectionStore(ABC):
    """CRUD access to named record collections."""

    @abstractmethod
    async def list(
        self, collection: str, columns: str = "*", limit: Optional[int] = None
    ) -> List[dict]:
        """Return all records of a collection (optionally the first ``limit``)."""

    @abstractmethod
    async def query(
        self, collection: str, filters: dict[str, Any], columns: str = "*"
    ) -> List[dict]:
        """Return records whose fields equal every value in ``filters``."""

    @abstractmethod
    async def insert(self, collection: str, record: dict) -> dict:
        """Insert one record and return it as stored (with its id)."""

    @abstractmethod
    async def insert_many(self, collection: str, records: List[dict]) -> List[dict]:
        """Insert several records in one call."""

    @abstractmethod
    async def update(self, collection: str, record_id: str, fields: dict) -> dict:
        """Update a record by id and return it as stored."""

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> None:
        """Delete a record by id."""

    @abstractmethod
    async def delete_where(self, collection: str, filters: dict[str, Any]) -> None:
        """Delete every record whose fields equal the values in ``filters``."""
