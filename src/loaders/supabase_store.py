"""
Supabase-backed collection store.

Product and variant records live in PostgreSQL tables reached through the
Supabase client. Client errors are re-raised as StoreError.
"""

from typing import Any, List, Optional

from rich.console import Console
from supabase import Client, create_client

from config.settings import StoreConfig
from src.errors import StoreError

from .base_store import CollectionStore

console = Console()


class SupabaseStore(CollectionStore):
    """
    Collection store over Supabase tables.

    - ``products`` -> product records (images in ``image_url``, price in ``prince``)
    - ``product_colors`` -> colour variants keyed by ``product_id``
    """

    def __init__(
        self,
        store_config: Optional[StoreConfig] = None,
        client: Optional[Client] = None,
    ):
        """
        Initialize the Supabase store.

        Args:
            store_config: Store settings (defaults read SUPABASE_URL / SUPABASE_KEY)
            client: Pre-built Supabase client, mainly for tests
        """
        self.config = store_config or StoreConfig()

        if client is None:
            if not self.config.supabase_url or not self.config.supabase_key:
                raise ValueError(
                    "Supabase credentials required. Set SUPABASE_URL and SUPABASE_KEY "
                    "environment variables or pass them in StoreConfig."
                )
            client = create_client(self.config.supabase_url, self.config.supabase_key)

        self.client: Client = client

    def _execute(self, action: str, collection: str, request) -> Any:
        try:
            return request.execute()
        except Exception as e:
            console.print(f"[red]✗ {action} on '{collection}' failed: {e}[/red]")
            raise StoreError(f"{action} on '{collection}' failed: {e}") from e

    async def list(
        self, collection: str, columns: str = "*", limit: Optional[int] = None
    ) -> List[dict]:
        request = self.client.table(collection).select(columns)
        if limit is not None:
            request = request.limit(limit)
        result = self._execute("List", collection, request)
        return result.data or []

    async def query(
        self, collection: str, filters: dict[str, Any], columns: str = "*"
    ) -> List[dict]:
        request = self.client.table(collection).select(columns)
        for key, value in filters.items():
            request = request.eq(key, value)
        result = self._execute("Query", collection, request)
        return result.data or []

    async def insert(self, collection: str, record: dict) -> dict:
        rows = await self.insert_many(collection, [record])
        return rows[0]

    async def insert_many(self, collection: str, records: List[dict]) -> List[dict]:
        if not records:
            return []
        request = self.client.table(collection).insert(records)
        result = self._execute("Insert", collection, request)
        if not result.data:
            raise StoreError(f"Insert on '{collection}' returned no rows")
        console.print(
            f"[dim]  Inserted {len(result.data)} row(s) into {collection}[/dim]"
        )
        return result.data

    async def update(self, collection: str, record_id: str, fields: dict) -> dict:
        request = self.client.table(collection).update(fields).eq("id", record_id)
        result = self._execute("Update", collection, request)
        if not result.data:
            raise StoreError(f"Update on '{collection}' matched no row {record_id}")
        return result.data[0]

    async def delete(self, collection: str, record_id: str) -> None:
        request = self.client.table(collection).delete().eq("id", record_id)
        self._execute("Delete", collection, request)
        console.print(f"[dim]  Deleted {collection}/{record_id}[/dim]")

    async def delete_where(self, collection: str, filters: dict[str, Any]) -> None:
        if not filters:
            # An unfiltered delete would wipe the table
            raise StoreError(f"Refusing unfiltered delete on '{collection}'")
        request = self.client.table(collection).delete()
        for key, value in filters.items():
            request = request.eq(key, value)
        self._execute("Delete", collection, request)
