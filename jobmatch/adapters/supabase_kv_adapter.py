"""
Concrete implementation of StoragePort using a Supabase table as a key-value store.

Expected table (default name `kv_store`):
    key   text primary key
    value text not null
"""

from supabase import Client

from jobmatch.ports.storage_port import StoragePort


class SupabaseKVAdapter(StoragePort):
    """Reads and upserts slots via the Supabase REST client."""

    def __init__(self, client: Client, table: str = "kv_store") -> None:
        self._client = client
        self._table = table

    async def load(self, key: str) -> str | None:
        result = (
            self._client.table(self._table)
            .select("value")
            .eq("key", key)
            .maybe_single()
            .execute()
        )
        # maybe_single() yields None (or empty data) when the slot was never written
        if not result or not result.data:
            return None
        return result.data.get("value")

    async def save(self, key: str, value: str) -> None:
        self._client.table(self._table).upsert(
            {"key": key, "value": value}, on_conflict="key"
        ).execute()
