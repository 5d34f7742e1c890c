"""
Supabase Document Store Implementation.

Implements the DocumentStore protocol on a single Supabase table:

    documents (
        path        text primary key,   -- "users/u1", "users/u1/session_history/<uuid>"
        collection  text,               -- parent subcollection path for records, null for documents
        data        jsonb not null,
        created_at  timestamptz not null default now()
    )

Field updates are applied read-modify-write and stored with an upsert.
Writes to the same path are serialised with a per-path asyncio.Lock so
concurrent updates of one document never upsert a stale snapshot.
The supabase-py client is synchronous, so every call runs in a worker
thread to keep the event loop free.
"""
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

from application.ports.document_store import apply_field_updates, remove_field

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "documents"


class SupabaseDocumentStore:
    """
    Supabase implementation of DocumentStore.
    """

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
            table: Name of the documents table
        """
        self._client = client
        self._table = table
        self._write_locks: Dict[str, asyncio.Lock] = {}

    # -------------------------------------------------------------------------
    # Sync helpers (run in a worker thread)
    # -------------------------------------------------------------------------

    def _select_document(self, path: str) -> Optional[Dict[str, Any]]:
        result = self._client.table(self._table) \
            .select("data") \
            .eq("path", path) \
            .limit(1) \
            .execute()
        if result.data:
            return result.data[0].get("data") or {}
        return None

    def _upsert_document(self, path: str, data: Dict[str, Any], collection: Optional[str] = None) -> None:
        self._client.table(self._table).upsert({
            "path": path,
            "collection": collection,
            "data": data,
        }).execute()

    def _update_sync(self, path: str, updates: Dict[str, Any]) -> None:
        current = self._select_document(path)
        self._upsert_document(path, apply_field_updates(current, updates))

    def _delete_field_sync(self, path: str, field: str) -> None:
        current = self._select_document(path)
        if current is None:
            return
        self._upsert_document(path, remove_field(current, field))

    def _append_sync(self, path: str, record: Dict[str, Any]) -> str:
        record_id = str(uuid.uuid4())
        self._client.table(self._table).insert({
            "path": f"{path}/{record_id}",
            "collection": path,
            "data": record,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }).execute()
        return record_id

    def _list_sync(self, path: str, limit: Optional[int]) -> List[Dict[str, Any]]:
        query = self._client.table(self._table) \
            .select("data, created_at") \
            .eq("collection", path) \
            .order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        result = query.execute()
        rows = list(reversed(result.data or []))
        return [row.get("data") or {} for row in rows]

    def _lock_for(self, path: str) -> asyncio.Lock:
        lock = self._write_locks.get(path)
        if lock is None:
            lock = self._write_locks[path] = asyncio.Lock()
        return lock

    # -------------------------------------------------------------------------
    # DocumentStore protocol
    # -------------------------------------------------------------------------

    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        try:
            return await asyncio.to_thread(self._select_document, path)
        except Exception as e:
            logger.exception("Error getting document %s: %s", path, e)
            raise

    async def update_document(self, path: str, updates: Dict[str, Any]) -> None:
        try:
            async with self._lock_for(path):
                await asyncio.to_thread(self._update_sync, path, updates)
        except Exception as e:
            logger.exception("Error updating document %s: %s", path, e)
            raise

    async def delete_field(self, path: str, field: str) -> None:
        try:
            async with self._lock_for(path):
                await asyncio.to_thread(self._delete_field_sync, path, field)
        except Exception as e:
            logger.exception("Error deleting field %s from %s: %s", field, path, e)
            raise

    async def append_to_subcollection(self, path: str, record: Dict[str, Any]) -> str:
        try:
            return await asyncio.to_thread(self._append_sync, path, record)
        except Exception as e:
            logger.exception("Error appending to %s: %s", path, e)
            raise

    async def list_subcollection(
        self,
        path: str,
        *,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        try:
            return await asyncio.to_thread(self._list_sync, path, limit)
        except Exception as e:
            logger.exception("Error listing %s: %s", path, e)
            raise
