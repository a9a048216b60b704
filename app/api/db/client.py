"""
Record store client.
Owns: Supabase client instantiation and filter-based collection access.
"""

import logging
from datetime import datetime
from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from app.api.config import Settings
from app.api.errors import StoreException

logger = logging.getLogger(__name__)

USER_COLLECTION = "user"
TODO_COLLECTION = "todo"

Record = dict[str, Any]
Filter = dict[str, Any]


def encode_record(record: Record) -> Record:
    """Convert values the store cannot hold natively (datetimes) to JSON scalars."""
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in record.items()
    }


class Collection(Protocol):
    """
    Exact-match filter CRUD over one collection.

    Filters are conjunctions of field equality. Every call is a single
    atomic filter-then-act operation on the store.
    """

    name: str

    def find_one(self, filter: Filter) -> Record | None: ...

    def find_many(self, filter: Filter) -> list[Record]: ...

    def insert(self, record: Record) -> Record: ...

    def update_one(self, filter: Filter, patch: Record) -> Record | None: ...

    def delete_one(self, filter: Filter) -> Record | None: ...


class SupabaseCollection:
    """Collection backed by a Supabase (PostgREST) table."""

    def __init__(self, client: Client, name: str):
        self._client = client
        self.name = name

    def _execute(self, action: str, query: Any) -> list[Record]:
        try:
            result = query.execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error(
                f"Store {action} failed",
                extra={"collection": self.name, "error": str(e)},
            )
            raise StoreException(f"Failed to {action} {self.name} record")
        return result.data or []

    def find_one(self, filter: Filter) -> Record | None:
        rows = self._execute(
            "read",
            self._client.table(self.name).select("*").match(encode_record(filter)).limit(1),
        )
        return rows[0] if rows else None

    def find_many(self, filter: Filter) -> list[Record]:
        return self._execute(
            "read",
            self._client.table(self.name).select("*").match(encode_record(filter)),
        )

    def insert(self, record: Record) -> Record:
        rows = self._execute(
            "insert",
            self._client.table(self.name).insert(encode_record(record)),
        )
        if not rows:
            raise StoreException(f"Failed to insert {self.name} record")
        return rows[0]

    def update_one(self, filter: Filter, patch: Record) -> Record | None:
        rows = self._execute(
            "update",
            self._client.table(self.name).update(encode_record(patch)).match(encode_record(filter)),
        )
        return rows[0] if rows else None

    def delete_one(self, filter: Filter) -> Record | None:
        rows = self._execute(
            "delete",
            self._client.table(self.name).delete().match(encode_record(filter)),
        )
        return rows[0] if rows else None


class RecordStore:
    """The two logical collections the API reads and writes."""

    def __init__(self, users: Collection, todos: Collection):
        self.users = users
        self.todos = todos

    def ping(self) -> None:
        """
        Verify the store is reachable.

        Raises:
            StoreException: The store cannot be queried
        """
        self.users.find_one({})


def create_supabase_store(settings: Settings) -> RecordStore:
    """Returns a RecordStore over Supabase tables ``user`` and ``todo``."""
    if not settings.db_key:
        raise ValueError("DB_KEY is required when STORE_BACKEND=supabase")
    client = create_client(settings.db_uri, settings.db_key)
    return RecordStore(
        users=SupabaseCollection(client, USER_COLLECTION),
        todos=SupabaseCollection(client, TODO_COLLECTION),
    )


def create_record_store(settings: Settings) -> RecordStore:
    """
    Factory for the configured record store.

    Gating:
    - STORE_BACKEND=local -> in-process MemoryCollection (dev/test only)
    - STORE_BACKEND=supabase -> real Supabase tables
    """
    if settings.store_backend.lower() == "local":
        logger.info(
            "[LOCAL STORE] Using in-process record store (STORE_BACKEND=local)",
            extra={"store_backend": "local"},
        )
        # Import here to keep the dev-only backend out of the production path
        from app.api.db.memory import create_memory_store
        return create_memory_store()

    logger.info(
        "[SUPABASE] Using Supabase record store (STORE_BACKEND=supabase)",
        extra={"store_backend": "supabase"},
    )
    return create_supabase_store(settings)
