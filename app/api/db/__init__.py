from .client import (
    Collection,
    RecordStore,
    SupabaseCollection,
    TODO_COLLECTION,
    USER_COLLECTION,
    create_record_store,
    create_supabase_store,
)
from .memory import MemoryCollection, create_memory_store

__all__ = [
    "Collection",
    "RecordStore",
    "SupabaseCollection",
    "MemoryCollection",
    "TODO_COLLECTION",
    "USER_COLLECTION",
    "create_record_store",
    "create_supabase_store",
    "create_memory_store",
]
