"""
In-process record store for local/dev testing.

Behaves like the Supabase tables for the operations the API uses:
- ids are UUID strings assigned on insert
- datetimes are stored as ISO-8601 strings
- each call is atomic with respect to concurrent requests

Gated behind STORE_BACKEND=local.
Data lives only as long as the process.
"""

import copy
import threading
import uuid

from .client import Filter, Record, RecordStore, TODO_COLLECTION, USER_COLLECTION, encode_record


class MemoryCollection:
    def __init__(self, name: str):
        self.name = name
        self._records: dict[str, Record] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _matches(record: Record, filter: Filter) -> bool:
        return all(record.get(key) == value for key, value in filter.items())

    def _first(self, filter: Filter) -> Record | None:
        filter = encode_record(filter)
        for record in self._records.values():
            if self._matches(record, filter):
                return record
        return None

    def find_one(self, filter: Filter) -> Record | None:
        with self._lock:
            record = self._first(filter)
            return copy.deepcopy(record) if record else None

    def find_many(self, filter: Filter) -> list[Record]:
        filter = encode_record(filter)
        with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._records.values()
                if self._matches(record, filter)
            ]

    def insert(self, record: Record) -> Record:
        stored = encode_record(record)
        stored["id"] = str(uuid.uuid4())
        with self._lock:
            self._records[stored["id"]] = stored
            return copy.deepcopy(stored)

    def update_one(self, filter: Filter, patch: Record) -> Record | None:
        patch = {k: v for k, v in encode_record(patch).items() if k != "id"}
        with self._lock:
            record = self._first(filter)
            if record is None:
                return None
            record.update(patch)
            return copy.deepcopy(record)

    def delete_one(self, filter: Filter) -> Record | None:
        with self._lock:
            record = self._first(filter)
            if record is None:
                return None
            return self._records.pop(record["id"])

    def __len__(self) -> int:
        return len(self._records)


def create_memory_store() -> RecordStore:
    return RecordStore(
        users=MemoryCollection(USER_COLLECTION),
        todos=MemoryCollection(TODO_COLLECTION),
    )
