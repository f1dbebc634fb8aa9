"""SQLite storage implementations."""

from nexus_ledger.infrastructure.storage.sqlite.connection import ConnectionPool
from nexus_ledger.infrastructure.storage.sqlite.kv_store import SQLiteKeyValueStore

__all__ = [
    "ConnectionPool",
    "SQLiteKeyValueStore",
]
