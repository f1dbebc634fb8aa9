"""Persistence collaborators."""

from nexus_ledger.config import get_settings
from nexus_ledger.core.interfaces.storage import IKeyValueStore
from nexus_ledger.infrastructure.storage.memory_store import InMemoryKeyValueStore
from nexus_ledger.infrastructure.storage.sqlite import SQLiteKeyValueStore


def create_key_value_store() -> IKeyValueStore:
    """Build the store selected by STORAGE_BACKEND."""
    settings = get_settings().storage
    if settings.backend == "sqlite":
        return SQLiteKeyValueStore(
            settings.db_path,
            pool_size=settings.pool_size,
            busy_timeout=settings.busy_timeout,
        )
    return InMemoryKeyValueStore()


__all__ = [
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "create_key_value_store",
]
