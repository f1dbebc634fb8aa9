"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from nexus_ledger.infrastructure.storage.sqlite import SQLiteKeyValueStore


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def sqlite_store(temp_db_path: Path) -> AsyncGenerator[SQLiteKeyValueStore, None]:
    """Key-value store over a fresh database file."""
    store = SQLiteKeyValueStore(temp_db_path, pool_size=1)
    yield store
    await store.close()
