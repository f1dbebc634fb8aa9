"""Tests for the in-memory key-value store."""

import pytest

from nexus_ledger.infrastructure.storage import (
    InMemoryKeyValueStore,
    SQLiteKeyValueStore,
    create_key_value_store,
)


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_missing_key(self):
        assert await InMemoryKeyValueStore().load("vendors") is None

    @pytest.mark.asyncio
    async def test_initial_contents(self):
        store = InMemoryKeyValueStore({"products": [{"id": "P-1"}]})
        assert await store.load("products") == [{"id": "P-1"}]

    @pytest.mark.asyncio
    async def test_returned_collections_are_copies(self):
        """Mutating a loaded or saved list does not change stored data."""
        store = InMemoryKeyValueStore()
        saved = [{"id": "C-1"}]
        await store.save("clients", saved)
        saved[0]["id"] = "changed"

        loaded = await store.load("clients")
        loaded.append({"id": "C-2"})
        assert await store.load("clients") == [{"id": "C-1"}]

    @pytest.mark.asyncio
    async def test_close_is_noop(self):
        await InMemoryKeyValueStore().close()


class TestCreateKeyValueStore:
    def test_memory_backend(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        assert isinstance(create_key_value_store(), InMemoryKeyValueStore)

    def test_sqlite_backend(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
        assert isinstance(create_key_value_store(), SQLiteKeyValueStore)
