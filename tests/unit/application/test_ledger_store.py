"""Tests for the ledger store lifecycle."""

from datetime import date
from decimal import Decimal

import pytest

from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.services import (
    close_ledger_store,
    get_ledger_store,
)
from nexus_ledger.core.entities import EntityType, MovementType, ProductType
from nexus_ledger.core.interfaces.storage import (
    ALL_COLLECTIONS,
    MOVEMENTS,
    STOCK_POSITIONS,
    VENDORS,
)
from nexus_ledger.core.services.movement_recorder import MovementRequest
from nexus_ledger.infrastructure.storage import InMemoryKeyValueStore


def _receive(store: LedgerStore, quantity: int = 10) -> None:
    store.recorder.record(
        MovementRequest(
            movement_type=MovementType.IN,
            product_id="P-RESALE",
            quantity=quantity,
            warehouse_id="WH1",
            unit_cost=Decimal("2.50"),
            reference_doc_id="PO-9",
            vendor_id="V-HYBRID",
        )
    )


class TestLedgerStore:
    def test_starts_empty(self, ledger_store):
        assert ledger_store.loaded is False
        assert ledger_store.ledger.snapshot() == []
        assert ledger_store.catalog.list_products() == []

    @pytest.mark.asyncio
    async def test_load_of_empty_backend(self, ledger_store):
        await ledger_store.load()
        assert ledger_store.loaded is True
        assert ledger_store.tracker.list_clients() == []

    @pytest.mark.asyncio
    async def test_flush_writes_only_named_collections(self, seeded_store, kv_store):
        await seeded_store.flush(VENDORS)
        assert len(await kv_store.load(VENDORS)) == 3
        assert await kv_store.load(MOVEMENTS) is None

    @pytest.mark.asyncio
    async def test_flush_serializes_json_values(self, seeded_store, kv_store):
        _receive(seeded_store)
        await seeded_store.flush(STOCK_POSITIONS)
        (position,) = await kv_store.load(STOCK_POSITIONS)
        assert position["average_cost"] == "2.500000"
        assert isinstance(position["updated_at"], str)

    @pytest.mark.asyncio
    async def test_round_trip_through_backend(self, seeded_store, kv_store, settings):
        """A fresh store loaded from the same backend sees identical state."""
        _receive(seeded_store)
        await seeded_store.flush()
        for key in ALL_COLLECTIONS:
            assert await kv_store.load(key) is not None

        reloaded = LedgerStore(kv_store, settings, today=lambda: date(2024, 1, 21))
        await reloaded.load()

        position = reloaded.ledger.get_position("P-RESALE", "WH1")
        assert position.quantity_on_hand == 10
        assert position.average_cost == Decimal("2.50")
        assert reloaded.catalog.get_product("P-CONS").product_type == ProductType.CONSUMABLE
        assert reloaded.tracker.get_vendor("V-HYBRID").current_balance == Decimal("17.50")
        assert reloaded.tracker.verify_balance(EntityType.VENDOR, "V-HYBRID")
        assert len(reloaded.recorder.movements) == 1
        assert reloaded.tracker.transactions == seeded_store.tracker.transactions

    @pytest.mark.asyncio
    async def test_reload_continues_posting(self, seeded_store, kv_store, settings):
        _receive(seeded_store)
        await seeded_store.flush()

        reloaded = LedgerStore(kv_store, settings)
        await reloaded.load()
        _receive(reloaded, quantity=30)
        position = reloaded.ledger.get_position("P-RESALE", "WH1")
        assert position.quantity_on_hand == 40
        assert reloaded.tracker.verify_balance(EntityType.VENDOR, "V-HYBRID")

    def test_unknown_collection_key(self, ledger_store):
        with pytest.raises(KeyError):
            ledger_store._serialize("nope")


class TestLedgerStoreSingleton:
    @pytest.mark.asyncio
    async def test_get_returns_loaded_singleton(self, kv_store):
        store = await get_ledger_store(kv_store)
        assert store.loaded is True
        assert await get_ledger_store() is store

    @pytest.mark.asyncio
    async def test_close_flushes_and_clears(self):
        backend = InMemoryKeyValueStore()
        store = await get_ledger_store(backend)
        await close_ledger_store()
        assert await backend.load(VENDORS) == []
        assert await get_ledger_store(backend) is not store

    @pytest.mark.asyncio
    async def test_close_without_store(self):
        await close_ledger_store()
