"""
Ledger store.

Owns the in-memory engine (ledger, catalog, tracker, recorder, analyzer) and
its persistence collaborator. Constructed once at process start: load()
hydrates the engine from the collaborator, flush() writes changed collections
back after each mutation.
"""

import asyncio
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

from nexus_ledger.application.locking import KeyedLockRegistry
from nexus_ledger.config import Settings, get_logger, get_settings
from nexus_ledger.core.entities import (
    Client,
    Department,
    FinancialTransaction,
    MovementRecord,
    Product,
    StockPosition,
    Vendor,
)
from nexus_ledger.core.interfaces.storage import (
    ALL_COLLECTIONS,
    CLIENTS,
    DEPARTMENTS,
    MOVEMENTS,
    PRODUCTS,
    STOCK_POSITIONS,
    TRANSACTIONS,
    VENDORS,
    IKeyValueStore,
)
from nexus_ledger.core.services import (
    AccountBalanceTracker,
    Catalog,
    CollectionAnalyzer,
    MovementRecorder,
    StockLedger,
)

logger = get_logger(__name__)


class LedgerStore:
    """Engine state plus its persistence lifecycle."""

    def __init__(
        self,
        kv_store: IKeyValueStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._kv = kv_store
        self._settings = settings or get_settings()
        self._clock = clock
        self._today = today
        self._flush_lock = asyncio.Lock()
        self.locks = KeyedLockRegistry()
        self.loaded = False
        self._build({})

    def _build(self, collections: dict[str, list[dict[str, Any]]]) -> None:
        ledger_settings = self._settings.ledger

        def hydrate(key: str, model: type[BaseModel]) -> list[Any]:
            return [model.model_validate(item) for item in collections.get(key) or []]

        self.ledger = StockLedger(hydrate(STOCK_POSITIONS, StockPosition))
        self.catalog = Catalog(hydrate(PRODUCTS, Product), hydrate(DEPARTMENTS, Department))
        self.tracker = AccountBalanceTracker(
            vendors=hydrate(VENDORS, Vendor),
            clients=hydrate(CLIENTS, Client),
            transactions=hydrate(TRANSACTIONS, FinancialTransaction),
            money_places=ledger_settings.money_places,
            clock=self._clock,
        )
        self.recorder = MovementRecorder(
            self.ledger,
            self.tracker,
            self.catalog,
            movements=hydrate(MOVEMENTS, MovementRecord),
            money_places=ledger_settings.money_places,
            cost_places=ledger_settings.cost_places,
            budget_policy=ledger_settings.budget_policy,
            enforce_credit_limit=ledger_settings.enforce_credit_limit,
            default_actor=ledger_settings.default_actor,
            clock=self._clock,
        )
        self.analyzer = CollectionAnalyzer(self.tracker, today=self._today)

    async def load(self) -> None:
        """Hydrate the engine from the persistence collaborator."""
        collections: dict[str, list[dict[str, Any]]] = {}
        for key in ALL_COLLECTIONS:
            collection = await self._kv.load(key)
            if collection is not None:
                collections[key] = collection
        self._build(collections)
        self.loaded = True
        logger.info(
            "ledger_loaded",
            **{key: len(collections.get(key, [])) for key in ALL_COLLECTIONS},
        )

    def _serialize(self, key: str) -> list[dict[str, Any]]:
        items: list[BaseModel]
        if key == STOCK_POSITIONS:
            items = list(self.ledger.snapshot())
        elif key == MOVEMENTS:
            items = list(self.recorder.movements)
        elif key == TRANSACTIONS:
            items = list(self.tracker.transactions)
        elif key == VENDORS:
            items = list(self.tracker.vendors_snapshot())
        elif key == CLIENTS:
            items = list(self.tracker.clients_snapshot())
        elif key == PRODUCTS:
            items = list(self.catalog.products.values())
        elif key == DEPARTMENTS:
            items = list(self.catalog.departments.values())
        else:
            raise KeyError(key)
        return [item.model_dump(mode="json") for item in items]

    async def flush(self, *keys: str) -> None:
        """
        Persist the named collections (all of them when none are named).

        Snapshots are taken inside the flush lock, so a later flush always
        writes state at least as new as an earlier one.
        """
        targets = keys or ALL_COLLECTIONS
        async with self._flush_lock:
            for key in targets:
                await self._kv.save(key, self._serialize(key))
        logger.debug("ledger_flushed", keys=list(targets))

    async def close(self) -> None:
        await self._kv.close()


# Collections touched by each kind of mutation
STOCK_KEYS = (STOCK_POSITIONS, MOVEMENTS)
ACCOUNT_KEYS = (VENDORS, CLIENTS, TRANSACTIONS)
CATALOG_KEYS = (PRODUCTS, DEPARTMENTS)
