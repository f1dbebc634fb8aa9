"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.services import reset_ledger_store
from nexus_ledger.config import Settings, reset_settings
from nexus_ledger.core.entities import (
    Client,
    Department,
    PaymentTerms,
    Product,
    ProductType,
    Vendor,
)
from nexus_ledger.infrastructure.storage import InMemoryKeyValueStore

# Day 0 of the collection scenarios
DAY_ZERO = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Each test starts with fresh settings and no cached ledger store."""
    reset_settings()
    reset_ledger_store()
    yield
    reset_settings()
    reset_ledger_store()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def ledger_store(kv_store: InMemoryKeyValueStore, settings: Settings) -> LedgerStore:
    """Empty ledger pinned to DAY_ZERO, evaluated as of day 20."""
    return LedgerStore(
        kv_store,
        settings,
        clock=lambda: DAY_ZERO,
        today=lambda: date(2024, 1, 21),
    )


@pytest.fixture
def seeded_store(ledger_store: LedgerStore) -> LedgerStore:
    """Ledger with one product of each kind, a department, vendors and a client."""
    catalog = ledger_store.catalog
    catalog.add_product(Product(id="P-RESALE", sku="RS-001", name="Widget"))
    catalog.add_product(
        Product(
            id="P-CONS",
            sku="CS-001",
            name="Printer Paper",
            product_type=ProductType.CONSUMABLE,
            min_reorder_level=20,
        )
    )
    catalog.add_department(
        Department(id="D-OPS", name="Operations", budget_cap=Decimal("500.00"))
    )

    tracker = ledger_store.tracker
    tracker.create_vendor(Vendor(id="V-CASH", name="Cash Supplier", payment_terms=PaymentTerms.CASH))
    tracker.create_vendor(Vendor(id="V-CREDIT", name="Credit Supplier"))
    tracker.create_vendor(
        Vendor(
            id="V-HYBRID",
            name="Hybrid Supplier",
            payment_terms=PaymentTerms.HYBRID_SALES_LINKED,
            cash_percentage=Decimal("30"),
            commission_per_unit=Decimal("1.25"),
        )
    )
    tracker.create_client(
        Client(
            id="C-1",
            name="Acme Retail",
            collection_period_days=15,
            credit_limit=Decimal("10000.00"),
        )
    )
    return ledger_store
