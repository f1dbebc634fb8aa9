"""Tests for the management CLI commands that read the ledger."""

import asyncio
from datetime import date, timedelta
from decimal import Decimal

import pytest

import manage
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.core.entities import Client, Vendor
from nexus_ledger.core.interfaces.storage import VENDORS
from nexus_ledger.infrastructure.storage import create_key_value_store


@pytest.fixture
def sqlite_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))


async def _populate(drift: bool = False) -> None:
    store = LedgerStore(create_key_value_store())
    await store.load()
    store.tracker.create_vendor(Vendor(id="V1", name="Supplier"), opening_balance=Decimal("40"))
    client = store.tracker.create_client(Client(id="C1", name="Shop", collection_period_days=0))
    store.tracker.post_invoice(client, Decimal("75"))
    await store.flush()
    if drift:
        vendors = [v.model_dump(mode="json") for v in store.tracker.vendors_snapshot()]
        vendors[0]["current_balance"] = "41.00"
        await store._kv.save(VENDORS, vendors)
    await store.close()


class TestVerifyBalances:
    def test_consistent(self, sqlite_env, capsys):
        asyncio.run(_populate())
        manage.main(["verify"])
        assert "All balances consistent." in capsys.readouterr().out

    def test_drift_exits_nonzero(self, sqlite_env, capsys):
        asyncio.run(_populate(drift=True))
        with pytest.raises(SystemExit) as exc_info:
            manage.main(["verify"])
        assert exc_info.value.code == 1
        assert "VENDOR V1: stored 41.00, replayed 40.00" in capsys.readouterr().out


class TestAgingLines:
    def test_lines(self, sqlite_env):
        asyncio.run(_populate())
        lines = asyncio.run(manage.aging_lines(date.today() + timedelta(days=365)))
        assert lines[-1] == "Total: 75.00"
        assert lines[2] == "61+:   75.00"

    def test_aging_command(self, sqlite_env, capsys):
        asyncio.run(_populate())
        manage.main(["aging", "--as-of", "2000-01-01"])
        assert "Total: 0" in capsys.readouterr().out
