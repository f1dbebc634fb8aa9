"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from nexus_ledger.api.dependencies import get_app_settings, get_store
from nexus_ledger.api.main import app
from nexus_ledger.application.ledger_store import LedgerStore


@pytest.fixture
async def api_client(seeded_store: LedgerStore) -> AsyncGenerator[AsyncClient, None]:
    """Client against the app with the seeded ledger injected."""
    get_app_settings.cache_clear()
    seeded_store.loaded = True
    app.dependency_overrides[get_store] = lambda: seeded_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def receive(api_client: AsyncClient):
    """Post an IN movement; keyword arguments override the request body."""

    async def _receive(**overrides) -> dict:
        body = {
            "movement_type": "IN",
            "product_id": "P-RESALE",
            "quantity": 100,
            "warehouse_id": "WH1",
            "unit_cost": "10.00",
            "reference_doc_id": "PO-1",
        }
        body.update(overrides)
        response = await api_client.post("/api/inventory/movements", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _receive
