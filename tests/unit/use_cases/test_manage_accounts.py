"""Unit tests for account and catalog use cases."""

from decimal import Decimal

import pytest

from nexus_ledger.application.dto.requests import (
    CreateClientRequest,
    CreateDepartmentRequest,
    CreateProductRequest,
    CreateVendorRequest,
    UpdateClientRequest,
    UpdateVendorRequest,
)
from nexus_ledger.application.dto.responses import ClientResponse, VendorResponse
from nexus_ledger.application.use_cases import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    RegisterDepartmentUseCase,
    RegisterProductUseCase,
    UpdateAccountUseCase,
)
from nexus_ledger.core.entities import EntityType, PaymentTerms, ProductType
from nexus_ledger.core.exceptions import DuplicateEntityError, VendorNotFoundError
from nexus_ledger.core.interfaces.storage import (
    CLIENTS,
    DEPARTMENTS,
    PRODUCTS,
    TRANSACTIONS,
    VENDORS,
)


class TestCreateAccountUseCase:
    @pytest.mark.asyncio
    async def test_create_vendor(self, ledger_store, kv_store):
        use_case = CreateAccountUseCase(ledger_store=ledger_store)
        vendor = await use_case.execute(
            CreateVendorRequest(
                id="V-9",
                name="Ninth Supplier",
                payment_terms=PaymentTerms.HYBRID_SALES_LINKED,
                cash_percentage=Decimal("40"),
            )
        )
        response = use_case.to_response(vendor)
        assert isinstance(response, VendorResponse)
        assert response.cash_percentage == Decimal("40")
        assert [v["id"] for v in await kv_store.load(VENDORS)] == ["V-9"]

    @pytest.mark.asyncio
    async def test_create_client_with_opening_balance(self, ledger_store, kv_store):
        use_case = CreateAccountUseCase(ledger_store=ledger_store)
        client = await use_case.execute(
            CreateClientRequest(id="C-9", name="Ninth Client", opening_balance=Decimal("125.50"))
        )
        assert isinstance(use_case.to_response(client), ClientResponse)
        assert client.current_balance == Decimal("125.50")
        (opening,) = await kv_store.load(TRANSACTIONS)
        assert opening["transaction_type"] == "DEBIT_NOTE"
        assert len(await kv_store.load(CLIENTS)) == 1

    @pytest.mark.asyncio
    async def test_duplicate(self, seeded_store):
        use_case = CreateAccountUseCase(ledger_store=seeded_store)
        with pytest.raises(DuplicateEntityError):
            await use_case.execute(CreateClientRequest(id="C-1", name="Copy"))


class TestUpdateAccountUseCase:
    @pytest.mark.asyncio
    async def test_only_set_fields_change(self, seeded_store):
        use_case = UpdateAccountUseCase(ledger_store=seeded_store)
        vendor = await use_case.execute(
            EntityType.VENDOR, "V-HYBRID", UpdateVendorRequest(phone="555-0199")
        )
        assert vendor.phone == "555-0199"
        assert vendor.cash_percentage == Decimal("30")

    @pytest.mark.asyncio
    async def test_explicit_null_clears_credit_limit(self, seeded_store):
        use_case = UpdateAccountUseCase(ledger_store=seeded_store)
        client = await use_case.execute(
            EntityType.CLIENT, "C-1", UpdateClientRequest(credit_limit=None)
        )
        assert client.credit_limit is None

    @pytest.mark.asyncio
    async def test_unknown_vendor(self, seeded_store):
        use_case = UpdateAccountUseCase(ledger_store=seeded_store)
        with pytest.raises(VendorNotFoundError):
            await use_case.execute(EntityType.VENDOR, "V-404", UpdateVendorRequest(name="X"))


class TestDeleteAccountUseCase:
    @pytest.mark.asyncio
    async def test_delete_persists(self, seeded_store, kv_store):
        await DeleteAccountUseCase(ledger_store=seeded_store).execute(EntityType.VENDOR, "V-CASH")
        assert "V-CASH" not in {v["id"] for v in await kv_store.load(VENDORS)}


class TestRegisterCatalogEntries:
    @pytest.mark.asyncio
    async def test_register_product(self, ledger_store, kv_store):
        use_case = RegisterProductUseCase(ledger_store=ledger_store)
        product = await use_case.execute(
            CreateProductRequest(id="P-9", sku="AS-9", name="Forklift", product_type=ProductType.ASSET)
        )
        assert use_case.to_response(product).product_type == ProductType.ASSET
        assert (await kv_store.load(PRODUCTS))[0]["product_type"] == "ASSET"

    @pytest.mark.asyncio
    async def test_register_department(self, ledger_store, kv_store):
        use_case = RegisterDepartmentUseCase(ledger_store=ledger_store)
        department = await use_case.execute(
            CreateDepartmentRequest(id="D-9", name="Lab", budget_cap=Decimal("250"))
        )
        assert use_case.to_response(department).budget_cap == Decimal("250")
        assert (await kv_store.load(DEPARTMENTS))[0]["id"] == "D-9"
