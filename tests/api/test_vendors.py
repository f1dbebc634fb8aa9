"""API tests for vendor endpoints."""

from httpx import AsyncClient


class TestVendorAccounts:
    async def test_create_with_opening_balance(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/vendors",
            json={"id": "V-NEW", "name": "New Supplier", "opening_balance": "120.00"},
        )
        assert response.status_code == 201
        assert response.json()["current_balance"] == "120.00"

        check = (await api_client.get("/api/vendors/V-NEW/balance-check")).json()
        assert check["consistent"] is True
        assert check["replayed_balance"] == "120.00"

    async def test_list_sorted_by_name(self, api_client: AsyncClient):
        data = (await api_client.get("/api/vendors")).json()
        assert [v["id"] for v in data] == ["V-CASH", "V-CREDIT", "V-HYBRID"]

    async def test_active_only(self, api_client: AsyncClient):
        await api_client.patch("/api/vendors/V-CASH", json={"is_active": False})
        data = (await api_client.get("/api/vendors", params={"active_only": True})).json()
        assert "V-CASH" not in [v["id"] for v in data]

    async def test_cash_percentage_range(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/vendors", json={"id": "V-BAD", "name": "Bad", "cash_percentage": "120"}
        )
        assert response.status_code == 422

    async def test_balance_not_patchable(self, api_client: AsyncClient):
        response = await api_client.patch("/api/vendors/V-CREDIT", json={"current_balance": "5"})
        assert response.status_code == 200
        assert response.json()["current_balance"] == "0"

    async def test_delete(self, api_client: AsyncClient):
        response = await api_client.delete("/api/vendors/V-CREDIT")
        assert response.status_code == 204
        assert (await api_client.get("/api/vendors/V-CREDIT")).status_code == 404


class TestVendorPostings:
    async def test_payment_after_credit_receipt(self, api_client: AsyncClient, receive):
        await receive(vendor_id="V-CREDIT")
        response = await api_client.post(
            "/api/vendors/V-CREDIT/payments", json={"amount": "400.00", "reference_doc_id": "CHQ-1"}
        )
        assert response.status_code == 201
        assert response.json()["balance_after"] == "600.00"

    async def test_non_positive_payment(self, api_client: AsyncClient):
        response = await api_client.post("/api/vendors/V-CREDIT/payments", json={"amount": "0"})
        assert response.status_code == 422

    async def test_return_note(self, api_client: AsyncClient, receive):
        await receive(vendor_id="V-CREDIT")
        response = await api_client.post(
            "/api/vendors/V-CREDIT/notes", json={"transaction_type": "RETURN", "amount": "100"}
        )
        assert response.status_code == 201
        assert response.json()["balance_after"] == "900.00"

    async def test_invoice_note_type_rejected(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/vendors/V-CREDIT/notes", json={"transaction_type": "INVOICE", "amount": "1"}
        )
        assert response.status_code == 422

    async def test_statement(self, api_client: AsyncClient, receive):
        await receive(vendor_id="V-HYBRID", unit_cost="50.00")
        await api_client.post("/api/vendors/V-HYBRID/payments", json={"amount": "500"})
        data = (await api_client.get("/api/vendors/V-HYBRID/statement")).json()
        assert data["current_balance"] == "3000.00"
        assert [t["transaction_type"] for t in data["transactions"]] == ["PAYMENT", "INVOICE"]

    async def test_sales_linked_payment(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/vendors/V-HYBRID/sales-linked-payment", json={"units_sold": 40}
        )
        assert response.json()["amount"] == "50.00"

    async def test_unknown_vendor_payment(self, api_client: AsyncClient):
        response = await api_client.post("/api/vendors/V-404/payments", json={"amount": "1"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "VENDOR_NOT_FOUND"
