"""Manage Accounts Use Cases: create, update and delete vendors and clients."""

from nexus_ledger.application.dto.requests import (
    CreateClientRequest,
    CreateVendorRequest,
    UpdateClientRequest,
    UpdateVendorRequest,
)
from nexus_ledger.application.dto.responses import ClientResponse, VendorResponse
from nexus_ledger.application.ledger_store import ACCOUNT_KEYS, LedgerStore
from nexus_ledger.core.entities import Account, Client, EntityType, Vendor


def account_response(account: Account) -> VendorResponse | ClientResponse:
    """Map a vendor or client to its response DTO."""
    if isinstance(account, Vendor):
        return VendorResponse.model_validate(account)
    return ClientResponse.model_validate(account)


class CreateAccountUseCase:
    """
    Create a vendor or client.

    The account starts at zero; an opening balance is posted as a debit or
    credit note so the balance stays reproducible from history.
    """

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: CreateVendorRequest | CreateClientRequest) -> Account:
        store = await self._get_ledger_store()
        fields = request.model_dump(exclude={"opening_balance"})

        if isinstance(request, CreateVendorRequest):
            async with store.locks.hold(f"account:{EntityType.VENDOR.value}:{request.id}"):
                account: Account = store.tracker.create_vendor(
                    Vendor(**fields), request.opening_balance
                )
                await store.flush(*ACCOUNT_KEYS)
        else:
            async with store.locks.hold(f"account:{EntityType.CLIENT.value}:{request.id}"):
                account = store.tracker.create_client(Client(**fields), request.opening_balance)
                await store.flush(*ACCOUNT_KEYS)

        return account

    def to_response(self, account: Account) -> VendorResponse | ClientResponse:
        return account_response(account)


class UpdateAccountUseCase:
    """Apply a partial update to a vendor or client; balances are not editable."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(
        self,
        entity_type: EntityType,
        entity_id: str,
        request: UpdateVendorRequest | UpdateClientRequest,
    ) -> Account:
        store = await self._get_ledger_store()
        changes = request.model_dump(exclude_unset=True)

        async with store.locks.hold(f"account:{entity_type.value}:{entity_id}"):
            if entity_type == EntityType.VENDOR:
                account: Account = store.tracker.update_vendor(entity_id, changes)
            else:
                account = store.tracker.update_client(entity_id, changes)
            await store.flush(*ACCOUNT_KEYS)

        return account

    def to_response(self, account: Account) -> VendorResponse | ClientResponse:
        return account_response(account)


class DeleteAccountUseCase:
    """Remove a vendor or client. Its transactions stay in the history and its id stays reserved."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, entity_type: EntityType, entity_id: str) -> None:
        store = await self._get_ledger_store()
        async with store.locks.hold(f"account:{entity_type.value}:{entity_id}"):
            if entity_type == EntityType.VENDOR:
                store.tracker.delete_vendor(entity_id)
            else:
                store.tracker.delete_client(entity_id)
            await store.flush(*ACCOUNT_KEYS)
