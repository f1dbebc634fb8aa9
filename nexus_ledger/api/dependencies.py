"""
Dependency injection container for FastAPI.

Provides the ledger store and use case instances to route handlers.
"""

from functools import lru_cache

from fastapi import Depends

from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.services import get_ledger_store
from nexus_ledger.application.use_cases import (
    CollectionReportUseCase,
    CreateAccountUseCase,
    DeleteAccountUseCase,
    ExportTransactionsUseCase,
    PostNoteUseCase,
    RecordMovementUseCase,
    RecordPaymentUseCase,
    RegisterDepartmentUseCase,
    RegisterProductUseCase,
    ReserveStockUseCase,
    StatementOfAccountUseCase,
    UpdateAccountUseCase,
    ValidateOrderUseCase,
)
from nexus_ledger.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


async def get_store() -> LedgerStore:
    """Get the loaded ledger store."""
    return await get_ledger_store()


# Use case dependencies
def get_record_movement_use_case(
    store: LedgerStore = Depends(get_store),
) -> RecordMovementUseCase:
    return RecordMovementUseCase(store)


def get_reserve_stock_use_case(
    store: LedgerStore = Depends(get_store),
) -> ReserveStockUseCase:
    return ReserveStockUseCase(store)


def get_register_product_use_case(
    store: LedgerStore = Depends(get_store),
) -> RegisterProductUseCase:
    return RegisterProductUseCase(store)


def get_register_department_use_case(
    store: LedgerStore = Depends(get_store),
) -> RegisterDepartmentUseCase:
    return RegisterDepartmentUseCase(store)


def get_create_account_use_case(
    store: LedgerStore = Depends(get_store),
) -> CreateAccountUseCase:
    return CreateAccountUseCase(store)


def get_update_account_use_case(
    store: LedgerStore = Depends(get_store),
) -> UpdateAccountUseCase:
    return UpdateAccountUseCase(store)


def get_delete_account_use_case(
    store: LedgerStore = Depends(get_store),
) -> DeleteAccountUseCase:
    return DeleteAccountUseCase(store)


def get_record_payment_use_case(
    store: LedgerStore = Depends(get_store),
) -> RecordPaymentUseCase:
    return RecordPaymentUseCase(store)


def get_post_note_use_case(
    store: LedgerStore = Depends(get_store),
) -> PostNoteUseCase:
    return PostNoteUseCase(store)


def get_statement_use_case(
    store: LedgerStore = Depends(get_store),
) -> StatementOfAccountUseCase:
    return StatementOfAccountUseCase(store)


def get_collection_report_use_case(
    store: LedgerStore = Depends(get_store),
) -> CollectionReportUseCase:
    return CollectionReportUseCase(store)


def get_validate_order_use_case(
    store: LedgerStore = Depends(get_store),
) -> ValidateOrderUseCase:
    return ValidateOrderUseCase(store)


def get_export_transactions_use_case(
    store: LedgerStore = Depends(get_store),
) -> ExportTransactionsUseCase:
    return ExportTransactionsUseCase(store)
