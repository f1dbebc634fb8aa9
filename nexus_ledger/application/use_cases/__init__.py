"""Application use cases."""

from nexus_ledger.application.use_cases.collection_report import (
    CollectionReport,
    CollectionReportUseCase,
)
from nexus_ledger.application.use_cases.export_transactions import ExportTransactionsUseCase
from nexus_ledger.application.use_cases.manage_accounts import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    UpdateAccountUseCase,
)
from nexus_ledger.application.use_cases.record_movement import RecordMovementUseCase
from nexus_ledger.application.use_cases.record_payment import (
    PostNoteUseCase,
    RecordPaymentUseCase,
)
from nexus_ledger.application.use_cases.register_catalog_entry import (
    RegisterDepartmentUseCase,
    RegisterProductUseCase,
)
from nexus_ledger.application.use_cases.reserve_stock import ReserveStockUseCase
from nexus_ledger.application.use_cases.statement_of_account import (
    Statement,
    StatementOfAccountUseCase,
)
from nexus_ledger.application.use_cases.validate_order import ValidateOrderUseCase

__all__ = [
    "RecordMovementUseCase",
    "ReserveStockUseCase",
    "RegisterProductUseCase",
    "RegisterDepartmentUseCase",
    "CreateAccountUseCase",
    "UpdateAccountUseCase",
    "DeleteAccountUseCase",
    "RecordPaymentUseCase",
    "PostNoteUseCase",
    "CollectionReportUseCase",
    "CollectionReport",
    "ValidateOrderUseCase",
    "StatementOfAccountUseCase",
    "Statement",
    "ExportTransactionsUseCase",
]
