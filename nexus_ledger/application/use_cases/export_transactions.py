"""Export Transactions Use Case: transaction history as CSV."""

from datetime import date

from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.config import get_logger
from nexus_ledger.core.entities import EntityType, TransactionType
from nexus_ledger.infrastructure.export import CsvExporter

logger = get_logger(__name__)

TRANSACTION_COLUMNS: list[tuple[str, str]] = [
    ("transaction_date", "Date"),
    ("id", "Transaction ID"),
    ("entity_type", "Entity Type"),
    ("entity_id", "Entity ID"),
    ("entity_name", "Entity Name"),
    ("transaction_type", "Type"),
    ("amount", "Amount"),
    ("cash_portion", "Cash Portion"),
    ("balance_after", "Balance After"),
    ("reference_doc_id", "Reference"),
    ("due_date", "Due Date"),
    ("paid_date", "Paid Date"),
    ("notes", "Notes"),
]


class ExportTransactionsUseCase:
    """Render filtered transactions as CSV text, newest first."""

    def __init__(
        self,
        ledger_store: LedgerStore | None = None,
        exporter: CsvExporter | None = None,
    ):
        self._ledger_store = ledger_store
        self._exporter = exporter or CsvExporter()

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(
        self,
        entity_type: EntityType | None = None,
        transaction_type: TransactionType | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> str:
        store = await self._get_ledger_store()
        transactions = store.analyzer.list_transactions(
            entity_type, transaction_type, date_from, date_to
        )
        csv_text = self._exporter.export(
            (dict(t) for t in transactions),
            TRANSACTION_COLUMNS,
        )
        logger.info("transactions_exported", rows=len(transactions))
        return csv_text
