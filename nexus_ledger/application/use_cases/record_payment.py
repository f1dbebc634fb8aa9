"""Record Payment Use Cases: payments and return/credit/debit notes."""

from nexus_ledger.application.dto.requests import PostNoteRequest, RecordPaymentRequest
from nexus_ledger.application.dto.responses import FinancialTransactionResponse
from nexus_ledger.application.ledger_store import ACCOUNT_KEYS, LedgerStore
from nexus_ledger.core.entities import EntityType, FinancialTransaction, TransactionType


class RecordPaymentUseCase:
    """Record a payment to a vendor or from a client."""

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
        request: RecordPaymentRequest,
    ) -> FinancialTransaction:
        """
        Execute record payment use case.

        Args:
            entity_type: VENDOR or CLIENT
            entity_id: Account ID
            request: Amount, reference and optional date

        Returns:
            The PAYMENT transaction

        Raises:
            VendorNotFoundError / ClientNotFoundError: unknown account
            ValidationError: non-positive amount
        """
        store = await self._get_ledger_store()

        async with store.locks.hold(f"account:{entity_type.value}:{entity_id}"):
            account = store.tracker.get_account(entity_type, entity_id)
            transaction = store.tracker.post_payment(
                account,
                request.amount,
                reference_doc_id=request.reference_doc_id,
                notes=request.notes,
                transaction_date=request.transaction_date,
            )
            await store.flush(*ACCOUNT_KEYS)

        return transaction

    def to_response(self, transaction: FinancialTransaction) -> FinancialTransactionResponse:
        return FinancialTransactionResponse.model_validate(transaction)


class PostNoteUseCase:
    """Record a RETURN, CREDIT_NOTE or DEBIT_NOTE against an account."""

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
        request: PostNoteRequest,
    ) -> FinancialTransaction:
        store = await self._get_ledger_store()

        async with store.locks.hold(f"account:{entity_type.value}:{entity_id}"):
            account = store.tracker.get_account(entity_type, entity_id)
            transaction = store.tracker.post_note(
                account,
                TransactionType(request.transaction_type),
                request.amount,
                reference_doc_id=request.reference_doc_id,
                notes=request.notes,
                transaction_date=request.transaction_date,
            )
            await store.flush(*ACCOUNT_KEYS)

        return transaction

    def to_response(self, transaction: FinancialTransaction) -> FinancialTransactionResponse:
        return FinancialTransactionResponse.model_validate(transaction)
