"""Record Movement Use Case: IN, OUT, TRANSFER, ADJUSTMENT and CONSUMPTION."""

from nexus_ledger.application.dto.requests import RecordMovementRequest
from nexus_ledger.application.dto.responses import (
    FinancialTransactionResponse,
    MovementRecordResponse,
    RecordMovementResponse,
    StockPositionResponse,
)
from nexus_ledger.application.ledger_store import ACCOUNT_KEYS, STOCK_KEYS, LedgerStore
from nexus_ledger.config import get_logger
from nexus_ledger.core.services import MovementOutcome, MovementRequest

logger = get_logger(__name__)


class RecordMovementUseCase:
    """Record one stock movement and persist its stock and balance effects."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: RecordMovementRequest) -> MovementOutcome:
        """Execute record movement use case."""
        logger.info(
            "record_movement_started",
            type=request.movement_type.value,
            product_id=request.product_id,
            quantity=request.quantity,
        )

        store = await self._get_ledger_store()
        movement_request = MovementRequest(**request.model_dump())

        async with store.locks.hold(*movement_request.lock_keys):
            outcome = store.recorder.record(movement_request)
            keys = STOCK_KEYS + ACCOUNT_KEYS if outcome.posting else STOCK_KEYS
            await store.flush(*keys)

        return outcome

    def to_response(self, outcome: MovementOutcome) -> RecordMovementResponse:
        """Convert outcome to API response."""
        posting = outcome.posting
        return RecordMovementResponse(
            movement=MovementRecordResponse.model_validate(outcome.movement),
            positions=[StockPositionResponse.model_validate(p) for p in outcome.positions],
            transaction=(
                FinancialTransactionResponse.model_validate(posting.transaction)
                if posting
                else None
            ),
            new_balance=posting.new_balance if posting else None,
            cash_payment=posting.cash_payment if posting else None,
            budget_exceeded=outcome.budget_exceeded,
            credit_limit_exceeded=outcome.credit_limit_exceeded,
        )
