"""Validate Order Use Case: credit limit and overdue check before dispatch."""

from decimal import Decimal

from nexus_ledger.application.dto.requests import ValidateOrderRequest
from nexus_ledger.application.dto.responses import OrderValidationResponse
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.config import get_logger
from nexus_ledger.core.services import OrderValidation

logger = get_logger(__name__)


class ValidateOrderUseCase:
    """Decide whether a client order may proceed without approval."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: ValidateOrderRequest) -> OrderValidation:
        store = await self._get_ledger_store()
        result = store.analyzer.validate_order(request.client_id, request.amount, request.as_of)
        if not result.approved:
            logger.info(
                "order_requires_approval",
                client_id=request.client_id,
                amount=str(request.amount),
                reason=result.reason,
            )
        return result

    def to_response(
        self, client_id: str, amount: Decimal, result: OrderValidation
    ) -> OrderValidationResponse:
        return OrderValidationResponse(
            client_id=client_id,
            amount=amount,
            approved=result.approved,
            requires_approval=result.requires_approval,
            reason=result.reason,
        )
