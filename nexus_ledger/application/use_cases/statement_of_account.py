"""Statement of Account Use Case."""

from dataclasses import dataclass
from datetime import date

from nexus_ledger.application.dto.responses import (
    FinancialTransactionResponse,
    StatementResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.core.entities import Account, EntityType, FinancialTransaction


@dataclass
class Statement:
    """An account with its (filtered) transaction history, newest first."""

    account: Account
    transactions: list[FinancialTransaction]
    date_from: date | None = None
    date_to: date | None = None


class StatementOfAccountUseCase:
    """Build the statement of a vendor or client."""

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
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Statement:
        store = await self._get_ledger_store()
        transactions = store.analyzer.statement_of_account(
            entity_type, entity_id, date_from, date_to
        )
        return Statement(
            account=store.tracker.get_account(entity_type, entity_id),
            transactions=transactions,
            date_from=date_from,
            date_to=date_to,
        )

    def to_response(self, statement: Statement) -> StatementResponse:
        account = statement.account
        return StatementResponse(
            entity_type=account.entity_type,
            entity_id=account.id,
            entity_name=account.name,
            current_balance=account.current_balance,
            date_from=statement.date_from,
            date_to=statement.date_to,
            transactions=[
                FinancialTransactionResponse.model_validate(t) for t in statement.transactions
            ],
        )
