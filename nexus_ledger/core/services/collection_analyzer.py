"""
Collection/Aging Analyzer.

Evaluates the tracker's transaction history on demand. Nothing here is
stored: alerts and reports are recomputed on every call.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal

from nexus_ledger.config import get_logger
from nexus_ledger.core.entities.financial import (
    AgingReport,
    CollectionAlert,
    EntityType,
    FinancialSummary,
    FinancialTransaction,
    TransactionType,
)
from nexus_ledger.core.exceptions import ClientNotFoundError
from nexus_ledger.core.services.account_tracker import AccountBalanceTracker

logger = get_logger(__name__)


@dataclass
class OrderValidation:
    """Whether a client may place an order without approval."""

    approved: bool
    requires_approval: bool
    reason: str | None = None


def _in_range(
    transaction: FinancialTransaction,
    date_from: date | None,
    date_to: date | None,
) -> bool:
    day = transaction.transaction_date.date()
    if date_from is not None and day < date_from:
        return False
    if date_to is not None and day > date_to:
        return False
    return True


def _newest_first(transactions: list[FinancialTransaction]) -> list[FinancialTransaction]:
    # Posting order breaks ties between identical timestamps
    indexed = list(enumerate(transactions))
    indexed.sort(key=lambda pair: (pair[1].transaction_date, pair[0]), reverse=True)
    return [t for _, t in indexed]


class CollectionAnalyzer:
    """Overdue alerts, aging buckets, statements and summaries."""

    def __init__(
        self,
        tracker: AccountBalanceTracker,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._tracker = tracker
        self._today = today or (lambda: datetime.now(UTC).date())

    def today(self) -> date:
        """Evaluation date used when callers pass none."""
        return self._today()

    def overdue_alerts(self, today: date | None = None) -> list[CollectionAlert]:
        """
        Unpaid client invoices past their due date, most overdue first.

        days_overdue is the whole number of days since the due date; invoices
        due today or later are not included.
        """
        today = today or self._today()
        alerts: list[CollectionAlert] = []

        for transaction in self._tracker.transactions:
            if (
                transaction.entity_type != EntityType.CLIENT
                or transaction.transaction_type != TransactionType.INVOICE
                or transaction.due_date is None
                or transaction.paid_date is not None
            ):
                continue

            days_overdue = (today - transaction.due_date).days
            if days_overdue <= 0:
                continue

            try:
                current_balance = self._tracker.get_client(transaction.entity_id).current_balance
            except ClientNotFoundError:
                current_balance = Decimal("0")

            alerts.append(
                CollectionAlert(
                    transaction_id=transaction.id,
                    client_id=transaction.entity_id,
                    client_name=transaction.entity_name,
                    invoice_reference=transaction.reference_doc_id,
                    invoice_date=transaction.transaction_date,
                    due_date=transaction.due_date,
                    amount=transaction.amount,
                    outstanding=self._tracker.outstanding_amount(transaction),
                    days_overdue=days_overdue,
                    current_balance=current_balance,
                )
            )

        alerts.sort(key=lambda a: a.days_overdue, reverse=True)
        return alerts

    def aging_report(self, today: date | None = None) -> AgingReport:
        """Outstanding overdue amounts in 0-30, 31-60 and 61+ day buckets."""
        report = AgingReport()
        for alert in self.overdue_alerts(today):
            if alert.days_overdue <= 30:
                report.bucket_0_30 += alert.outstanding
            elif alert.days_overdue <= 60:
                report.bucket_31_60 += alert.outstanding
            else:
                report.bucket_61_plus += alert.outstanding
        return report

    def has_overdue_payments(self, client_id: str, today: date | None = None) -> bool:
        return any(a.client_id == client_id for a in self.overdue_alerts(today))

    def validate_order(
        self, client_id: str, order_amount: Decimal, today: date | None = None
    ) -> OrderValidation:
        """Check a prospective order against credit limit and overdue invoices."""
        try:
            client = self._tracker.get_client(client_id)
        except ClientNotFoundError:
            return OrderValidation(approved=False, requires_approval=False, reason="Client not found")

        if self._tracker.check_credit_limit(client, order_amount):
            return OrderValidation(
                approved=False,
                requires_approval=True,
                reason=f"Exceeds credit limit: {client.credit_limit}",
            )

        if self.has_overdue_payments(client_id, today):
            return OrderValidation(
                approved=False,
                requires_approval=True,
                reason="Client has overdue payments",
            )

        return OrderValidation(approved=True, requires_approval=False)

    def statement_of_account(
        self,
        entity_type: EntityType,
        entity_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[FinancialTransaction]:
        """All transactions of one account, optionally date-filtered, newest first."""
        self._tracker.get_account(entity_type, entity_id)
        history = [
            t
            for t in self._tracker.transactions_for(entity_type, entity_id)
            if _in_range(t, date_from, date_to)
        ]
        return _newest_first(history)

    def list_transactions(
        self,
        entity_type: EntityType | None = None,
        transaction_type: TransactionType | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[FinancialTransaction]:
        """All transactions matching the filters, newest first."""
        matches = [
            t
            for t in self._tracker.transactions
            if (entity_type is None or t.entity_type == entity_type)
            and (transaction_type is None or t.transaction_type == transaction_type)
            and _in_range(t, date_from, date_to)
        ]
        return _newest_first(matches)

    def financial_summary(self, today: date | None = None) -> FinancialSummary:
        """Payables, receivables and overdue totals across all accounts."""
        total_payables = sum(
            (v.current_balance for v in self._tracker.list_vendors()), Decimal("0")
        )
        total_receivables = sum(
            (c.current_balance for c in self._tracker.list_clients()), Decimal("0")
        )
        overdue = self.overdue_alerts(today)
        summary = FinancialSummary(
            total_payables=total_payables,
            total_receivables=total_receivables,
            net_position=total_receivables - total_payables,
            overdue_count=len(overdue),
            overdue_amount=sum((a.outstanding for a in overdue), Decimal("0")),
        )
        logger.debug("financial_summary_computed", overdue_count=summary.overdue_count)
        return summary
