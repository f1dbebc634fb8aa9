"""Collection Report Use Case: overdue alerts with aging buckets."""

from dataclasses import dataclass
from datetime import date

from nexus_ledger.application.dto.responses import (
    AgingReportResponse,
    CollectionAlertResponse,
    CollectionReportResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.config import get_logger
from nexus_ledger.core.entities import AgingReport, CollectionAlert

logger = get_logger(__name__)


@dataclass
class CollectionReport:
    """Alerts and aging evaluated against the same date."""

    as_of: date
    alerts: list[CollectionAlert]
    aging: AgingReport


class CollectionReportUseCase:
    """Evaluate overdue client invoices as of a date."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, as_of: date | None = None, client_id: str | None = None) -> CollectionReport:
        """
        Execute collection report use case.

        Args:
            as_of: Evaluation date (defaults to today)
            client_id: Restrict alerts to one client; aging always covers all clients

        Returns:
            CollectionReport
        """
        store = await self._get_ledger_store()
        as_of = as_of or store.analyzer.today()

        alerts = store.analyzer.overdue_alerts(as_of)
        if client_id is not None:
            alerts = [a for a in alerts if a.client_id == client_id]
        aging = store.analyzer.aging_report(as_of)

        logger.info(
            "collection_report_generated",
            as_of=as_of.isoformat(),
            overdue_count=len(alerts),
            aging_total=str(aging.total),
        )
        return CollectionReport(as_of=as_of, alerts=alerts, aging=aging)

    def to_response(self, report: CollectionReport) -> CollectionReportResponse:
        return CollectionReportResponse(
            as_of=report.as_of,
            alerts=[CollectionAlertResponse.model_validate(a) for a in report.alerts],
            aging=AgingReportResponse(
                bucket_0_30=report.aging.bucket_0_30,
                bucket_31_60=report.aging.bucket_31_60,
                bucket_61_plus=report.aging.bucket_61_plus,
                total=report.aging.total,
            ),
        )
