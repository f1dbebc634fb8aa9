"""Financial reporting endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from nexus_ledger.api.dependencies import (
    get_collection_report_use_case,
    get_export_transactions_use_case,
    get_store,
)
from nexus_ledger.application.dto.responses import (
    AgingReportResponse,
    CollectionReportResponse,
    FinancialSummaryResponse,
    FinancialTransactionResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.use_cases import CollectionReportUseCase, ExportTransactionsUseCase
from nexus_ledger.core.entities import EntityType, TransactionType

router = APIRouter(prefix="/api/financial", tags=["financial"])


@router.get("/summary", response_model=FinancialSummaryResponse)
async def financial_summary(
    as_of: date | None = None,
    store: LedgerStore = Depends(get_store),
) -> FinancialSummaryResponse:
    """Total payables, receivables, net position and overdue totals."""
    return FinancialSummaryResponse.model_validate(store.analyzer.financial_summary(as_of))


@router.get("/overdue", response_model=CollectionReportResponse)
async def overdue_report(
    as_of: date | None = None,
    client_id: str | None = None,
    use_case: CollectionReportUseCase = Depends(get_collection_report_use_case),
) -> CollectionReportResponse:
    """Overdue client invoices, most overdue first, with aging buckets."""
    report = await use_case.execute(as_of, client_id)
    return use_case.to_response(report)


@router.get("/aging", response_model=AgingReportResponse)
async def aging_report(
    as_of: date | None = None,
    use_case: CollectionReportUseCase = Depends(get_collection_report_use_case),
) -> AgingReportResponse:
    """Outstanding overdue receivables in 0-30, 31-60 and 61+ day buckets."""
    report = await use_case.execute(as_of)
    return use_case.to_response(report).aging


@router.get("/transactions", response_model=list[FinancialTransactionResponse])
async def list_transactions(
    entity_type: EntityType | None = None,
    transaction_type: TransactionType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: LedgerStore = Depends(get_store),
) -> list[FinancialTransactionResponse]:
    """Transactions matching the filters, newest first."""
    transactions = store.analyzer.list_transactions(
        entity_type, transaction_type, date_from, date_to
    )
    return [
        FinancialTransactionResponse.model_validate(t)
        for t in transactions[offset : offset + limit]
    ]


@router.get("/transactions/export")
async def export_transactions(
    entity_type: EntityType | None = None,
    transaction_type: TransactionType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    use_case: ExportTransactionsUseCase = Depends(get_export_transactions_use_case),
) -> StreamingResponse:
    """Export matching transactions as CSV."""
    csv_text = await use_case.execute(entity_type, transaction_type, date_from, date_to)
    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={
            "Content-Disposition": 'attachment; filename="transactions_export.csv"',
        },
    )
