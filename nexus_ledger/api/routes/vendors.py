"""Vendor endpoints: accounts, payments, notes and statements."""

from datetime import date

from fastapi import APIRouter, Depends, Response, status

from nexus_ledger.api.dependencies import (
    get_create_account_use_case,
    get_delete_account_use_case,
    get_post_note_use_case,
    get_record_payment_use_case,
    get_statement_use_case,
    get_store,
    get_update_account_use_case,
)
from nexus_ledger.application.dto.requests import (
    CreateVendorRequest,
    PostNoteRequest,
    RecordPaymentRequest,
    SalesLinkedPaymentRequest,
    UpdateVendorRequest,
)
from nexus_ledger.application.dto.responses import (
    BalanceCheckResponse,
    ErrorResponse,
    FinancialTransactionResponse,
    SalesLinkedPaymentResponse,
    StatementResponse,
    VendorResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.use_cases import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    PostNoteUseCase,
    RecordPaymentUseCase,
    StatementOfAccountUseCase,
    UpdateAccountUseCase,
)
from nexus_ledger.core.entities import EntityType

router = APIRouter(prefix="/api/vendors", tags=["vendors"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=VendorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_vendor(
    request: CreateVendorRequest,
    use_case: CreateAccountUseCase = Depends(get_create_account_use_case),
) -> VendorResponse:
    """Create a vendor, optionally with an opening balance."""
    vendor = await use_case.execute(request)
    return use_case.to_response(vendor)  # type: ignore[return-value]


@router.get("", response_model=list[VendorResponse])
async def list_vendors(
    active_only: bool = False,
    store: LedgerStore = Depends(get_store),
) -> list[VendorResponse]:
    """All vendors by name."""
    return [
        VendorResponse.model_validate(v)
        for v in store.tracker.list_vendors()
        if v.is_active or not active_only
    ]


@router.get("/{vendor_id}", response_model=VendorResponse, responses=NOT_FOUND)
async def get_vendor(vendor_id: str, store: LedgerStore = Depends(get_store)) -> VendorResponse:
    return VendorResponse.model_validate(store.tracker.get_vendor(vendor_id))


@router.patch("/{vendor_id}", response_model=VendorResponse, responses=NOT_FOUND)
async def update_vendor(
    vendor_id: str,
    request: UpdateVendorRequest,
    use_case: UpdateAccountUseCase = Depends(get_update_account_use_case),
) -> VendorResponse:
    """Update vendor details. The balance only changes through transactions."""
    vendor = await use_case.execute(EntityType.VENDOR, vendor_id, request)
    return use_case.to_response(vendor)  # type: ignore[return-value]


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_vendor(
    vendor_id: str,
    use_case: DeleteAccountUseCase = Depends(get_delete_account_use_case),
) -> Response:
    await use_case.execute(EntityType.VENDOR, vendor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{vendor_id}/payments",
    response_model=FinancialTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def pay_vendor(
    vendor_id: str,
    request: RecordPaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> FinancialTransactionResponse:
    """Record a payment made to the vendor."""
    transaction = await use_case.execute(EntityType.VENDOR, vendor_id, request)
    return use_case.to_response(transaction)


@router.post(
    "/{vendor_id}/notes",
    response_model=FinancialTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def post_vendor_note(
    vendor_id: str,
    request: PostNoteRequest,
    use_case: PostNoteUseCase = Depends(get_post_note_use_case),
) -> FinancialTransactionResponse:
    """Record a return, credit note or debit note with the vendor."""
    transaction = await use_case.execute(EntityType.VENDOR, vendor_id, request)
    return use_case.to_response(transaction)


@router.get("/{vendor_id}/statement", response_model=StatementResponse, responses=NOT_FOUND)
async def vendor_statement(
    vendor_id: str,
    date_from: date | None = None,
    date_to: date | None = None,
    use_case: StatementOfAccountUseCase = Depends(get_statement_use_case),
) -> StatementResponse:
    """Vendor statement of account, newest first."""
    statement = await use_case.execute(EntityType.VENDOR, vendor_id, date_from, date_to)
    return use_case.to_response(statement)


@router.get("/{vendor_id}/balance-check", response_model=BalanceCheckResponse, responses=NOT_FOUND)
async def vendor_balance_check(
    vendor_id: str, store: LedgerStore = Depends(get_store)
) -> BalanceCheckResponse:
    """Compare the stored balance with the replayed transaction history."""
    vendor = store.tracker.get_vendor(vendor_id)
    return BalanceCheckResponse(
        entity_type=EntityType.VENDOR,
        entity_id=vendor_id,
        current_balance=vendor.current_balance,
        replayed_balance=store.tracker.replay_balance(EntityType.VENDOR, vendor_id),
        consistent=store.tracker.verify_balance(EntityType.VENDOR, vendor_id),
    )


@router.post(
    "/{vendor_id}/sales-linked-payment",
    response_model=SalesLinkedPaymentResponse,
    responses=NOT_FOUND,
)
async def sales_linked_payment(
    vendor_id: str,
    request: SalesLinkedPaymentRequest,
    store: LedgerStore = Depends(get_store),
) -> SalesLinkedPaymentResponse:
    """Payout owed to a sales-linked vendor for units sold (not posted)."""
    vendor = store.tracker.get_vendor(vendor_id)
    return SalesLinkedPaymentResponse(
        vendor_id=vendor_id,
        units_sold=request.units_sold,
        amount=store.tracker.calculate_sales_linked_payment(vendor, request.units_sold),
    )
