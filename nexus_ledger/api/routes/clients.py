"""Client endpoints: accounts, payments, notes, statements and order checks."""

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
    get_validate_order_use_case,
)
from nexus_ledger.application.dto.requests import (
    CreateClientRequest,
    PostNoteRequest,
    RecordPaymentRequest,
    UpdateClientRequest,
    ValidateOrderRequest,
)
from nexus_ledger.application.dto.responses import (
    BalanceCheckResponse,
    ClientResponse,
    ErrorResponse,
    FinancialTransactionResponse,
    OrderValidationResponse,
    StatementResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.use_cases import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    PostNoteUseCase,
    RecordPaymentUseCase,
    StatementOfAccountUseCase,
    UpdateAccountUseCase,
    ValidateOrderUseCase,
)
from nexus_ledger.core.entities import EntityType

router = APIRouter(prefix="/api/clients", tags=["clients"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_client(
    request: CreateClientRequest,
    use_case: CreateAccountUseCase = Depends(get_create_account_use_case),
) -> ClientResponse:
    """Create a client, optionally with an opening balance."""
    client = await use_case.execute(request)
    return use_case.to_response(client)  # type: ignore[return-value]


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    active_only: bool = False,
    store: LedgerStore = Depends(get_store),
) -> list[ClientResponse]:
    """All clients by name."""
    return [
        ClientResponse.model_validate(c)
        for c in store.tracker.list_clients()
        if c.is_active or not active_only
    ]


@router.post("/validate-order", response_model=OrderValidationResponse)
async def validate_order(
    request: ValidateOrderRequest,
    use_case: ValidateOrderUseCase = Depends(get_validate_order_use_case),
) -> OrderValidationResponse:
    """Check credit limit and overdue invoices before taking an order."""
    result = await use_case.execute(request)
    return use_case.to_response(request.client_id, request.amount, result)


@router.get("/{client_id}", response_model=ClientResponse, responses=NOT_FOUND)
async def get_client(client_id: str, store: LedgerStore = Depends(get_store)) -> ClientResponse:
    return ClientResponse.model_validate(store.tracker.get_client(client_id))


@router.patch("/{client_id}", response_model=ClientResponse, responses=NOT_FOUND)
async def update_client(
    client_id: str,
    request: UpdateClientRequest,
    use_case: UpdateAccountUseCase = Depends(get_update_account_use_case),
) -> ClientResponse:
    """Update client details. The balance only changes through transactions."""
    client = await use_case.execute(EntityType.CLIENT, client_id, request)
    return use_case.to_response(client)  # type: ignore[return-value]


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_client(
    client_id: str,
    use_case: DeleteAccountUseCase = Depends(get_delete_account_use_case),
) -> Response:
    await use_case.execute(EntityType.CLIENT, client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{client_id}/payments",
    response_model=FinancialTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def receive_payment(
    client_id: str,
    request: RecordPaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> FinancialTransactionResponse:
    """
    Record a payment received from the client.

    Reference an invoice ID (or the movement it was raised for) to settle it.
    """
    transaction = await use_case.execute(EntityType.CLIENT, client_id, request)
    return use_case.to_response(transaction)


@router.post(
    "/{client_id}/notes",
    response_model=FinancialTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def post_client_note(
    client_id: str,
    request: PostNoteRequest,
    use_case: PostNoteUseCase = Depends(get_post_note_use_case),
) -> FinancialTransactionResponse:
    transaction = await use_case.execute(EntityType.CLIENT, client_id, request)
    return use_case.to_response(transaction)


@router.get("/{client_id}/statement", response_model=StatementResponse, responses=NOT_FOUND)
async def client_statement(
    client_id: str,
    date_from: date | None = None,
    date_to: date | None = None,
    use_case: StatementOfAccountUseCase = Depends(get_statement_use_case),
) -> StatementResponse:
    """Client statement of account, newest first."""
    statement = await use_case.execute(EntityType.CLIENT, client_id, date_from, date_to)
    return use_case.to_response(statement)


@router.get("/{client_id}/balance-check", response_model=BalanceCheckResponse, responses=NOT_FOUND)
async def client_balance_check(
    client_id: str, store: LedgerStore = Depends(get_store)
) -> BalanceCheckResponse:
    client = store.tracker.get_client(client_id)
    return BalanceCheckResponse(
        entity_type=EntityType.CLIENT,
        entity_id=client_id,
        current_balance=client.current_balance,
        replayed_balance=store.tracker.replay_balance(EntityType.CLIENT, client_id),
        consistent=store.tracker.verify_balance(EntityType.CLIENT, client_id),
    )
