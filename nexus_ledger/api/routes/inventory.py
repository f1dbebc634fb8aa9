"""Inventory endpoints: movements, stock positions and reservations."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nexus_ledger.api.dependencies import (
    get_app_settings,
    get_record_movement_use_case,
    get_reserve_stock_use_case,
    get_store,
)
from nexus_ledger.application.dto.requests import RecordMovementRequest, ReserveStockRequest
from nexus_ledger.application.dto.responses import (
    ErrorResponse,
    MovementListResponse,
    MovementRecordResponse,
    RecordMovementResponse,
    StockListResponse,
    StockPositionResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.use_cases import RecordMovementUseCase, ReserveStockUseCase
from nexus_ledger.config import Settings
from nexus_ledger.core.entities import MovementType

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/movements",
    response_model=RecordMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_movement(
    request: RecordMovementRequest,
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> RecordMovementResponse:
    """Record an IN, OUT, TRANSFER, ADJUSTMENT or CONSUMPTION movement."""
    outcome = await use_case.execute(request)
    return use_case.to_response(outcome)


@router.get("/movements", response_model=MovementListResponse)
async def list_movements(
    product_id: str | None = None,
    movement_type: MovementType | None = None,
    warehouse_id: str | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: LedgerStore = Depends(get_store),
) -> MovementListResponse:
    """Movement log, newest first."""
    movements = store.recorder.list_movements(product_id, movement_type, warehouse_id)
    return MovementListResponse(
        movements=[
            MovementRecordResponse.model_validate(m) for m in movements[offset : offset + limit]
        ],
        total=len(movements),
    )


@router.get("/positions", response_model=StockListResponse)
async def list_positions(
    product_id: str | None = None,
    warehouse_id: str | None = None,
    store: LedgerStore = Depends(get_store),
) -> StockListResponse:
    """Stock positions, optionally filtered by product or warehouse."""
    positions = store.ledger.list_positions(product_id, warehouse_id)
    return StockListResponse(
        positions=[StockPositionResponse.model_validate(p) for p in positions],
        total=len(positions),
        total_value=sum((p.total_value for p in positions), Decimal("0")),
    )


@router.get(
    "/positions/{product_id}/{warehouse_id}",
    response_model=StockPositionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_position(
    product_id: str,
    warehouse_id: str,
    store: LedgerStore = Depends(get_store),
) -> StockPositionResponse:
    """One stock position."""
    position = store.ledger.get_position(product_id, warehouse_id)
    if position is None:
        raise HTTPException(
            status_code=404,
            detail=f"Stock position not found: {product_id} @ {warehouse_id}",
        )
    return StockPositionResponse.model_validate(position)


@router.get("/low-stock", response_model=list[StockPositionResponse])
async def low_stock(
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> list[StockPositionResponse]:
    """Positions whose available quantity is below the reorder level."""
    positions = store.ledger.low_stock(
        store.catalog.products, settings.ledger.default_reorder_level
    )
    return [StockPositionResponse.model_validate(p) for p in positions]


@router.post(
    "/reservations",
    response_model=StockPositionResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def reserve_stock(
    request: ReserveStockRequest,
    use_case: ReserveStockUseCase = Depends(get_reserve_stock_use_case),
) -> StockPositionResponse:
    """Reserve available stock for a pending order."""
    position = await use_case.execute(request)
    return use_case.to_response(position)


@router.post(
    "/reservations/release",
    response_model=StockPositionResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def release_stock(
    request: ReserveStockRequest,
    use_case: ReserveStockUseCase = Depends(get_reserve_stock_use_case),
) -> StockPositionResponse:
    """Release a reservation back to available stock."""
    position = await use_case.execute(request, release=True)
    return use_case.to_response(position)
