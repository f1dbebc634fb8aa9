"""Reserve Stock Use Case: earmark or release available quantity."""

from nexus_ledger.application.dto.requests import ReserveStockRequest
from nexus_ledger.application.dto.responses import StockPositionResponse
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.config import get_logger
from nexus_ledger.core.entities import StockPosition
from nexus_ledger.core.interfaces.storage import STOCK_POSITIONS

logger = get_logger(__name__)


class ReserveStockUseCase:
    """Reserve stock for a pending order, or release an earlier reservation."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: ReserveStockRequest, release: bool = False) -> StockPosition:
        store = await self._get_ledger_store()
        store.catalog.get_product(request.product_id)

        async with store.locks.hold(f"stock:{request.product_id}:{request.warehouse_id}"):
            if release:
                position = store.ledger.release(
                    request.product_id, request.warehouse_id, request.quantity
                )
            else:
                position = store.ledger.reserve(
                    request.product_id, request.warehouse_id, request.quantity
                )
            await store.flush(STOCK_POSITIONS)

        logger.info(
            "stock_released" if release else "stock_reserved",
            product_id=request.product_id,
            warehouse_id=request.warehouse_id,
            quantity=request.quantity,
            reserved=position.quantity_reserved,
        )
        return position

    def to_response(self, position: StockPosition) -> StockPositionResponse:
        return StockPositionResponse.model_validate(position)
