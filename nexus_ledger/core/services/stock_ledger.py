"""
Stock Ledger.

Tracks on-hand and reserved quantity per (product, warehouse). Every method
validates the complete result before replacing a position, so a failed call
leaves the ledger untouched.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal

from nexus_ledger.config import get_logger
from nexus_ledger.core.entities.inventory import Product, StockPosition
from nexus_ledger.core.exceptions import (
    InsufficientStockError,
    NegativeStockError,
    ValidationError,
)

logger = get_logger(__name__)

PositionKey = tuple[str, str]


class StockLedger:
    """In-memory table of stock positions."""

    def __init__(self, positions: Iterable[StockPosition] = ()) -> None:
        self._positions: dict[PositionKey, StockPosition] = {p.key: p for p in positions}

    def get_position(self, product_id: str, warehouse_id: str) -> StockPosition | None:
        return self._positions.get((product_id, warehouse_id))

    def get_available(self, product_id: str, warehouse_id: str) -> int:
        """On-hand minus reserved; 0 for a position that does not exist yet."""
        position = self.get_position(product_id, warehouse_id)
        return position.quantity_available if position else 0

    def list_positions(
        self,
        product_id: str | None = None,
        warehouse_id: str | None = None,
    ) -> list[StockPosition]:
        positions = [
            p
            for p in self._positions.values()
            if (product_id is None or p.product_id == product_id)
            and (warehouse_id is None or p.warehouse_id == warehouse_id)
        ]
        return sorted(positions, key=lambda p: p.key)

    def _current(self, product_id: str, warehouse_id: str) -> StockPosition:
        return self._positions.get(
            (product_id, warehouse_id),
            StockPosition(product_id=product_id, warehouse_id=warehouse_id),
        )

    def _build(
        self,
        product_id: str,
        warehouse_id: str,
        quantity_delta: int,
        reserved_delta: int,
        average_cost: Decimal | None,
    ) -> StockPosition:
        """Compute the would-be position, raising instead of producing an invalid one."""
        current = self._current(product_id, warehouse_id)
        on_hand = current.quantity_on_hand + quantity_delta
        reserved = current.quantity_reserved + reserved_delta

        if on_hand < 0 or reserved < 0 or reserved > on_hand:
            raise NegativeStockError(product_id, warehouse_id, on_hand, reserved)

        return current.model_copy(
            update={
                "quantity_on_hand": on_hand,
                "quantity_reserved": reserved,
                "average_cost": current.average_cost if average_cost is None else average_cost,
                "updated_at": datetime.now(UTC),
            }
        )

    def _store(self, position: StockPosition) -> StockPosition:
        self._positions[position.key] = position
        return position

    def apply_delta(
        self,
        product_id: str,
        warehouse_id: str,
        quantity_delta: int,
        reserved_delta: int = 0,
        average_cost: Decimal | None = None,
    ) -> StockPosition:
        """
        Apply signed on-hand and reserved deltas to one position.

        Args:
            product_id: Product key
            warehouse_id: Warehouse key
            quantity_delta: Signed change of on-hand quantity
            reserved_delta: Signed change of reserved quantity
            average_cost: Replacement average cost (receipts only)

        Returns:
            The updated position

        Raises:
            NegativeStockError: if on-hand would drop below zero or below reserved
        """
        position = self._store(
            self._build(product_id, warehouse_id, quantity_delta, reserved_delta, average_cost)
        )
        logger.debug(
            "stock_delta_applied",
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity_delta=quantity_delta,
            reserved_delta=reserved_delta,
            on_hand=position.quantity_on_hand,
        )
        return position

    def reconcile(
        self, product_id: str, warehouse_id: str, counted_quantity: int
    ) -> tuple[StockPosition, int]:
        """
        Set on-hand to a physical count.

        Reserved quantity is clamped to the counted quantity.

        Returns:
            Tuple of (updated position, signed delta against the previous on-hand)
        """
        if counted_quantity < 0:
            raise ValidationError("quantity", "counted quantity cannot be negative", counted_quantity)

        current = self._current(product_id, warehouse_id)
        delta = counted_quantity - current.quantity_on_hand
        position = current.model_copy(
            update={
                "quantity_on_hand": counted_quantity,
                "quantity_reserved": min(current.quantity_reserved, counted_quantity),
                "updated_at": datetime.now(UTC),
            }
        )
        self._store(position)
        logger.info(
            "stock_reconciled",
            product_id=product_id,
            warehouse_id=warehouse_id,
            counted=counted_quantity,
            delta=delta,
        )
        return position, delta

    def ensure_available(self, product_id: str, warehouse_id: str, quantity: int) -> None:
        """Raise InsufficientStockError unless quantity can leave the warehouse."""
        available = self.get_available(product_id, warehouse_id)
        if quantity > available:
            raise InsufficientStockError(product_id, warehouse_id, quantity, available)

    def transfer(
        self,
        product_id: str,
        from_warehouse_id: str,
        to_warehouse_id: str,
        quantity: int,
        destination_cost: Decimal | None = None,
    ) -> tuple[StockPosition, StockPosition]:
        """
        Move quantity between warehouses as one unit.

        Both legs are built before either is stored.
        """
        if from_warehouse_id == to_warehouse_id:
            raise ValidationError(
                "warehouse_to_id", "source and destination must differ", to_warehouse_id
            )
        if quantity <= 0:
            raise ValidationError("quantity", "must be positive", quantity)
        self.ensure_available(product_id, from_warehouse_id, quantity)
        source = self._build(product_id, from_warehouse_id, -quantity, 0, None)
        destination = self._build(product_id, to_warehouse_id, quantity, 0, destination_cost)
        self._store(source)
        self._store(destination)
        return source, destination

    def reserve(self, product_id: str, warehouse_id: str, quantity: int) -> StockPosition:
        """Earmark available quantity for a pending order."""
        if quantity <= 0:
            raise ValidationError("quantity", "must be positive", quantity)
        self.ensure_available(product_id, warehouse_id, quantity)
        return self.apply_delta(product_id, warehouse_id, 0, quantity)

    def release(self, product_id: str, warehouse_id: str, quantity: int) -> StockPosition:
        """Return reserved quantity to available."""
        if quantity <= 0:
            raise ValidationError("quantity", "must be positive", quantity)
        return self.apply_delta(product_id, warehouse_id, 0, -quantity)

    def low_stock(
        self,
        products: Mapping[str, Product],
        default_level: int,
    ) -> list[StockPosition]:
        """Positions whose available quantity is below the product's reorder level."""
        alerts = []
        for position in self.list_positions():
            product = products.get(position.product_id)
            level = default_level
            if product is not None and product.min_reorder_level is not None:
                level = product.min_reorder_level
            if position.quantity_available < level:
                alerts.append(position)
        return alerts

    def snapshot(self) -> list[StockPosition]:
        return list(self._positions.values())
