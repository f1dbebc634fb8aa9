"""
Movement Recorder.

Turns movement requests into stock mutations, immutable movement records and,
for vendor- or client-linked movements, invoice postings. Each handler
resolves and validates everything it needs first and only then mutates, so a
rejected request leaves stock and balances untouched.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from nexus_ledger.config import get_logger
from nexus_ledger.core.entities.financial import Client, Vendor
from nexus_ledger.core.entities.inventory import (
    MovementRecord,
    MovementType,
    StockPosition,
)
from nexus_ledger.core.exceptions import (
    CreditLimitExceededError,
    ResaleItemNotConsumableError,
    ValidationError,
)
from nexus_ledger.core.identifiers import new_id
from nexus_ledger.core.services.account_tracker import AccountBalanceTracker, InvoicePosting
from nexus_ledger.core.services.catalog import Catalog
from nexus_ledger.core.services.stock_ledger import StockLedger
from nexus_ledger.core.services.valuation import (
    COST_PLACES,
    DEFAULT_PLACES,
    compute_wac,
    extend,
    quantize_money,
)

logger = get_logger(__name__)


@dataclass
class MovementRequest:
    """
    A structured stock movement request.

    warehouse_id is the warehouse the movement acts on (destination for IN,
    source for OUT/CONSUMPTION/TRANSFER, counted warehouse for ADJUSTMENT).
    destination_warehouse_id is used by TRANSFER only. For ADJUSTMENT the
    quantity is the physical count.
    """

    movement_type: MovementType
    product_id: str
    quantity: int
    warehouse_id: str | None = None
    destination_warehouse_id: str | None = None
    unit_cost: Decimal | None = None
    unit_price: Decimal | None = None
    reference_doc_id: str = ""
    vendor_id: str | None = None
    client_id: str | None = None
    department_id: str | None = None
    actor: str | None = None
    notes: str | None = None
    timestamp: datetime | None = None

    @property
    def lock_keys(self) -> list[str]:
        """Stock and account keys this request writes to."""
        keys = []
        for warehouse in (self.warehouse_id, self.destination_warehouse_id):
            if warehouse:
                keys.append(f"stock:{self.product_id}:{warehouse}")
        if self.vendor_id:
            keys.append(f"account:VENDOR:{self.vendor_id}")
        if self.client_id:
            keys.append(f"account:CLIENT:{self.client_id}")
        if self.department_id:
            keys.append(f"department:{self.department_id}")
        return keys


@dataclass
class MovementOutcome:
    """Result of a recorded movement."""

    movement: MovementRecord
    positions: list[StockPosition] = field(default_factory=list)
    posting: InvoicePosting | None = None
    budget_exceeded: bool = False
    credit_limit_exceeded: bool = False


class MovementRecorder:
    """Append-only movement log plus the stock and balance effects of each entry."""

    def __init__(
        self,
        ledger: StockLedger,
        tracker: AccountBalanceTracker,
        catalog: Catalog,
        movements: Iterable[MovementRecord] = (),
        money_places: int = DEFAULT_PLACES,
        cost_places: int = COST_PLACES,
        budget_policy: str = "cumulative",
        enforce_credit_limit: bool = False,
        default_actor: str = "system",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ledger = ledger
        self._tracker = tracker
        self._catalog = catalog
        self._movements: list[MovementRecord] = list(movements)
        self._places = money_places
        self._cost_places = cost_places
        self._budget_policy = budget_policy
        self._enforce_credit_limit = enforce_credit_limit
        self._default_actor = default_actor
        self._clock = clock or (lambda: datetime.now(UTC))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def record(self, request: MovementRequest) -> MovementOutcome:
        """Route a request to the handler for its movement type."""
        handlers = {
            MovementType.IN: self.receive,
            MovementType.OUT: self.dispatch,
            MovementType.TRANSFER: self.transfer,
            MovementType.ADJUSTMENT: self.adjust,
            MovementType.CONSUMPTION: self.consume,
        }
        outcome = handlers[request.movement_type](request)
        logger.info(
            "movement_recorded",
            movement_id=outcome.movement.id,
            type=outcome.movement.movement_type.value,
            product_id=outcome.movement.product_id,
            quantity=outcome.movement.quantity,
            budget_exceeded=outcome.budget_exceeded,
            credit_limit_exceeded=outcome.credit_limit_exceeded,
        )
        return outcome

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_positive(request: MovementRequest) -> None:
        if request.quantity <= 0:
            raise ValidationError("quantity", "must be positive", request.quantity)

    @staticmethod
    def _require_warehouse(request: MovementRequest) -> str:
        if not request.warehouse_id:
            raise ValidationError("warehouse_id", "is required")
        return request.warehouse_id

    def _append(self, request: MovementRequest, **fields) -> MovementRecord:
        movement = MovementRecord(
            id=new_id("MOV"),
            timestamp=self._timestamp(request),
            movement_type=request.movement_type,
            product_id=request.product_id,
            reference_doc_id=request.reference_doc_id,
            actor=request.actor or self._default_actor,
            notes=request.notes,
            **fields,
        )
        self._movements.append(movement)
        return movement

    def _timestamp(self, request: MovementRequest) -> datetime:
        when = request.timestamp or self._clock()
        if when.tzinfo is None:
            when = when.replace(tzinfo=UTC)
        return when

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def receive(self, request: MovementRequest) -> MovementOutcome:
        """IN: add stock at the destination and blend the receipt into its average cost."""
        self._require_positive(request)
        warehouse_id = self._require_warehouse(request)
        if request.unit_cost is None or request.unit_cost < 0:
            raise ValidationError("unit_cost", "must be zero or positive", request.unit_cost)
        if request.unit_cost.as_tuple().exponent < -self._cost_places:
            raise ValidationError(
                "unit_cost", f"must have at most {self._cost_places} decimal places", request.unit_cost
            )
        if not request.reference_doc_id:
            raise ValidationError("reference_doc_id", "is required for receipts")
        product = self._catalog.get_product(request.product_id)
        vendor: Vendor | None = None
        if request.vendor_id:
            vendor = self._tracker.get_vendor(request.vendor_id)

        unit_cost = request.unit_cost
        total = extend(request.quantity, unit_cost, self._places)
        current = self._ledger.get_position(product.id, warehouse_id)
        new_cost = compute_wac(
            current.quantity_on_hand if current else 0,
            current.average_cost if current else Decimal("0"),
            request.quantity,
            unit_cost,
            self._cost_places,
        )

        position = self._ledger.apply_delta(
            product.id, warehouse_id, request.quantity, average_cost=new_cost
        )
        movement = self._append(
            request,
            quantity=request.quantity,
            quantity_delta=request.quantity,
            warehouse_to_id=warehouse_id,
            unit_cost=unit_cost,
            total_amount=total,
            vendor_id=request.vendor_id,
        )

        posting = None
        if vendor is not None and total > 0:
            posting = self._tracker.post_invoice(
                vendor,
                total,
                reference_doc_id=movement.id,
                transaction_date=movement.timestamp,
                notes=f"Purchase: {product.name} - Qty: {request.quantity} @ {unit_cost} "
                f"({request.reference_doc_id})",
            )
        return MovementOutcome(movement=movement, positions=[position], posting=posting)

    def dispatch(self, request: MovementRequest) -> MovementOutcome:
        """OUT: issue available stock, invoicing the client when one is linked."""
        self._require_positive(request)
        warehouse_id = self._require_warehouse(request)
        product = self._catalog.get_product(request.product_id)

        client: Client | None = None
        sale_total: Decimal | None = None
        credit_exceeded = False
        if request.client_id:
            client = self._tracker.get_client(request.client_id)
            if request.unit_price is None or request.unit_price < 0:
                raise ValidationError(
                    "unit_price", "is required when a client is linked", request.unit_price
                )
            sale_total = extend(request.quantity, request.unit_price, self._places)
            credit_exceeded = self._tracker.check_credit_limit(client, sale_total)

        self._ledger.ensure_available(product.id, warehouse_id, request.quantity)
        if client is not None and credit_exceeded and self._enforce_credit_limit:
            raise CreditLimitExceededError(
                client.id, client.current_balance, sale_total, client.credit_limit
            )

        position = self._ledger.apply_delta(product.id, warehouse_id, -request.quantity)
        movement = self._append(
            request,
            quantity=request.quantity,
            quantity_delta=-request.quantity,
            warehouse_from_id=warehouse_id,
            unit_cost=position.average_cost,
            total_amount=(
                sale_total
                if sale_total is not None
                else extend(request.quantity, position.average_cost, self._places)
            ),
            client_id=request.client_id,
        )

        posting = None
        if client is not None and sale_total:
            posting = self._tracker.post_invoice(
                client,
                sale_total,
                reference_doc_id=movement.id,
                transaction_date=movement.timestamp,
                notes=f"Sales: {product.name} - Qty: {request.quantity} @ "
                f"{quantize_money(request.unit_price, self._places)} ({request.reference_doc_id})",
            )
        return MovementOutcome(
            movement=movement,
            positions=[position],
            posting=posting,
            credit_limit_exceeded=credit_exceeded,
        )

    def transfer(self, request: MovementRequest) -> MovementOutcome:
        """TRANSFER: move stock between two warehouses, both legs or neither."""
        self._require_positive(request)
        source_id = self._require_warehouse(request)
        destination_id = request.destination_warehouse_id
        if not destination_id:
            raise ValidationError("destination_warehouse_id", "is required for transfers")
        if destination_id == source_id:
            raise ValidationError(
                "destination_warehouse_id", "source and destination must differ", destination_id
            )
        product = self._catalog.get_product(request.product_id)

        self._ledger.ensure_available(product.id, source_id, request.quantity)
        source_cost = self._ledger.get_position(product.id, source_id).average_cost  # type: ignore[union-attr]
        destination = self._ledger.get_position(product.id, destination_id)
        if destination is None or destination.quantity_on_hand == 0:
            destination_cost = source_cost
        else:
            destination_cost = compute_wac(
                destination.quantity_on_hand,
                destination.average_cost,
                request.quantity,
                source_cost,
                self._cost_places,
            )

        source_position, destination_position = self._ledger.transfer(
            product.id, source_id, destination_id, request.quantity, destination_cost
        )
        movement = self._append(
            request,
            quantity=request.quantity,
            quantity_delta=-request.quantity,
            warehouse_from_id=source_id,
            warehouse_to_id=destination_id,
            unit_cost=source_cost,
            total_amount=extend(request.quantity, source_cost, self._places),
        )
        return MovementOutcome(
            movement=movement, positions=[source_position, destination_position]
        )

    def adjust(self, request: MovementRequest) -> MovementOutcome:
        """ADJUSTMENT: set on-hand to a physical count and log the signed difference."""
        warehouse_id = self._require_warehouse(request)
        if request.quantity < 0:
            raise ValidationError("quantity", "counted quantity cannot be negative", request.quantity)
        product = self._catalog.get_product(request.product_id)

        position, delta = self._ledger.reconcile(product.id, warehouse_id, request.quantity)
        movement = self._append(
            request,
            quantity=request.quantity,
            quantity_delta=delta,
            warehouse_to_id=warehouse_id,
            unit_cost=position.average_cost,
            total_amount=extend(abs(delta), position.average_cost, self._places),
        )
        if delta:
            logger.warning(
                "stock_count_mismatch",
                product_id=product.id,
                warehouse_id=warehouse_id,
                delta=delta,
            )
        return MovementOutcome(movement=movement, positions=[position])

    def consume(self, request: MovementRequest) -> MovementOutcome:
        """CONSUMPTION: issue stock to a department; overspending is flagged, not blocked."""
        self._require_positive(request)
        warehouse_id = self._require_warehouse(request)
        if not request.department_id:
            raise ValidationError("department_id", "is required for consumption")
        product = self._catalog.get_product(request.product_id)
        if not product.product_type.consumable:
            raise ResaleItemNotConsumableError(product.id)
        department = self._catalog.get_department(request.department_id)

        self._ledger.ensure_available(product.id, warehouse_id, request.quantity)
        average_cost = self._ledger.get_position(product.id, warehouse_id).average_cost  # type: ignore[union-attr]
        cost = extend(request.quantity, average_cost, self._places)

        timestamp = self._timestamp(request)
        if self._budget_policy == "per_request":
            spend = cost
        else:
            spend = self.department_spend(department.id, timestamp) + cost
        budget_exceeded = spend > department.budget_cap

        position = self._ledger.apply_delta(product.id, warehouse_id, -request.quantity)
        movement = self._append(
            request,
            quantity=request.quantity,
            quantity_delta=-request.quantity,
            warehouse_from_id=warehouse_id,
            unit_cost=average_cost,
            total_amount=cost,
            department_id=department.id,
        )
        if budget_exceeded:
            logger.warning(
                "department_budget_exceeded",
                department_id=department.id,
                spend=str(spend),
                budget_cap=str(department.budget_cap),
            )
        return MovementOutcome(
            movement=movement, positions=[position], budget_exceeded=budget_exceeded
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def department_spend(self, department_id: str, period: datetime) -> Decimal:
        """Consumption cost booked to a department in the calendar month of period."""
        return sum(
            (
                m.total_amount or Decimal("0")
                for m in self._movements
                if m.movement_type == MovementType.CONSUMPTION
                and m.department_id == department_id
                and (m.timestamp.year, m.timestamp.month) == (period.year, period.month)
            ),
            Decimal("0"),
        )

    def list_movements(
        self,
        product_id: str | None = None,
        movement_type: MovementType | None = None,
        warehouse_id: str | None = None,
    ) -> list[MovementRecord]:
        """Movements matching the filters, newest first."""
        matches = [
            m
            for m in self._movements
            if (product_id is None or m.product_id == product_id)
            and (movement_type is None or m.movement_type == movement_type)
            and (
                warehouse_id is None
                or warehouse_id in (m.warehouse_from_id, m.warehouse_to_id)
            )
        ]
        return list(reversed(matches))

    @property
    def movements(self) -> list[MovementRecord]:
        return list(self._movements)
