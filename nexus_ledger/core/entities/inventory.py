"""Inventory domain entities."""

from datetime import UTC, datetime
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "IN"  # Purchase receipt
    OUT = "OUT"  # Sales dispatch
    TRANSFER = "TRANSFER"  # Warehouse to warehouse
    ADJUSTMENT = "ADJUSTMENT"  # Stock-take correction
    CONSUMPTION = "CONSUMPTION"  # Internal department usage


class ProductType(str, Enum):
    """Inventory designation of a product."""

    RESALE = "RESALE"
    CONSUMABLE = "CONSUMABLE"
    RAW_MATERIAL = "RAW_MATERIAL"
    ASSET = "ASSET"

    @property
    def consumable(self) -> bool:
        """Whether departments may consume this type internally."""
        return self is not ProductType.RESALE


class Product(BaseModel):
    """Catalog entry for a stocked product."""

    id: str
    sku: str
    name: str
    product_type: ProductType = ProductType.RESALE
    min_reorder_level: int | None = Field(default=None, ge=0)
    unit: str = "pcs"
    description: str = ""


class Department(BaseModel):
    """Internal cost center that consumes stock."""

    id: str
    name: str
    cost_center_code: str = ""
    budget_cap: Decimal = Field(default=Decimal("0"), ge=0)


class StockPosition(BaseModel):
    """On-hand and reserved quantity of one product in one warehouse."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    warehouse_id: str
    quantity_on_hand: int = Field(default=0, ge=0)
    quantity_reserved: int = Field(default=0, ge=0)
    average_cost: Decimal = Field(default=Decimal("0"), ge=0)  # Weighted Average Cost
    updated_at: datetime = Field(default_factory=_utc_now)

    @property
    def key(self) -> tuple[str, str]:
        return (self.product_id, self.warehouse_id)

    @property
    def quantity_available(self) -> int:
        """On-hand minus reserved."""
        return self.quantity_on_hand - self.quantity_reserved

    @property
    def total_value(self) -> Decimal:
        """Total inventory value = quantity * average_cost, in cents."""
        return (self.quantity_on_hand * self.average_cost).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_EVEN
        )


class MovementRecord(BaseModel):
    """Immutable entry of the append-only movement log."""

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime = Field(default_factory=_utc_now)
    movement_type: MovementType
    product_id: str
    quantity: int = Field(..., ge=0)  # counted quantity for ADJUSTMENT
    quantity_delta: int = 0  # signed on-hand change at the affected warehouse
    warehouse_from_id: str | None = None
    warehouse_to_id: str | None = None
    unit_cost: Decimal | None = None
    total_amount: Decimal | None = None
    reference_doc_id: str = ""
    actor: str = "system"
    vendor_id: str | None = None
    client_id: str | None = None
    department_id: str | None = None
    notes: str | None = None
