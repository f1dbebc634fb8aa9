"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import UTC, date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from nexus_ledger.core.entities import (
    EntityType,
    MovementType,
    PaymentTerms,
    ProductType,
    TransactionType,
)


class _FromEntity(BaseModel):
    """Response built from a domain entity's attributes and properties."""

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Inventory
# ============================================================================


class StockPositionResponse(_FromEntity):
    """Stock position of one product in one warehouse."""

    product_id: str = Field(..., description="Product ID")
    warehouse_id: str = Field(..., description="Warehouse ID")
    quantity_on_hand: int = Field(..., description="Physical quantity")
    quantity_reserved: int = Field(..., description="Quantity earmarked for orders")
    quantity_available: int = Field(..., description="On-hand minus reserved")
    average_cost: Decimal = Field(..., description="Weighted average unit cost")
    total_value: Decimal = Field(..., description="On-hand * average cost")
    updated_at: datetime = Field(..., description="Last change")


class MovementRecordResponse(_FromEntity):
    """Entry of the movement log."""

    id: str = Field(..., description="Movement ID")
    timestamp: datetime = Field(..., description="Movement time")
    movement_type: MovementType = Field(..., description="Movement type")
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., description="Units moved, or counted quantity for ADJUSTMENT")
    quantity_delta: int = Field(..., description="Signed on-hand change")
    warehouse_from_id: str | None = Field(default=None, description="Source warehouse")
    warehouse_to_id: str | None = Field(default=None, description="Destination warehouse")
    unit_cost: Decimal | None = Field(default=None, description="Unit cost")
    total_amount: Decimal | None = Field(default=None, description="Line total")
    reference_doc_id: str = Field(default="", description="Source document")
    actor: str = Field(..., description="Recorded by")
    vendor_id: str | None = None
    client_id: str | None = None
    department_id: str | None = None
    notes: str | None = None


class FinancialTransactionResponse(_FromEntity):
    """Balance-changing event of one account."""

    id: str = Field(..., description="Transaction ID")
    entity_type: EntityType = Field(..., description="VENDOR or CLIENT")
    entity_id: str = Field(..., description="Account ID")
    entity_name: str = Field(default="", description="Account name at posting time")
    transaction_date: datetime = Field(..., description="Posting time")
    transaction_type: TransactionType = Field(..., description="Transaction type")
    amount: Decimal = Field(..., description="Gross amount")
    cash_portion: Decimal = Field(default=Decimal("0"), description="Part settled in cash at posting")
    balance_after: Decimal = Field(..., description="Account balance after this transaction")
    reference_doc_id: str = Field(default="", description="Related document")
    notes: str | None = None
    due_date: date | None = Field(default=None, description="Due date (client invoices)")
    paid_date: date | None = Field(default=None, description="Settlement date")


class RecordMovementResponse(BaseModel):
    """Result of recording a movement."""

    movement: MovementRecordResponse = Field(..., description="Recorded movement")
    positions: list[StockPositionResponse] = Field(..., description="Affected stock positions")
    transaction: FinancialTransactionResponse | None = Field(
        default=None, description="Invoice posted for the linked vendor or client"
    )
    new_balance: Decimal | None = Field(default=None, description="Linked account balance")
    cash_payment: Decimal | None = Field(default=None, description="Cash paid at receipt")
    budget_exceeded: bool = Field(default=False, description="Department budget overrun")
    credit_limit_exceeded: bool = Field(default=False, description="Client credit limit overrun")


class StockListResponse(BaseModel):
    """Stock positions."""

    positions: list[StockPositionResponse] = Field(default_factory=list)
    total: int = Field(..., description="Number of positions")
    total_value: Decimal = Field(..., description="Sum of position values")


class MovementListResponse(BaseModel):
    """Movement log page."""

    movements: list[MovementRecordResponse] = Field(default_factory=list)
    total: int = Field(..., description="Matching movements before paging")


class ProductResponse(_FromEntity):
    """Catalog product."""

    id: str
    sku: str
    name: str
    product_type: ProductType
    min_reorder_level: int | None = None
    unit: str
    description: str = ""


class DepartmentResponse(_FromEntity):
    """Consuming department."""

    id: str
    name: str
    cost_center_code: str = ""
    budget_cap: Decimal
    month_to_date_spend: Decimal | None = Field(
        default=None, description="Consumption cost booked in the current month"
    )


# ============================================================================
# Accounts
# ============================================================================


class VendorResponse(_FromEntity):
    """Vendor account."""

    id: str
    name: str
    contact_person: str = ""
    phone: str = ""
    address: str = ""
    tax_id: str = ""
    payment_terms: PaymentTerms
    cash_percentage: Decimal
    commission_per_unit: Decimal
    credit_limit: Decimal | None = None
    current_balance: Decimal = Field(..., description="Amount owed to the vendor")
    is_active: bool
    created_at: datetime


class ClientResponse(_FromEntity):
    """Client account."""

    id: str
    name: str
    contact_person: str = ""
    phone: str = ""
    gps_location: str = ""
    category: str = ""
    collection_period_days: int
    credit_limit: Decimal | None = None
    current_balance: Decimal = Field(..., description="Amount owed by the client")
    is_active: bool
    created_at: datetime


class BalanceCheckResponse(BaseModel):
    """Stored balance compared with the replayed transaction history."""

    entity_type: EntityType
    entity_id: str
    current_balance: Decimal
    replayed_balance: Decimal
    consistent: bool


class SalesLinkedPaymentResponse(BaseModel):
    """Payout owed to a sales-linked vendor."""

    vendor_id: str
    units_sold: int
    amount: Decimal


# ============================================================================
# Reports
# ============================================================================


class CollectionAlertResponse(_FromEntity):
    """Overdue client invoice."""

    transaction_id: str
    client_id: str
    client_name: str
    invoice_reference: str
    invoice_date: datetime
    due_date: date
    amount: Decimal
    outstanding: Decimal = Field(..., description="Amount still unpaid")
    days_overdue: int
    current_balance: Decimal = Field(..., description="Client's total balance")


class AgingReportResponse(BaseModel):
    """Overdue receivables by days past due."""

    model_config = ConfigDict(populate_by_name=True)

    bucket_0_30: Decimal = Field(..., alias="0-30")
    bucket_31_60: Decimal = Field(..., alias="31-60")
    bucket_61_plus: Decimal = Field(..., alias="61+")
    total: Decimal


class CollectionReportResponse(BaseModel):
    """Overdue alerts plus aging buckets."""

    as_of: date
    alerts: list[CollectionAlertResponse] = Field(default_factory=list)
    aging: AgingReportResponse


class StatementResponse(BaseModel):
    """Statement of account."""

    entity_type: EntityType
    entity_id: str
    entity_name: str
    current_balance: Decimal
    date_from: date | None = None
    date_to: date | None = None
    transactions: list[FinancialTransactionResponse] = Field(default_factory=list)


class FinancialSummaryResponse(_FromEntity):
    """Payables, receivables and overdue totals."""

    total_payables: Decimal
    total_receivables: Decimal
    net_position: Decimal
    overdue_count: int
    overdue_amount: Decimal


class OrderValidationResponse(BaseModel):
    """Whether a client order can proceed without approval."""

    client_id: str
    amount: Decimal
    approved: bool
    requires_approval: bool
    reason: str | None = None


# ============================================================================
# Errors and health
# ============================================================================


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    storage_backend: str = Field(..., description="Persistence backend")
    loaded: bool = Field(..., description="Ledger state hydrated")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
