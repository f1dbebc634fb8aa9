"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from nexus_ledger.core.entities import MovementType, PaymentTerms, ProductType


# ============================================================================
# Inventory
# ============================================================================


class RecordMovementRequest(BaseModel):
    """Request to record a stock movement.

    warehouse_id is the warehouse the movement acts on: destination for IN,
    source for OUT, TRANSFER and CONSUMPTION, the counted warehouse for
    ADJUSTMENT.
    """

    movement_type: MovementType = Field(..., description="IN, OUT, TRANSFER, ADJUSTMENT or CONSUMPTION")
    product_id: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(
        ...,
        ge=0,
        description="Units moved; the physical count for ADJUSTMENT",
    )
    warehouse_id: str | None = Field(default=None, description="Warehouse the movement acts on")
    destination_warehouse_id: str | None = Field(
        default=None, description="Destination warehouse (TRANSFER only)"
    )
    unit_cost: Decimal | None = Field(
        default=None, ge=0, description="Purchase cost per unit (IN only)"
    )
    unit_price: Decimal | None = Field(
        default=None, ge=0, description="Sale price per unit (client-linked OUT)"
    )
    reference_doc_id: str = Field(
        default="",
        description="Source document (PO, delivery note, count sheet)",
        examples=["PO-2024-001"],
    )
    vendor_id: str | None = Field(default=None, description="Supplying vendor (IN)")
    client_id: str | None = Field(default=None, description="Receiving client (OUT)")
    department_id: str | None = Field(default=None, description="Consuming department (CONSUMPTION)")
    actor: str | None = Field(default=None, description="User recording the movement")
    notes: str | None = Field(default=None, description="Free text")
    timestamp: datetime | None = Field(default=None, description="Movement time (defaults to now)")


class ReserveStockRequest(BaseModel):
    """Request to reserve or release stock."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    warehouse_id: str = Field(..., min_length=1, description="Warehouse ID")
    quantity: int = Field(..., gt=0, description="Units to reserve or release")


class CreateProductRequest(BaseModel):
    """Request to register a product."""

    id: str = Field(..., min_length=1, description="Product ID")
    sku: str = Field(..., min_length=1, description="Stock keeping unit")
    name: str = Field(..., min_length=1, description="Product name")
    product_type: ProductType = Field(default=ProductType.RESALE, description="Inventory designation")
    min_reorder_level: int | None = Field(
        default=None, ge=0, description="Low-stock threshold (defaults to the ledger setting)"
    )
    unit: str = Field(default="pcs", description="Unit of measure")
    description: str = Field(default="", description="Description")


class CreateDepartmentRequest(BaseModel):
    """Request to register a department."""

    id: str = Field(..., min_length=1, description="Department ID")
    name: str = Field(..., min_length=1, description="Department name")
    cost_center_code: str = Field(default="", description="Cost center code")
    budget_cap: Decimal = Field(default=Decimal("0"), ge=0, description="Monthly consumption budget")


# ============================================================================
# Accounts
# ============================================================================


class CreateVendorRequest(BaseModel):
    """Request to create a vendor."""

    id: str = Field(..., min_length=1, description="Vendor ID")
    name: str = Field(..., min_length=1, description="Vendor name")
    contact_person: str = Field(default="", description="Contact person")
    phone: str = Field(default="", description="Phone number")
    address: str = Field(default="", description="Address")
    tax_id: str = Field(default="", description="Tax registration number")
    payment_terms: PaymentTerms = Field(default=PaymentTerms.CREDIT, description="Payment terms")
    cash_percentage: Decimal = Field(
        default=Decimal("0"), ge=0, le=100, description="Cash share of HYBRID invoices"
    )
    commission_per_unit: Decimal = Field(
        default=Decimal("0"), ge=0, description="Sales-linked payment per unit sold"
    )
    credit_limit: Decimal | None = Field(default=None, ge=0, description="Credit limit (none = unlimited)")
    opening_balance: Decimal | None = Field(default=None, description="Balance carried in (signed)")


class UpdateVendorRequest(BaseModel):
    """Partial vendor update; omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1)
    contact_person: str | None = None
    phone: str | None = None
    address: str | None = None
    tax_id: str | None = None
    payment_terms: PaymentTerms | None = None
    cash_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    commission_per_unit: Decimal | None = Field(default=None, ge=0)
    credit_limit: Decimal | None = Field(default=None, ge=0)
    is_active: bool | None = None


class CreateClientRequest(BaseModel):
    """Request to create a client."""

    id: str = Field(..., min_length=1, description="Client ID")
    name: str = Field(..., min_length=1, description="Client name")
    contact_person: str = Field(default="", description="Contact person")
    phone: str = Field(default="", description="Phone number")
    gps_location: str = Field(default="", description="Delivery location")
    category: str = Field(default="", description="Client category")
    collection_period_days: int = Field(default=30, ge=0, description="Days until invoices fall due")
    credit_limit: Decimal | None = Field(default=None, ge=0, description="Credit limit (none = unlimited)")
    opening_balance: Decimal | None = Field(default=None, description="Balance carried in (signed)")


class UpdateClientRequest(BaseModel):
    """Partial client update; omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1)
    contact_person: str | None = None
    phone: str | None = None
    gps_location: str | None = None
    category: str | None = None
    collection_period_days: int | None = Field(default=None, ge=0)
    credit_limit: Decimal | None = Field(default=None, ge=0)
    is_active: bool | None = None


# ============================================================================
# Financial
# ============================================================================


class RecordPaymentRequest(BaseModel):
    """Payment to a vendor or from a client."""

    amount: Decimal = Field(..., gt=0, description="Payment amount")
    reference_doc_id: str = Field(
        default="",
        description="Receipt number, or the invoice being settled",
        examples=["INV-3f2a...", "RCPT-0042"],
    )
    notes: str | None = Field(default=None, description="Free text")
    transaction_date: datetime | None = Field(default=None, description="Defaults to now")


class PostNoteRequest(BaseModel):
    """Return, credit note or debit note against an account."""

    transaction_type: Literal["RETURN", "CREDIT_NOTE", "DEBIT_NOTE"] = Field(
        ..., description="Note type"
    )
    amount: Decimal = Field(..., gt=0, description="Note amount")
    reference_doc_id: str = Field(default="", description="Related document or invoice")
    notes: str | None = Field(default=None, description="Free text")
    transaction_date: datetime | None = Field(default=None, description="Defaults to now")


class ValidateOrderRequest(BaseModel):
    """Prospective client order to check before dispatch."""

    client_id: str = Field(..., min_length=1, description="Client ID")
    amount: Decimal = Field(..., ge=0, description="Order total")
    as_of: date | None = Field(default=None, description="Evaluation date (defaults to today)")


class SalesLinkedPaymentRequest(BaseModel):
    """Units sold for a sales-linked vendor payout."""

    units_sold: int = Field(..., ge=0, description="Units sold in the period")
