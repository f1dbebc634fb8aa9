"""Financial domain entities: accounts, transactions and collection alerts."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntityType(str, Enum):
    """Counterparty kind of an account."""

    VENDOR = "VENDOR"
    CLIENT = "CLIENT"


class PaymentTerms(str, Enum):
    """How a vendor invoice is settled."""

    CASH = "CASH"  # Immediate payment
    CREDIT = "CREDIT"  # Full amount to balance
    HYBRID_SALES_LINKED = "HYBRID_SALES_LINKED"  # Part cash, part deferred


class TransactionType(str, Enum):
    """Types of financial transactions."""

    INVOICE = "INVOICE"
    PAYMENT = "PAYMENT"
    RETURN = "RETURN"
    CREDIT_NOTE = "CREDIT_NOTE"
    DEBIT_NOTE = "DEBIT_NOTE"

    @property
    def increases_balance(self) -> bool:
        return self in (TransactionType.INVOICE, TransactionType.DEBIT_NOTE)


class Account(BaseModel):
    """Fields shared by vendors and clients."""

    id: str
    name: str
    contact_person: str = ""
    phone: str = ""
    current_balance: Decimal = Decimal("0")
    credit_limit: Decimal | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def entity_type(self) -> EntityType:
        """VENDOR or CLIENT; Vendor and Client override this."""
        raise NotImplementedError

    @property
    def lock_key(self) -> str:
        return f"account:{self.entity_type.value}:{self.id}"


class Vendor(Account):
    """Supplier; current_balance is what the business owes them."""

    address: str = ""
    tax_id: str = ""
    payment_terms: PaymentTerms = PaymentTerms.CREDIT
    cash_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    commission_per_unit: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def entity_type(self) -> EntityType:
        return EntityType.VENDOR


class Client(Account):
    """Customer; current_balance is what they owe the business."""

    gps_location: str = ""
    category: str = ""
    collection_period_days: int = Field(default=30, ge=0)

    @property
    def entity_type(self) -> EntityType:
        return EntityType.CLIENT


class FinancialTransaction(BaseModel):
    """
    Immutable balance-changing event for one account.

    paid_date is the only field ever replaced after creation; the tracker does
    so through model_copy when an invoice is settled.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    entity_type: EntityType
    entity_id: str
    entity_name: str = ""
    transaction_date: datetime
    transaction_type: TransactionType
    amount: Decimal = Field(..., gt=0)
    cash_portion: Decimal = Field(default=Decimal("0"), ge=0)
    balance_after: Decimal
    reference_doc_id: str = ""
    notes: str | None = None
    due_date: date | None = None
    paid_date: date | None = None

    @property
    def balance_delta(self) -> Decimal:
        """Signed effect of this transaction on the account balance."""
        if self.transaction_type.increases_balance:
            return self.amount - self.cash_portion
        return -self.amount

    @property
    def is_open_invoice(self) -> bool:
        return self.transaction_type == TransactionType.INVOICE and self.paid_date is None


class CollectionAlert(BaseModel):
    """Overdue client invoice; derived on demand, never persisted."""

    transaction_id: str
    client_id: str
    client_name: str
    invoice_reference: str
    invoice_date: datetime
    due_date: date
    amount: Decimal
    outstanding: Decimal
    days_overdue: int
    current_balance: Decimal


class AgingReport(BaseModel):
    """Overdue receivables grouped by days past due."""

    bucket_0_30: Decimal = Field(default=Decimal("0"), serialization_alias="0-30")
    bucket_31_60: Decimal = Field(default=Decimal("0"), serialization_alias="31-60")
    bucket_61_plus: Decimal = Field(default=Decimal("0"), serialization_alias="61+")

    @property
    def total(self) -> Decimal:
        return self.bucket_0_30 + self.bucket_31_60 + self.bucket_61_plus


class FinancialSummary(BaseModel):
    """Dashboard totals across all accounts."""

    total_payables: Decimal
    total_receivables: Decimal
    net_position: Decimal
    overdue_count: int
    overdue_amount: Decimal
