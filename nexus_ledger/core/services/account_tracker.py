"""
Account Balance Tracker.

Maintains the running balance of every vendor (payables) and client
(receivables). Balances only change through _post, which appends exactly one
FinancialTransaction whose balance_after equals the account's new stored
balance, so any balance can be rebuilt by replaying its transactions from zero.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Any

from nexus_ledger.config import get_logger
from nexus_ledger.core.entities.financial import (
    Account,
    Client,
    EntityType,
    FinancialTransaction,
    PaymentTerms,
    TransactionType,
    Vendor,
)
from nexus_ledger.core.exceptions import (
    ClientNotFoundError,
    DuplicateEntityError,
    ValidationError,
    VendorNotFoundError,
)
from nexus_ledger.core.identifiers import new_id
from nexus_ledger.core.services.valuation import DEFAULT_PLACES, quantize_money

logger = get_logger(__name__)

# Identifier prefixes per transaction type
_ID_PREFIX: dict[TransactionType, str] = {
    TransactionType.INVOICE: "INV",
    TransactionType.PAYMENT: "PAY",
    TransactionType.RETURN: "RET",
    TransactionType.CREDIT_NOTE: "CRN",
    TransactionType.DEBIT_NOTE: "DBN",
}

# Transactions that settle a referenced invoice
_SETTLING_TYPES = (
    TransactionType.PAYMENT,
    TransactionType.RETURN,
    TransactionType.CREDIT_NOTE,
)

# Fields that only the tracker itself may change
_PROTECTED_FIELDS = {"id", "current_balance", "created_at"}


@dataclass
class InvoicePosting:
    """Result of posting an invoice."""

    transaction: FinancialTransaction
    new_balance: Decimal
    cash_payment: Decimal | None = None


class AccountBalanceTracker:
    """Vendors, clients and their transaction history."""

    def __init__(
        self,
        vendors: Iterable[Vendor] = (),
        clients: Iterable[Client] = (),
        transactions: Iterable[FinancialTransaction] = (),
        money_places: int = DEFAULT_PLACES,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._vendors: dict[str, Vendor] = {v.id: v for v in vendors}
        self._clients: dict[str, Client] = {c.id: c for c in clients}
        self._transactions: list[FinancialTransaction] = list(transactions)
        self._places = money_places
        self._clock = clock or (lambda: datetime.now(UTC))

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = self._vendors.get(vendor_id)
        if vendor is None:
            raise VendorNotFoundError(vendor_id)
        return vendor

    def get_client(self, client_id: str) -> Client:
        client = self._clients.get(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)
        return client

    def get_account(self, entity_type: EntityType, entity_id: str) -> Account:
        if entity_type == EntityType.VENDOR:
            return self.get_vendor(entity_id)
        return self.get_client(entity_id)

    def list_vendors(self) -> list[Vendor]:
        return sorted(self._vendors.values(), key=lambda v: v.name)

    def list_clients(self) -> list[Client]:
        return sorted(self._clients.values(), key=lambda c: c.name)

    def create_vendor(self, vendor: Vendor, opening_balance: Decimal | None = None) -> Vendor:
        """
        Register a vendor with a zero balance, then post any opening balance.

        Ids of deleted accounts that still have transactions cannot be reused.
        """
        if vendor.id in self._vendors or self.transactions_for(EntityType.VENDOR, vendor.id):
            raise DuplicateEntityError("vendor", vendor.id)
        self._vendors[vendor.id] = vendor.model_copy(update={"current_balance": Decimal("0")})
        logger.info("vendor_created", vendor_id=vendor.id, terms=vendor.payment_terms.value)
        self._post_opening_balance(self._vendors[vendor.id], opening_balance)
        return self._vendors[vendor.id]

    def create_client(self, client: Client, opening_balance: Decimal | None = None) -> Client:
        """Register a client with a zero balance, then post any opening balance."""
        if client.id in self._clients or self.transactions_for(EntityType.CLIENT, client.id):
            raise DuplicateEntityError("client", client.id)
        self._clients[client.id] = client.model_copy(update={"current_balance": Decimal("0")})
        logger.info("client_created", client_id=client.id)
        self._post_opening_balance(self._clients[client.id], opening_balance)
        return self._clients[client.id]

    def _post_opening_balance(self, account: Account, opening_balance: Decimal | None) -> None:
        if not opening_balance:
            return
        note_type = (
            TransactionType.DEBIT_NOTE if opening_balance > 0 else TransactionType.CREDIT_NOTE
        )
        self.post_note(account, note_type, abs(opening_balance), "OPENING", "Opening balance")

    def update_vendor(self, vendor_id: str, changes: dict[str, Any]) -> Vendor:
        vendor = self.get_vendor(vendor_id)
        self._check_protected(changes)
        updated = Vendor.model_validate({**vendor.model_dump(), **changes})
        self._vendors[vendor_id] = updated
        logger.info("vendor_updated", vendor_id=vendor_id, fields=sorted(changes))
        return updated

    def update_client(self, client_id: str, changes: dict[str, Any]) -> Client:
        client = self.get_client(client_id)
        self._check_protected(changes)
        updated = Client.model_validate({**client.model_dump(), **changes})
        self._clients[client_id] = updated
        logger.info("client_updated", client_id=client_id, fields=sorted(changes))
        return updated

    @staticmethod
    def _check_protected(changes: dict[str, Any]) -> None:
        protected = sorted(_PROTECTED_FIELDS & set(changes))
        if protected:
            raise ValidationError(protected[0], "cannot be changed directly", changes[protected[0]])

    def delete_vendor(self, vendor_id: str) -> None:
        self.get_vendor(vendor_id)
        del self._vendors[vendor_id]
        logger.info("vendor_deleted", vendor_id=vendor_id)

    def delete_client(self, client_id: str) -> None:
        self.get_client(client_id)
        del self._clients[client_id]
        logger.info("client_deleted", client_id=client_id)

    # ------------------------------------------------------------------
    # Postings
    # ------------------------------------------------------------------

    def _now(self, transaction_date: datetime | None) -> datetime:
        when = transaction_date or self._clock()
        if when.tzinfo is None:
            when = when.replace(tzinfo=UTC)
        return when

    def _store_account(self, account: Account) -> None:
        if isinstance(account, Vendor):
            self._vendors[account.id] = account
        else:
            self._clients[account.id] = account  # type: ignore[assignment]

    def _post(
        self,
        account: Account,
        transaction_type: TransactionType,
        amount: Decimal,
        reference_doc_id: str,
        notes: str | None,
        transaction_date: datetime | None,
        cash_portion: Decimal = Decimal("0"),
        due_date: date | None = None,
        paid_date: date | None = None,
    ) -> FinancialTransaction:
        """Append one transaction and move the stored balance in lock-step."""
        amount = quantize_money(amount, self._places)
        if amount <= 0:
            raise ValidationError("amount", "must be positive", amount)

        # Always work from the stored account; callers may hold a stale copy
        current = self.get_account(account.entity_type, account.id)
        when = self._now(transaction_date)

        draft = FinancialTransaction(
            id=new_id(_ID_PREFIX[transaction_type]),
            entity_type=current.entity_type,
            entity_id=current.id,
            entity_name=current.name,
            transaction_date=when,
            transaction_type=transaction_type,
            amount=amount,
            cash_portion=quantize_money(cash_portion, self._places),
            balance_after=current.current_balance,
            reference_doc_id=reference_doc_id,
            notes=notes,
            due_date=due_date,
            paid_date=paid_date,
        )
        new_balance = quantize_money(current.current_balance + draft.balance_delta, self._places)
        transaction = draft.model_copy(update={"balance_after": new_balance})

        self._store_account(current.model_copy(update={"current_balance": new_balance}))
        self._transactions.append(transaction)
        return transaction

    def post_invoice(
        self,
        account: Account,
        total_amount: Decimal,
        reference_doc_id: str = "",
        due_date: date | None = None,
        transaction_date: datetime | None = None,
        notes: str | None = None,
    ) -> InvoicePosting:
        """
        Post an invoice under the account's payment policy.

        Vendors:
            CASH     -> settled out-of-band, balance unchanged, cash_payment = total
            CREDIT   -> full amount to balance
            HYBRID   -> cash_payment = total * cash_percentage / 100, rest to balance
        Clients:
            full amount to balance, due_date = transaction date + collection period

        Args:
            account: Vendor or Client
            total_amount: Invoice total
            reference_doc_id: Movement or document the invoice belongs to
            due_date: Explicit due date (vendors only; client due dates are derived)
            transaction_date: Defaults to now
            notes: Free text

        Returns:
            InvoicePosting with the transaction, new balance and cash portion
        """
        total = quantize_money(total_amount, self._places)
        when = self._now(transaction_date)
        cash_payment: Decimal | None = None
        paid_date: date | None = None

        if isinstance(account, Vendor):
            vendor = self.get_vendor(account.id)
            if vendor.payment_terms == PaymentTerms.CASH:
                cash_payment = total
                paid_date = when.date()
            elif vendor.payment_terms == PaymentTerms.HYBRID_SALES_LINKED:
                cash_payment = quantize_money(
                    total * vendor.cash_percentage / Decimal(100), self._places
                )
                if cash_payment == total:
                    paid_date = when.date()
        else:
            client = self.get_client(account.id)
            due_date = when.date() + timedelta(days=client.collection_period_days)

        transaction = self._post(
            account,
            TransactionType.INVOICE,
            total,
            reference_doc_id,
            notes,
            when,
            cash_portion=cash_payment or Decimal("0"),
            due_date=due_date,
            paid_date=paid_date,
        )
        logger.info(
            "invoice_posted",
            entity_type=transaction.entity_type.value,
            entity_id=transaction.entity_id,
            amount=str(transaction.amount),
            cash_payment=str(cash_payment) if cash_payment is not None else None,
            balance_after=str(transaction.balance_after),
        )
        return InvoicePosting(
            transaction=transaction,
            new_balance=transaction.balance_after,
            cash_payment=cash_payment,
        )

    def post_payment(
        self,
        account: Account,
        amount: Decimal,
        reference_doc_id: str = "",
        notes: str | None = None,
        transaction_date: datetime | None = None,
    ) -> FinancialTransaction:
        """
        Record a payment (to a vendor or from a client).

        The balance may go negative, which represents a credit in the
        counterparty's favour. When reference_doc_id names an open invoice of
        the same account, the payment is allocated to it and the invoice is
        marked paid once nothing is outstanding.
        """
        when = self._now(transaction_date)
        transaction = self._post(
            account,
            TransactionType.PAYMENT,
            amount,
            reference_doc_id,
            notes,
            when,
            paid_date=when.date(),
        )
        self._settle_referenced_invoice(transaction)
        logger.info(
            "payment_posted",
            entity_type=transaction.entity_type.value,
            entity_id=transaction.entity_id,
            amount=str(transaction.amount),
            balance_after=str(transaction.balance_after),
        )
        return transaction

    def post_note(
        self,
        account: Account,
        transaction_type: TransactionType,
        amount: Decimal,
        reference_doc_id: str = "",
        notes: str | None = None,
        transaction_date: datetime | None = None,
    ) -> FinancialTransaction:
        """Record a RETURN, CREDIT_NOTE or DEBIT_NOTE."""
        if transaction_type in (TransactionType.INVOICE, TransactionType.PAYMENT):
            raise ValidationError(
                "transaction_type", "use post_invoice or post_payment", transaction_type.value
            )
        transaction = self._post(
            account, transaction_type, amount, reference_doc_id, notes, transaction_date
        )
        if transaction_type in _SETTLING_TYPES:
            self._settle_referenced_invoice(transaction)
        logger.info(
            "note_posted",
            type=transaction_type.value,
            entity_id=transaction.entity_id,
            amount=str(transaction.amount),
            balance_after=str(transaction.balance_after),
        )
        return transaction

    # ------------------------------------------------------------------
    # Invoice settlement
    # ------------------------------------------------------------------

    def _find_open_invoice(self, settlement: FinancialTransaction) -> int | None:
        reference = settlement.reference_doc_id
        if not reference:
            return None
        candidates = [
            i
            for i, t in enumerate(self._transactions)
            if t.is_open_invoice
            and t.entity_type == settlement.entity_type
            and t.entity_id == settlement.entity_id
        ]
        for i in candidates:
            if self._transactions[i].id == reference:
                return i
        for i in candidates:
            if self._transactions[i].reference_doc_id == reference:
                return i
        return None

    def _settle_referenced_invoice(self, settlement: FinancialTransaction) -> None:
        index = self._find_open_invoice(settlement)
        if index is None:
            return
        invoice = self._transactions[index]
        if self.outstanding_amount(invoice) <= 0:
            self._transactions[index] = invoice.model_copy(
                update={"paid_date": settlement.transaction_date.date()}
            )
            logger.info("invoice_settled", invoice_id=invoice.id, entity_id=invoice.entity_id)

    def outstanding_amount(self, invoice: FinancialTransaction) -> Decimal:
        """Invoice amount not yet covered by cash or referencing settlements."""
        settled = sum(
            (
                t.amount
                for t in self._transactions
                if t.transaction_type in _SETTLING_TYPES
                and t.entity_type == invoice.entity_type
                and t.entity_id == invoice.entity_id
                and t.reference_doc_id in (invoice.id, invoice.reference_doc_id)
                and t.reference_doc_id
            ),
            Decimal("0"),
        )
        return max(invoice.amount - invoice.cash_portion - settled, Decimal("0"))

    # ------------------------------------------------------------------
    # Policies and audit
    # ------------------------------------------------------------------

    def check_credit_limit(self, account: Account, proposed_amount: Decimal) -> bool:
        """True (blocking) when balance + proposed amount exceeds the credit limit."""
        current = self.get_account(account.entity_type, account.id)
        if current.credit_limit is None:
            return False
        return current.current_balance + Decimal(proposed_amount) > current.credit_limit

    def calculate_sales_linked_payment(self, vendor: Vendor, units_sold: int) -> Decimal:
        """Commission owed to a sales-linked vendor for units sold."""
        if vendor.payment_terms != PaymentTerms.HYBRID_SALES_LINKED or not vendor.commission_per_unit:
            return quantize_money(Decimal("0"), self._places)
        return quantize_money(units_sold * vendor.commission_per_unit, self._places)

    def transactions_for(self, entity_type: EntityType, entity_id: str) -> list[FinancialTransaction]:
        """Transactions of one account in posting order."""
        return [
            t
            for t in self._transactions
            if t.entity_type == entity_type and t.entity_id == entity_id
        ]

    def replay_balance(self, entity_type: EntityType, entity_id: str) -> Decimal:
        """Rebuild a balance from zero using the account's transaction history."""
        balance = Decimal("0")
        for transaction in self.transactions_for(entity_type, entity_id):
            balance = quantize_money(balance + transaction.balance_delta, self._places)
        return balance

    def verify_balance(self, entity_type: EntityType, entity_id: str) -> bool:
        """Stored balance matches both the replayed history and the last snapshot."""
        account = self.get_account(entity_type, entity_id)
        history = self.transactions_for(entity_type, entity_id)
        last = history[-1].balance_after if history else Decimal("0")
        replayed = self.replay_balance(entity_type, entity_id)
        return account.current_balance == replayed == last

    @property
    def transactions(self) -> list[FinancialTransaction]:
        return list(self._transactions)

    def vendors_snapshot(self) -> list[Vendor]:
        return list(self._vendors.values())

    def clients_snapshot(self) -> list[Client]:
        return list(self._clients.values())
