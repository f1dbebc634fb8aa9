"""Tests for the account balance tracker."""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from nexus_ledger.core.entities import (
    Client,
    EntityType,
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
from nexus_ledger.core.services.account_tracker import AccountBalanceTracker

DAY_ZERO = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def tracker():
    tracker = AccountBalanceTracker(clock=lambda: DAY_ZERO)
    tracker.create_vendor(Vendor(id="V-CASH", name="Cash Co", payment_terms=PaymentTerms.CASH))
    tracker.create_vendor(Vendor(id="V-CREDIT", name="Credit Co"))
    tracker.create_vendor(
        Vendor(
            id="V-HYBRID",
            name="Hybrid Co",
            payment_terms=PaymentTerms.HYBRID_SALES_LINKED,
            cash_percentage=Decimal("30"),
            commission_per_unit=Decimal("1.25"),
        )
    )
    tracker.create_client(
        Client(id="C-1", name="Acme", collection_period_days=15, credit_limit=Decimal("1000"))
    )
    return tracker


class TestAccounts:
    def test_create_starts_at_zero(self, tracker):
        vendor = tracker.create_vendor(
            Vendor(id="V-NEW", name="New Co", current_balance=Decimal("999"))
        )
        assert vendor.current_balance == Decimal("0")
        assert tracker.transactions_for(EntityType.VENDOR, "V-NEW") == []

    def test_duplicate_rejected(self, tracker):
        with pytest.raises(DuplicateEntityError):
            tracker.create_client(Client(id="C-1", name="Again"))

    def test_deleted_id_with_history_cannot_be_reused(self, tracker):
        """Re-creating C-1 would start at zero beside its old invoice."""
        client = tracker.get_client("C-1")
        tracker.post_invoice(client, Decimal("100"))
        tracker.delete_client("C-1")

        with pytest.raises(DuplicateEntityError):
            tracker.create_client(Client(id="C-1", name="Acme Again"))
        assert tracker.replay_balance(EntityType.CLIENT, "C-1") == Decimal("100.00")

    def test_deleted_id_without_history_can_be_reused(self, tracker):
        tracker.delete_vendor("V-CREDIT")
        vendor = tracker.create_vendor(Vendor(id="V-CREDIT", name="Credit Co"))
        assert tracker.verify_balance(EntityType.VENDOR, vendor.id)

    def test_positive_opening_balance_posts_debit_note(self, tracker):
        vendor = tracker.create_vendor(
            Vendor(id="V-OLD", name="Old Co"), opening_balance=Decimal("250")
        )
        assert vendor.current_balance == Decimal("250.00")
        (note,) = tracker.transactions_for(EntityType.VENDOR, "V-OLD")
        assert note.transaction_type == TransactionType.DEBIT_NOTE
        assert note.reference_doc_id == "OPENING"

    def test_negative_opening_balance_posts_credit_note(self, tracker):
        client = tracker.create_client(
            Client(id="C-OLD", name="Old Client"), opening_balance=Decimal("-100")
        )
        assert client.current_balance == Decimal("-100.00")
        (note,) = tracker.transactions_for(EntityType.CLIENT, "C-OLD")
        assert note.transaction_type == TransactionType.CREDIT_NOTE
        assert tracker.verify_balance(EntityType.CLIENT, "C-OLD")

    def test_update_changes_profile(self, tracker):
        updated = tracker.update_vendor("V-CREDIT", {"phone": "555-0100"})
        assert updated.phone == "555-0100"
        assert tracker.get_vendor("V-CREDIT").phone == "555-0100"

    @pytest.mark.parametrize("field", ["current_balance", "id", "created_at"])
    def test_update_protected_field_rejected(self, tracker, field):
        with pytest.raises(ValidationError):
            tracker.update_client("C-1", {field: "x"})

    def test_delete(self, tracker):
        tracker.delete_vendor("V-CASH")
        with pytest.raises(VendorNotFoundError):
            tracker.get_vendor("V-CASH")
        with pytest.raises(ClientNotFoundError):
            tracker.delete_client("C-404")

    def test_lists_sorted_by_name(self, tracker):
        assert [v.name for v in tracker.list_vendors()] == ["Cash Co", "Credit Co", "Hybrid Co"]

    def test_get_account_by_type(self, tracker):
        assert tracker.get_account(EntityType.CLIENT, "C-1").name == "Acme"
        assert tracker.get_account(EntityType.VENDOR, "V-CASH").name == "Cash Co"


class TestVendorInvoices:
    def test_cash_vendor_balance_unchanged(self, tracker):
        """A CASH invoice is paid at receipt."""
        posting = tracker.post_invoice(tracker.get_vendor("V-CASH"), Decimal("5000"))
        assert posting.cash_payment == Decimal("5000.00")
        assert posting.new_balance == Decimal("0.00")
        assert posting.transaction.paid_date == DAY_ZERO.date()
        assert tracker.outstanding_amount(posting.transaction) == Decimal("0")

    def test_credit_vendor_full_amount(self, tracker):
        posting = tracker.post_invoice(tracker.get_vendor("V-CREDIT"), Decimal("5000"))
        assert posting.cash_payment is None
        assert posting.new_balance == Decimal("5000.00")
        assert posting.transaction.paid_date is None

    def test_hybrid_vendor_split(self, tracker):
        posting = tracker.post_invoice(tracker.get_vendor("V-HYBRID"), Decimal("5000"))
        assert posting.cash_payment == Decimal("1500.00")
        assert posting.new_balance == Decimal("3500.00")
        assert posting.transaction.cash_portion == Decimal("1500.00")
        assert tracker.outstanding_amount(posting.transaction) == Decimal("3500.00")

    def test_fully_cash_hybrid_is_paid(self, tracker):
        tracker.update_vendor("V-HYBRID", {"cash_percentage": Decimal("100")})
        posting = tracker.post_invoice(tracker.get_vendor("V-HYBRID"), Decimal("80"))
        assert posting.new_balance == Decimal("0.00")
        assert posting.transaction.paid_date is not None

    def test_stale_account_copy_uses_stored_balance(self, tracker):
        stale = tracker.get_vendor("V-CREDIT")
        tracker.post_invoice(stale, Decimal("100"))
        posting = tracker.post_invoice(stale, Decimal("50"))
        assert posting.new_balance == Decimal("150.00")

    def test_zero_amount_rejected(self, tracker):
        with pytest.raises(ValidationError):
            tracker.post_invoice(tracker.get_vendor("V-CREDIT"), Decimal("0"))


class TestClientInvoices:
    def test_due_date_from_collection_period(self, tracker):
        posting = tracker.post_invoice(tracker.get_client("C-1"), Decimal("400"))
        assert posting.transaction.due_date == date(2024, 1, 16)
        assert posting.new_balance == Decimal("400.00")
        assert posting.cash_payment is None

    def test_explicit_due_date_ignored_for_clients(self, tracker):
        posting = tracker.post_invoice(
            tracker.get_client("C-1"), Decimal("400"), due_date=date(2030, 1, 1)
        )
        assert posting.transaction.due_date == date(2024, 1, 16)

    def test_transaction_date_drives_due_date(self, tracker):
        when = DAY_ZERO + timedelta(days=10)
        posting = tracker.post_invoice(
            tracker.get_client("C-1"), Decimal("1"), transaction_date=when
        )
        assert posting.transaction.due_date == date(2024, 1, 26)


class TestPayments:
    def test_payment_reduces_balance(self, tracker):
        client = tracker.get_client("C-1")
        tracker.post_invoice(client, Decimal("400"))
        payment = tracker.post_payment(client, Decimal("150"))
        assert payment.balance_after == Decimal("250.00")
        assert payment.transaction_type == TransactionType.PAYMENT

    def test_overpayment_goes_negative(self, tracker):
        payment = tracker.post_payment(tracker.get_vendor("V-CREDIT"), Decimal("100"))
        assert payment.balance_after == Decimal("-100.00")

    def test_non_positive_payment_rejected(self, tracker):
        with pytest.raises(ValidationError):
            tracker.post_payment(tracker.get_client("C-1"), Decimal("-5"))

    def test_partial_then_full_settlement(self, tracker):
        client = tracker.get_client("C-1")
        invoice = tracker.post_invoice(client, Decimal("1000"), reference_doc_id="MOV-1").transaction

        tracker.post_payment(client, Decimal("400"), reference_doc_id=invoice.id)
        (open_invoice,) = [t for t in tracker.transactions if t.id == invoice.id]
        assert open_invoice.paid_date is None
        assert tracker.outstanding_amount(open_invoice) == Decimal("600.00")

        later = DAY_ZERO + timedelta(days=3)
        tracker.post_payment(client, Decimal("600"), reference_doc_id="MOV-1", transaction_date=later)
        (settled,) = [t for t in tracker.transactions if t.id == invoice.id]
        assert settled.paid_date == later.date()
        assert tracker.get_client("C-1").current_balance == Decimal("0.00")

    def test_return_settles_referenced_invoice(self, tracker):
        client = tracker.get_client("C-1")
        invoice = tracker.post_invoice(client, Decimal("200")).transaction
        tracker.post_note(client, TransactionType.RETURN, Decimal("200"), invoice.id)
        (settled,) = [t for t in tracker.transactions if t.id == invoice.id]
        assert settled.paid_date is not None

    def test_payment_for_other_account_does_not_settle(self, tracker):
        invoice = tracker.post_invoice(tracker.get_client("C-1"), Decimal("200")).transaction
        tracker.create_client(Client(id="C-2", name="Other"))
        tracker.post_payment(tracker.get_client("C-2"), Decimal("200"), reference_doc_id=invoice.id)
        (still_open,) = [t for t in tracker.transactions if t.id == invoice.id]
        assert still_open.paid_date is None


class TestNotes:
    def test_debit_note_increases_balance(self, tracker):
        note = tracker.post_note(
            tracker.get_vendor("V-CREDIT"), TransactionType.DEBIT_NOTE, Decimal("75")
        )
        assert note.balance_after == Decimal("75.00")
        assert note.id.startswith("DBN")

    def test_credit_note_decreases_balance(self, tracker):
        note = tracker.post_note(
            tracker.get_client("C-1"), TransactionType.CREDIT_NOTE, Decimal("30")
        )
        assert note.balance_after == Decimal("-30.00")
        assert note.id.startswith("CRN")

    @pytest.mark.parametrize("transaction_type", [TransactionType.INVOICE, TransactionType.PAYMENT])
    def test_invoice_and_payment_types_rejected(self, tracker, transaction_type):
        with pytest.raises(ValidationError):
            tracker.post_note(tracker.get_client("C-1"), transaction_type, Decimal("1"))


class TestPolicies:
    def test_credit_limit_boundary(self, tracker):
        client = tracker.get_client("C-1")
        tracker.post_invoice(client, Decimal("900"))
        assert tracker.check_credit_limit(client, Decimal("100")) is False
        assert tracker.check_credit_limit(client, Decimal("100.01")) is True

    def test_no_credit_limit_never_blocks(self, tracker):
        vendor = tracker.get_vendor("V-CREDIT")
        assert tracker.check_credit_limit(vendor, Decimal("1000000")) is False

    def test_sales_linked_payment(self, tracker):
        assert tracker.calculate_sales_linked_payment(
            tracker.get_vendor("V-HYBRID"), 8
        ) == Decimal("10.00")

    def test_sales_linked_payment_zero_for_other_terms(self, tracker):
        assert tracker.calculate_sales_linked_payment(
            tracker.get_vendor("V-CREDIT"), 8
        ) == Decimal("0.00")


class TestAudit:
    def test_replay_matches_stored_balance(self, tracker):
        vendor = tracker.get_vendor("V-HYBRID")
        tracker.post_invoice(vendor, Decimal("5000"))
        tracker.post_payment(vendor, Decimal("1000"))
        tracker.post_note(vendor, TransactionType.RETURN, Decimal("250"))
        tracker.post_note(vendor, TransactionType.DEBIT_NOTE, Decimal("10"))

        assert tracker.replay_balance(EntityType.VENDOR, "V-HYBRID") == Decimal("2260.00")
        assert tracker.get_vendor("V-HYBRID").current_balance == Decimal("2260.00")
        assert tracker.verify_balance(EntityType.VENDOR, "V-HYBRID")

    def test_balance_after_chain(self, tracker):
        client = tracker.get_client("C-1")
        tracker.post_invoice(client, Decimal("100"))
        tracker.post_payment(client, Decimal("40"))
        history = tracker.transactions_for(EntityType.CLIENT, "C-1")
        assert [t.balance_after for t in history] == [Decimal("100.00"), Decimal("60.00")]

    def test_verify_detects_drift(self):
        tracker = AccountBalanceTracker(
            vendors=[Vendor(id="V-X", name="Drifted", current_balance=Decimal("999"))]
        )
        assert tracker.replay_balance(EntityType.VENDOR, "V-X") == Decimal("0")
        assert not tracker.verify_balance(EntityType.VENDOR, "V-X")

    def test_transaction_ids_unique(self, tracker):
        client = tracker.get_client("C-1")
        ids = {tracker.post_payment(client, Decimal("1")).id for _ in range(50)}
        assert len(ids) == 50
