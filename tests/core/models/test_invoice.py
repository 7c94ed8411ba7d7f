"""Tests for the Invoice entity: defaults, status machine and set_model."""

from datetime import timedelta
from decimal import Decimal

import pytest

from core.exceptions import InvalidInvoiceStatusError
from core.models import Invoice, InvoiceStatus
from utils.timezone import now_utc


class TestDefaults:
    """A freshly created invoice."""

    def test_default_values(self):
        """Starts NEW with 30 due days, zero amounts and no references."""
        sut = Invoice()

        assert sut.created_at is None
        assert sut.currency is None
        assert sut.customer is None
        assert sut.due_date is None
        assert sut.due_days == 30
        assert sut.id is None
        assert sut.invoice_filename is None
        assert sut.invoice_number is None
        assert sut.subtotal == Decimal("0")
        assert sut.tax == Decimal("0")
        assert sut.total == Decimal("0")
        assert sut.vat == Decimal("0")
        assert sut.user is None
        assert sut.payment_date is None
        assert sut.comment is None

    def test_default_status_flags(self):
        """Only is_new is set, and a new invoice is not overdue."""
        sut = Invoice()

        assert sut.status == InvoiceStatus.NEW
        assert sut.is_new
        assert not sut.is_pending
        assert not sut.is_paid
        assert not sut.is_canceled
        assert not sut.is_overdue


class TestSetStatus:
    """Tests for Invoice.set_status."""

    def test_rejects_unknown_status(self):
        """Unknown values raise with a fixed message."""
        sut = Invoice()

        with pytest.raises(InvalidInvoiceStatusError, match="Unknown invoice status"):
            sut.set_status("foo")

    def test_unknown_status_is_value_error(self):
        """Callers catching ValueError see invalid statuses too."""
        with pytest.raises(ValueError):
            Invoice().set_status("PAID")

    def test_rejected_status_leaves_invoice_unchanged(self):
        """A failed transition keeps the previous status."""
        sut = Invoice()
        sut.mark_pending()

        with pytest.raises(InvalidInvoiceStatusError):
            sut.set_status("archived")

        assert sut.is_pending

    @pytest.mark.parametrize("raw", ["new", "pending", "paid", "canceled"])
    def test_accepts_literal_values(self, raw):
        """Each of the four literal values is accepted."""
        sut = Invoice()
        sut.set_status(raw)
        assert sut.status.value == raw


class TestTransitions:
    """Status transitions and their flags."""

    def test_pending_paid_pending(self):
        """Each step reports exactly one status flag."""
        sut = Invoice()

        sut.mark_pending()
        assert (sut.is_new, sut.is_pending, sut.is_paid, sut.is_canceled) == (False, True, False, False)
        assert sut.status == InvoiceStatus.PENDING

        sut.mark_paid()
        assert (sut.is_new, sut.is_pending, sut.is_paid, sut.is_canceled) == (False, False, True, False)
        assert sut.status == InvoiceStatus.PAID

        sut.set_status(InvoiceStatus.PENDING)
        assert sut.is_pending
        assert sut.status == InvoiceStatus.PENDING

    def test_canceled_then_new(self):
        """Any status can follow any other."""
        sut = Invoice()

        sut.mark_canceled()
        assert (sut.is_new, sut.is_pending, sut.is_paid, sut.is_canceled) == (False, False, False, True)
        assert not sut.is_overdue

        sut.mark_new()
        assert (sut.is_new, sut.is_pending, sut.is_paid, sut.is_canceled) == (True, False, False, False)
        assert not sut.is_overdue


class TestPaymentDate:
    """payment_date only survives while the invoice is paid."""

    def test_kept_while_paid(self):
        sut = Invoice()
        paid_at = now_utc()

        sut.mark_paid()
        sut.payment_date = paid_at

        assert sut.payment_date == paid_at
        sut.mark_paid()
        assert sut.payment_date == paid_at

    def test_mark_paid_does_not_set_date(self):
        """Marking paid leaves the date for the caller to provide."""
        sut = Invoice()
        sut.mark_paid()
        assert sut.payment_date is None

    def test_cleared_by_pending(self):
        sut = Invoice()
        sut.payment_date = now_utc()

        sut.mark_pending()

        assert sut.payment_date is None

    def test_cleared_by_new(self):
        sut = Invoice()
        sut.mark_paid()
        sut.payment_date = now_utc()

        sut.mark_new()

        assert sut.payment_date is None

    def test_cleared_by_canceled(self):
        sut = Invoice()
        sut.mark_paid()
        sut.payment_date = now_utc()

        sut.mark_canceled()

        assert sut.payment_date is None

    def test_rejects_naive_datetime(self):
        """Payment dates must carry a timezone."""
        from datetime import datetime
        from pydantic import ValidationError

        with pytest.raises(ValidationError, match="naive"):
            Invoice().payment_date = datetime(2024, 1, 1, 12, 0)


class TestStatusGuard:
    """Status only changes through set_status and the mark helpers."""

    def test_status_is_read_only(self):
        """Direct assignment cannot skip payment date clearing."""
        sut = Invoice()
        sut.mark_paid()
        sut.payment_date = now_utc()

        with pytest.raises(AttributeError):
            sut.status = InvoiceStatus.PENDING

        assert sut.is_paid
        assert sut.payment_date is not None

    def test_constructor_accepts_status(self):
        sut = Invoice(status="pending")
        assert sut.is_pending

    def test_constructor_clears_payment_date_when_not_paid(self):
        sut = Invoice(status=InvoiceStatus.PENDING, payment_date=now_utc())
        assert sut.payment_date is None

    def test_constructor_keeps_payment_date_when_paid(self):
        paid_at = now_utc()
        sut = Invoice(status="paid", payment_date=paid_at)

        assert sut.is_paid
        assert sut.payment_date == paid_at

    def test_constructor_rejects_unknown_status(self):
        with pytest.raises(InvalidInvoiceStatusError, match="Unknown invoice status"):
            Invoice(status="foo")


class TestVat:
    """VAT is never negative."""

    def test_rejected_in_constructor(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError, match="vat"):
            Invoice(vat=Decimal("-1"))

    def test_rejected_on_assignment(self):
        from pydantic import ValidationError

        sut = Invoice()
        with pytest.raises(ValidationError, match="vat"):
            sut.vat = Decimal("-0.01")
        assert sut.vat == Decimal("0")


class TestOverdue:
    """Tests for Invoice.is_overdue."""

    @pytest.fixture
    def past_due(self):
        return Invoice(created_at=now_utc() - timedelta(days=40), due_days=30)

    def test_new_past_due_is_overdue(self, past_due):
        """NEW counts as unpaid."""
        assert past_due.is_new
        assert past_due.is_overdue

    def test_pending_past_due_is_overdue(self, past_due):
        past_due.mark_pending()
        assert past_due.is_overdue

    @pytest.mark.parametrize("status", [InvoiceStatus.PAID, InvoiceStatus.CANCELED])
    def test_paid_and_canceled_never_overdue(self, past_due, status):
        past_due.set_status(status)
        assert not past_due.is_overdue

    def test_not_overdue_before_due_date(self):
        sut = Invoice(created_at=now_utc() - timedelta(days=5), due_days=30)
        assert not sut.is_overdue

    def test_due_date_is_created_plus_due_days(self):
        created = now_utc()
        sut = Invoice(created_at=created, due_days=9)
        assert sut.due_date == created + timedelta(days=9)


class TestSetModel:
    """Tests for Invoice.set_model."""

    def test_populates_from_model(self, invoice_model_factory, two_months_ago):
        """Copies dates, references, totals and a date based number."""
        sut = Invoice()
        sut.set_model(invoice_model_factory(two_months_ago))

        assert sut.is_overdue
        assert sut.created_at == two_months_ago
        assert sut.currency == "USD"
        assert sut.customer is not None
        assert sut.due_date == two_months_ago + timedelta(days=9)
        assert sut.due_days == 9
        assert sut.id is None
        assert sut.invoice_filename is None
        assert sut.invoice_number == two_months_ago.strftime("%y%m%d")
        assert sut.subtotal == Decimal("293.27")
        assert sut.tax == Decimal("55.72")
        assert sut.total == Decimal("348.99")
        assert sut.user is not None
        assert sut.vat == 19

        sut.comment = "foo bar"
        assert sut.comment == "foo bar"

    def test_keeps_existing_number(self, invoice_model_factory, two_months_ago, number_lookup):
        """An invoice that already has a number never gets a new one."""
        sut = Invoice(invoice_number="LEGACY-1")

        sut.set_model(invoice_model_factory(two_months_ago))

        assert sut.invoice_number == "LEGACY-1"
        assert number_lookup.checked == []

    def test_failure_leaves_invoice_untouched(self, invoice_model_factory, two_months_ago, lookup_factory):
        """A generator that finds no free number changes nothing."""
        from core.exceptions import DuplicateInvoiceNumberError
        from core.invoice import DateNumberGenerator

        model = invoice_model_factory(two_months_ago)
        taken = lookup_factory({two_months_ago.strftime("%y%m%d")})
        model.number_generator = DateNumberGenerator(taken, max_attempts=1)

        sut = Invoice()
        with pytest.raises(DuplicateInvoiceNumberError):
            sut.set_model(model)

        assert sut.created_at is None
        assert sut.customer is None
        assert sut.total == Decimal("0")

    def test_empty_model_gives_zero_totals(self, invoice_model_factory, two_months_ago):
        """No entries is not an error."""
        sut = Invoice()
        sut.set_model(invoice_model_factory(two_months_ago, entries=[]))

        assert sut.subtotal == Decimal("0")
        assert sut.tax == Decimal("0")
        assert sut.total == Decimal("0")
        assert sut.invoice_number is not None
