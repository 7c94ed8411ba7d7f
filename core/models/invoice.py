"""Invoice domain model.

Amounts are Decimal with two decimal places, computed by the invoice
calculator and copied onto the invoice by set_model().
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from core.exceptions import InvalidInvoiceStatusError
from core.models.customer import Customer
from core.models.user import User
from utils.timezone import add_days, now_utc, to_utc

if TYPE_CHECKING:
    from core.invoice.model import InvoiceModel


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    NEW = "new"
    PENDING = "pending"
    PAID = "paid"
    CANCELED = "canceled"


def _parse_status(status: InvoiceStatus | str) -> InvoiceStatus:
    try:
        return InvoiceStatus(status)
    except ValueError:
        raise InvalidInvoiceStatusError(status) from None


class Invoice(BaseModel):
    """
    Generated invoice.

    Status is read-only; change it through set_status() or the mark_*()
    helpers, which keep payment_date consistent: it only survives while the
    invoice is PAID. A status passed to the constructor goes through the
    same rules.
    """

    id: int | None = None
    created_at: datetime | None = None
    due_days: int = Field(30, ge=0)
    currency: str | None = None
    customer: Customer | None = None
    user: User | None = None
    invoice_number: str | None = None
    invoice_filename: str | None = None
    subtotal: Decimal = Decimal("0.00")
    tax: Decimal = Decimal("0.00")
    vat: Decimal = Field(Decimal("0.00"), ge=0)
    total: Decimal = Decimal("0.00")
    payment_date: datetime | None = None
    comment: str | None = None

    _status: InvoiceStatus = PrivateAttr(default=InvoiceStatus.NEW)

    model_config = {"validate_assignment": True}

    def __init__(self, status: InvoiceStatus | str = InvoiceStatus.NEW, **data):
        new_status = _parse_status(status)
        super().__init__(**data)
        self.set_status(new_status)

    @field_validator("created_at", "payment_date")
    @classmethod
    def require_aware(cls, value: datetime | None) -> datetime | None:
        """Store instants in UTC; naive datetimes are rejected."""
        if value is None:
            return None
        return to_utc(value)

    @property
    def status(self) -> InvoiceStatus:
        return self._status

    @property
    def due_date(self) -> datetime | None:
        """Creation date plus due days, None until the invoice has a creation date."""
        if self.created_at is None:
            return None
        return add_days(self.created_at, self.due_days)

    @property
    def is_new(self) -> bool:
        return self.status == InvoiceStatus.NEW

    @property
    def is_pending(self) -> bool:
        return self.status == InvoiceStatus.PENDING

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def is_canceled(self) -> bool:
        return self.status == InvoiceStatus.CANCELED

    @property
    def is_overdue(self) -> bool:
        """Whether an unpaid (new or pending) invoice is past its due date."""
        if self.status not in (InvoiceStatus.NEW, InvoiceStatus.PENDING):
            return False
        due_date = self.due_date
        return due_date is not None and due_date < now_utc()

    def set_status(self, status: InvoiceStatus | str) -> None:
        """
        Move the invoice to another status.

        Any status may follow any other. Leaving PAID clears payment_date.

        Raises:
            InvalidInvoiceStatusError: If status is not a known value
        """
        new_status = _parse_status(status)

        self._status = new_status
        if new_status != InvoiceStatus.PAID:
            self.payment_date = None

    def mark_new(self) -> None:
        self.set_status(InvoiceStatus.NEW)

    def mark_pending(self) -> None:
        self.set_status(InvoiceStatus.PENDING)

    def mark_paid(self) -> None:
        """Move to PAID. payment_date is not set here; assign it separately."""
        self.set_status(InvoiceStatus.PAID)

    def mark_canceled(self) -> None:
        self.set_status(InvoiceStatus.CANCELED)

    def set_model(self, model: "InvoiceModel") -> None:
        """
        Populate the invoice from a fully built invoice model.

        Copies dates, references and computed totals. The invoice number is
        requested from the model's number generator only if this invoice has
        none yet. All values are read before any field is written, so a
        failing calculator or generator leaves the invoice unchanged.
        """
        calculator = model.calculator
        values = {
            "created_at": model.invoice_date,
            "customer": model.customer,
            "user": model.user,
            "currency": calculator.currency,
            "due_days": model.due_days,
            "subtotal": calculator.subtotal,
            "vat": calculator.vat,
            "tax": calculator.tax,
            "total": calculator.total,
        }
        if self.invoice_number is None:
            values["invoice_number"] = model.invoice_number

        for name, value in values.items():
            setattr(self, name, value)
