"""
Invoice calculators.

A calculator is bound to exactly one InvoiceModel and derives every amount
of the invoice from the model's timesheet entries and template:

    subtotal = sum of entry rates
    tax      = subtotal * vat / 100
    total    = subtotal + tax

All three are rounded half-up to two decimal places. Calculators differ only
in how they present entries as invoice items (one per entry, one in total,
or one per user/activity/project).
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from core.exceptions import UnknownCalculatorError
from core.models import Activity, Project, Timesheet, User

if TYPE_CHECKING:
    from core.invoice.model import InvoiceModel

ROUNDING_PRECISION = Decimal("0.01")
ROUNDING_MODE = ROUND_HALF_UP


def round_amount(amount: Decimal) -> Decimal:
    """Round a money amount to two decimal places, half-up."""
    return Decimal(amount).quantize(ROUNDING_PRECISION, rounding=ROUNDING_MODE)


class InvoiceItem(BaseModel):
    """One line on the rendered invoice, built from one or more entries."""

    description: str | None = None
    amount: Decimal = Decimal("0")
    duration: int = Field(0, ge=0)
    begin: datetime | None = None
    end: datetime | None = None
    user: User | None = None
    activity: Activity | None = None
    project: Project | None = None
    entry_count: int = Field(0, ge=0)

    @classmethod
    def from_timesheet(cls, entry: Timesheet) -> "InvoiceItem":
        return cls(
            description=entry.description,
            amount=entry.rate,
            duration=entry.duration,
            begin=entry.begin,
            end=entry.end,
            user=entry.user,
            activity=entry.activity,
            project=entry.project,
            entry_count=1,
        )

    def merge(self, entry: Timesheet) -> None:
        """Add an entry's amount and duration, widening the time span."""
        self.amount += entry.rate
        self.duration += entry.duration
        self.entry_count += 1
        if entry.begin is not None and (self.begin is None or entry.begin < self.begin):
            self.begin = entry.begin
        if entry.end is not None and (self.end is None or entry.end > self.end):
            self.end = entry.end


class AbstractCalculator:
    """Base calculator: amounts shared by all variants, one item per entry."""

    name = ""

    def __init__(self):
        self._model: "InvoiceModel | None" = None

    def set_model(self, model: "InvoiceModel") -> None:
        """Bind the calculator to the invoice model it computes."""
        self._model = model

    @property
    def model(self) -> "InvoiceModel":
        if self._model is None:
            raise RuntimeError(f"Calculator {self.name!r} is not bound to an invoice model")
        return self._model

    @property
    def entries(self) -> list[InvoiceItem]:
        """Invoice items to render."""
        return [InvoiceItem.from_timesheet(entry) for entry in self.model.entries]

    @property
    def subtotal(self) -> Decimal:
        amount = sum((entry.rate for entry in self.model.entries), Decimal("0"))
        return round_amount(amount)

    @property
    def vat(self) -> Decimal:
        """VAT percentage from the template, 0 without one."""
        template = self.model.template
        if template is None:
            return Decimal("0")
        return template.vat

    @property
    def tax(self) -> Decimal:
        return round_amount(self.subtotal * self.vat / 100)

    @property
    def total(self) -> Decimal:
        return round_amount(self.subtotal + self.tax)

    @property
    def currency(self) -> str | None:
        """Currency of the billed customer."""
        customer = self.model.customer
        return customer.currency if customer is not None else None

    @property
    def time_worked(self) -> int:
        """Total duration of all entries in seconds."""
        return sum(entry.duration for entry in self.model.entries)


class DefaultCalculator(AbstractCalculator):
    """One invoice item per timesheet entry."""

    name = "default"


class ShortInvoiceCalculator(AbstractCalculator):
    """All entries summed into a single invoice item."""

    name = "short"

    @property
    def entries(self) -> list[InvoiceItem]:
        entries = self.model.entries
        if not entries:
            return []

        item = InvoiceItem.from_timesheet(entries[0])
        for entry in entries[1:]:
            item.merge(entry)
        return [item]


class GroupingCalculator(AbstractCalculator):
    """One invoice item per group, in order of the group's first entry."""

    def group_key(self, entry: Timesheet) -> Any:
        raise NotImplementedError

    def describe(self, item: InvoiceItem) -> str | None:
        return item.description

    @property
    def entries(self) -> list[InvoiceItem]:
        groups: dict[Any, InvoiceItem] = {}
        for entry in self.model.entries:
            key = self.group_key(entry)
            if key in groups:
                groups[key].merge(entry)
            else:
                groups[key] = InvoiceItem.from_timesheet(entry)

        items = list(groups.values())
        for item in items:
            item.description = self.describe(item)
        return items


def _identity_key(value: Any) -> Any:
    # Unsaved entities have no id; fall back to object identity
    if value is None:
        return None
    return value.id if value.id is not None else id(value)


class UserInvoiceCalculator(GroupingCalculator):
    """One item per user."""

    name = "user"

    def group_key(self, entry: Timesheet) -> Any:
        return _identity_key(entry.user)

    def describe(self, item: InvoiceItem) -> str | None:
        return item.user.display_name if item.user is not None else None


class ActivityInvoiceCalculator(GroupingCalculator):
    """One item per activity."""

    name = "activity"

    def group_key(self, entry: Timesheet) -> Any:
        return _identity_key(entry.activity)

    def describe(self, item: InvoiceItem) -> str | None:
        return item.activity.name if item.activity is not None else None


class ProjectInvoiceCalculator(GroupingCalculator):
    """One item per project."""

    name = "project"

    def group_key(self, entry: Timesheet) -> Any:
        return _identity_key(entry.project)

    def describe(self, item: InvoiceItem) -> str | None:
        return item.project.name if item.project is not None else None


CALCULATORS: dict[str, type[AbstractCalculator]] = {
    calculator.name: calculator
    for calculator in (
        DefaultCalculator,
        ShortInvoiceCalculator,
        UserInvoiceCalculator,
        ActivityInvoiceCalculator,
        ProjectInvoiceCalculator,
    )
}


def create_calculator(name: str) -> AbstractCalculator:
    """
    Instantiate a calculator by its template name.

    Raises:
        UnknownCalculatorError: If no calculator is registered under name
    """
    try:
        calculator_class = CALCULATORS[name]
    except KeyError:
        raise UnknownCalculatorError(f"Unknown invoice calculator: {name}") from None
    return calculator_class()
