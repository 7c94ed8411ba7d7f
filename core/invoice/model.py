"""
Invoice model: the build context of one invoice.

Collects everything an invoice is generated from (customer, template, user,
date, timesheet entries, query) and hands it to the bound calculator and
number generator. Built per generation request and discarded once the
Invoice entity has been populated from it.
"""

from datetime import datetime

from core.invoice.calculator import AbstractCalculator
from core.invoice.number_generator import NumberGenerator
from core.invoice.query import InvoiceQuery
from core.models import Customer, InvoiceTemplate, Timesheet, User
from utils.timezone import add_days, now_utc, to_utc

DEFAULT_DUE_DAYS = 30


class InvoiceModel:
    """
    Mutable context passed to the calculator and number generator.

    Usage:
        model = InvoiceModel(customer=customer, template=template, user=user)
        model.add_entries(timesheets)
        model.calculator = DefaultCalculator()
        model.number_generator = DateNumberGenerator(repository)

        invoice = Invoice()
        invoice.set_model(model)
    """

    def __init__(
        self,
        customer: Customer | None = None,
        template: InvoiceTemplate | None = None,
        user: User | None = None,
        invoice_date: datetime | None = None,
        query: InvoiceQuery | None = None,
        default_due_days: int = DEFAULT_DUE_DAYS,
    ):
        self.customer = customer
        self.template = template
        self.user = user
        self.query = query if query is not None else InvoiceQuery()
        self.default_due_days = default_due_days
        self.invoice_date = invoice_date if invoice_date is not None else now_utc()

        self._entries: list[Timesheet] = []
        self._calculator: AbstractCalculator | None = None
        self._number_generator: NumberGenerator | None = None
        self._invoice_number: str | None = None

    @property
    def invoice_date(self) -> datetime:
        return self._invoice_date

    @invoice_date.setter
    def invoice_date(self, value: datetime) -> None:
        # Number generation formats this date, so it must be a real instant
        self._invoice_date = to_utc(value)
        self._invoice_number = None

    @property
    def entries(self) -> list[Timesheet]:
        """Timesheet entries in the order they were added."""
        return list(self._entries)

    def add_entries(self, entries: list[Timesheet]) -> None:
        self._entries.extend(entries)

    @property
    def calculator(self) -> AbstractCalculator:
        """
        Bound calculator.

        Raises:
            RuntimeError: If no calculator is set
        """
        if self._calculator is None:
            raise RuntimeError("Invoice model has no calculator")
        return self._calculator

    @calculator.setter
    def calculator(self, calculator: AbstractCalculator) -> None:
        calculator.set_model(self)
        self._calculator = calculator

    @property
    def number_generator(self) -> NumberGenerator:
        """
        Bound number generator.

        Raises:
            RuntimeError: If no number generator is set
        """
        if self._number_generator is None:
            raise RuntimeError("Invoice model has no number generator")
        return self._number_generator

    @number_generator.setter
    def number_generator(self, generator: NumberGenerator) -> None:
        generator.set_model(self)
        self._number_generator = generator
        self._invoice_number = None

    @property
    def invoice_number(self) -> str:
        """
        Number from the bound generator, generated once and then reused.

        Raises:
            RuntimeError: If no number generator is set
            DuplicateInvoiceNumberError: If the generator finds no free number
        """
        if self._invoice_number is None:
            self._invoice_number = self.number_generator.generate()
        return self._invoice_number

    @property
    def due_days(self) -> int:
        if self.template is None:
            return self.default_due_days
        return self.template.due_days

    @property
    def due_date(self) -> datetime:
        return add_days(self.invoice_date, self.due_days)
