"""
Invoice service: the invoice generation workflow.

Builds an InvoiceModel from the selected timesheet entries, picks the
calculator and number generator named by the invoice template, populates a
new Invoice from the model and stores it. Status changes go through here so
they are persisted and published.
"""

import logging
from datetime import datetime

from clients.postgres_client import PostgresClient
from core.config import InvoiceConfig
from core.event_bus import EventBus
from core.events import InvoiceCreated, InvoicePaid, InvoiceStatusChanged
from core.invoice import InvoiceModel, InvoiceQuery, create_calculator, create_number_generator
from core.models import Customer, Invoice, InvoiceStatus, InvoiceTemplate, Timesheet, User
from core.repositories.invoice_repository import InvoiceRepository
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice generation and lifecycle."""

    def __init__(self, repository: InvoiceRepository, event_bus: EventBus, config: InvoiceConfig | None = None):
        self.repository = repository
        self.event_bus = event_bus
        self.config = config or InvoiceConfig()

    @classmethod
    def from_config(cls, config: InvoiceConfig, event_bus: EventBus | None = None) -> "InvoiceService":
        """
        Wire a service to the database named in config.

        Raises:
            ValueError: If config has no database_url
        """
        if not config.database_url:
            raise ValueError("database_url is required to create an InvoiceService")

        repository = InvoiceRepository(PostgresClient(config.database_url))
        return cls(repository, event_bus or EventBus(), config)

    def create_model(
        self,
        customer: Customer,
        template: InvoiceTemplate,
        user: User,
        entries: list[Timesheet],
        query: InvoiceQuery | None = None,
        invoice_date: datetime | None = None,
    ) -> InvoiceModel:
        """
        Assemble the build context for one invoice.

        Args:
            customer: Billed customer
            template: Template providing VAT, due days and strategy names
            user: User generating the invoice
            entries: Timesheet entries already selected by query
            query: Filters the entries were selected with
            invoice_date: Invoice date (defaults to now)

        Raises:
            UnknownCalculatorError: If the template names an unknown calculator
            UnknownNumberGeneratorError: If the template names an unknown generator
        """
        model = InvoiceModel(
            customer=customer,
            template=template,
            user=user,
            invoice_date=invoice_date,
            query=query,
            default_due_days=self.config.default_due_days,
        )
        model.add_entries(entries)
        model.calculator = create_calculator(template.calculator)
        model.number_generator = create_number_generator(
            template.number_generator,
            self.repository,
            max_attempts=self.config.number_max_attempts,
            pattern=self.config.number_format,
        )
        return model

    def create_invoice(self, model: InvoiceModel) -> Invoice:
        """
        Generate, store and announce an invoice.

        Missing customer, template or entries are not errors; they give an
        invoice with zero totals.

        Returns:
            Persisted invoice in NEW status

        Raises:
            DuplicateInvoiceNumberError: If no free number is found, or another
                invoice took the number before this one was stored
        """
        invoice = Invoice()
        invoice.set_model(model)
        self.repository.save(invoice)

        logger.info(
            "Created invoice %s: %d entries, total %s %s",
            invoice.invoice_number,
            len(model.entries),
            invoice.total,
            invoice.currency,
        )

        self.event_bus.publish(InvoiceCreated.create(invoice=invoice))
        return invoice

    def change_status(
        self,
        invoice: Invoice,
        status: InvoiceStatus | str,
        payment_date: datetime | None = None,
    ) -> Invoice:
        """
        Move an invoice to another status and store it.

        Args:
            invoice: Invoice to update
            status: Target status
            payment_date: Payment date for PAID (defaults to now); ignored otherwise

        Raises:
            InvalidInvoiceStatusError: If status is not a known value
        """
        old_status = invoice.status
        invoice.set_status(status)
        if invoice.is_paid:
            invoice.payment_date = payment_date or invoice.payment_date or now_utc()

        self.repository.save(invoice)

        if invoice.status != old_status:
            logger.info(
                "Invoice %s status %s -> %s",
                invoice.invoice_number,
                old_status.value,
                invoice.status.value,
            )
            self.event_bus.publish(InvoiceStatusChanged.create(invoice=invoice, old_status=old_status))
            if invoice.is_paid:
                self.event_bus.publish(InvoicePaid.create(invoice=invoice))

        return invoice

    def list_overdue(self) -> list[str]:
        """Numbers of stored invoices that are past due and unpaid."""
        return self.repository.find_overdue_numbers(now_utc())
