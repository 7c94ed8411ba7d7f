"""
Invoice persistence.

Expects an `invoices` table with a UNIQUE constraint on invoice_number.
The constraint is what makes numbering safe when invoices are generated
concurrently; has_invoice() only narrows the window.
"""

import logging
from datetime import datetime

import psycopg2.errors

from clients.postgres_client import PostgresClient
from core.exceptions import DuplicateInvoiceNumberError
from core.models import Invoice, InvoiceStatus
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class InvoiceRepository:
    """PostgreSQL-backed invoice storage. Satisfies InvoiceNumberLookup."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def has_invoice(self, invoice_number: str) -> bool:
        """Whether a persisted invoice already uses this number."""
        row = self.postgres.execute_single(
            "SELECT 1 AS found FROM invoices WHERE invoice_number = %s LIMIT 1",
            (invoice_number,)
        )
        return row is not None

    def save(self, invoice: Invoice) -> Invoice:
        """
        Insert a new invoice or update the mutable fields of a persisted one.

        New invoices get their id assigned in place.

        Returns:
            The same invoice instance

        Raises:
            DuplicateInvoiceNumberError: If another invoice already has the number
        """
        if invoice.id is not None:
            self._update(invoice)
            return invoice

        try:
            row = self.postgres.execute_single(
                """
                INSERT INTO invoices (
                    invoice_number, status, customer_id, user_id,
                    created_at, due_days, currency,
                    subtotal, tax, vat, total,
                    payment_date, comment, invoice_filename
                ) VALUES (
                    %s, %s, %s, %s,
                    %s, %s, %s,
                    %s, %s, %s, %s,
                    %s, %s, %s
                )
                RETURNING id
                """,
                (
                    invoice.invoice_number, invoice.status.value,
                    invoice.customer.id if invoice.customer else None,
                    invoice.user.id if invoice.user else None,
                    invoice.created_at, invoice.due_days, invoice.currency,
                    invoice.subtotal, invoice.tax, invoice.vat, invoice.total,
                    invoice.payment_date, invoice.comment, invoice.invoice_filename,
                )
            )
        except psycopg2.errors.UniqueViolation as e:
            raise DuplicateInvoiceNumberError(invoice.invoice_number) from e

        invoice.id = row["id"]
        logger.info("Invoice %s stored with id %s", invoice.invoice_number, invoice.id)
        return invoice

    def _update(self, invoice: Invoice) -> None:
        self.postgres.execute(
            """
            UPDATE invoices
            SET status = %s, payment_date = %s, comment = %s, invoice_filename = %s
            WHERE id = %s
            """,
            (
                invoice.status.value, invoice.payment_date,
                invoice.comment, invoice.invoice_filename, invoice.id,
            )
        )

    def find_overdue_numbers(self, now: datetime | None = None) -> list[str]:
        """
        Numbers of new or pending invoices whose due date has passed.

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            Invoice numbers ordered by due date, oldest first
        """
        if now is None:
            now = now_utc()

        rows = self.postgres.execute(
            """
            SELECT invoice_number FROM invoices
            WHERE status IN (%s, %s)
              AND created_at + due_days * INTERVAL '1 day' < %s
            ORDER BY created_at + due_days * INTERVAL '1 day' ASC
            """,
            (InvoiceStatus.NEW.value, InvoiceStatus.PENDING.value, now)
        )
        return [row["invoice_number"] for row in rows]
