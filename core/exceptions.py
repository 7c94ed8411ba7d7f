"""Typed exceptions for invoice generation failures."""


class InvoiceError(Exception):
    """Base class for invoice domain errors."""


class InvalidInvoiceStatusError(InvoiceError, ValueError):
    """Status value is not one of the known invoice statuses."""

    def __init__(self, status: object = None):
        self.status = status
        super().__init__("Unknown invoice status")


class DuplicateInvoiceNumberError(InvoiceError):
    """
    Invoice number already belongs to a persisted invoice.

    Raised by number generators that run out of candidates and by the
    repository when the unique constraint on invoice_number fires.
    """

    def __init__(self, invoice_number: str):
        self.invoice_number = invoice_number
        super().__init__(f"Invoice number {invoice_number} already exists")


class UnknownCalculatorError(InvoiceError, ValueError):
    """Template references a calculator that is not registered."""


class UnknownNumberGeneratorError(InvoiceError, ValueError):
    """Template references a number generator that is not registered."""
