"""Invoice template domain model."""

from decimal import Decimal

from pydantic import BaseModel, Field


class InvoiceTemplate(BaseModel):
    """
    Settings shared by all invoices generated from this template.

    `calculator` and `number_generator` name the strategies used during
    generation (see core.invoice.calculator and core.invoice.number_generator).
    """

    id: int | None = None
    name: str = Field("default", min_length=1, max_length=60)
    title: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    vat_id: str | None = Field(None, max_length=50)
    address: str | None = None
    vat: Decimal = Field(Decimal("0"), ge=0)
    due_days: int = Field(30, ge=0)
    calculator: str = "default"
    number_generator: str = "date"
    payment_terms: str | None = None
    language: str = Field("en", min_length=2, max_length=6)

    model_config = {"validate_assignment": True}
