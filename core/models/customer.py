"""Customer domain model."""

from decimal import Decimal

from pydantic import Field

from core.models.meta import MetaFieldsMixin


class Customer(MetaFieldsMixin):
    """Customer that timesheets are billed to."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=150)
    number: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=100)
    vat_id: str | None = Field(None, max_length=50)
    address: str | None = None
    country: str | None = Field(None, pattern="^[A-Z]{2}$")
    currency: str = Field("EUR", pattern="^[A-Z]{3}$")
    email: str | None = Field(None, max_length=75)
    timezone: str | None = None
    comment: str | None = None
    visible: bool = True
    budget: Decimal = Field(Decimal("0"), ge=0)

    model_config = {"validate_assignment": True}
