"""Project domain model."""

from decimal import Decimal

from pydantic import Field

from core.models.customer import Customer
from core.models.meta import MetaFieldsMixin


class Project(MetaFieldsMixin):
    """Project belonging to a customer."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=150)
    customer: Customer | None = None
    order_number: str | None = Field(None, max_length=50)
    comment: str | None = None
    visible: bool = True
    budget: Decimal = Field(Decimal("0"), ge=0)

    model_config = {"validate_assignment": True}
