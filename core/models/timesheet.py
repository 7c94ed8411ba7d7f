"""Timesheet entry domain model.

`rate` is the computed line amount of the entry (duration already applied),
not an hourly rate. Invoices sum rates directly.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from core.models.activity import Activity
from core.models.project import Project
from core.models.user import User


class Timesheet(BaseModel):
    """One billable record of tracked time."""

    id: int | None = None
    begin: datetime | None = None
    end: datetime | None = None
    duration: int = Field(0, ge=0)  # seconds
    rate: Decimal = Decimal("0")  # negative allowed for corrections
    hourly_rate: Decimal | None = None
    fixed_rate: Decimal | None = None
    user: User | None = None
    activity: Activity | None = None
    project: Project | None = None
    description: str | None = None
    billable: bool = True
    exported: bool = False

    model_config = {"validate_assignment": True}

    @model_validator(mode="after")
    def end_not_before_begin(self) -> "Timesheet":
        """Reject entries that end before they begin."""
        if self.begin is not None and self.end is not None and self.end < self.begin:
            raise ValueError("end must not be before begin")
        return self

    @property
    def is_running(self) -> bool:
        """Whether the entry has started but not stopped yet."""
        return self.begin is not None and self.end is None
