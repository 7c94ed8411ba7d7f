"""Core domain models."""

from core.models.meta import MetaField
from core.models.customer import Customer
from core.models.project import Project
from core.models.activity import Activity
from core.models.user import User, UserPreference
from core.models.timesheet import Timesheet
from core.models.invoice_template import InvoiceTemplate
from core.models.invoice import Invoice, InvoiceStatus

__all__ = [
    # Meta
    "MetaField",
    # Customer / Project / Activity
    "Customer", "Project", "Activity",
    # User
    "User", "UserPreference",
    # Timesheet
    "Timesheet",
    # Invoice
    "InvoiceTemplate", "Invoice", "InvoiceStatus",
]
