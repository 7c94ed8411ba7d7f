"""Shared test fixtures for the invoicing test suite."""

from datetime import timedelta
from decimal import Decimal

import pytest

from core.event_bus import EventBus
from core.invoice import DateNumberGenerator, DefaultCalculator, InvoiceModel, InvoiceQuery
from core.models import (
    Activity, Customer, InvoiceTemplate, MetaField, Project, Timesheet, User, UserPreference,
)
from utils.timezone import now_utc


# =============================================================================
# NUMBER LOOKUP
# =============================================================================


class InMemoryInvoiceLookup:
    """InvoiceNumberLookup over a plain set of taken numbers."""

    def __init__(self, taken: set[str] | None = None):
        self.taken = set(taken or ())
        self.checked: list[str] = []

    def has_invoice(self, invoice_number: str) -> bool:
        self.checked.append(invoice_number)
        return invoice_number in self.taken


@pytest.fixture
def number_lookup() -> InMemoryInvoiceLookup:
    """Lookup with no persisted invoices."""
    return InMemoryInvoiceLookup()


@pytest.fixture
def lookup_factory():
    """Build a lookup with the given numbers already taken."""
    return InMemoryInvoiceLookup


# =============================================================================
# ENTITY FIXTURES
# =============================================================================


@pytest.fixture
def user() -> User:
    u = User(username="one-user", title="user title", alias="genious alias", email="fantastic@four")
    u.add_preference(UserPreference(name="kitty", value="kat"))
    u.add_preference(UserPreference(name="hello", value="world"))
    return u


@pytest.fixture
def customer() -> Customer:
    c = Customer(name="customer,with/special#name", currency="USD", vat_id="kjuo8967")
    c.set_meta_field(MetaField(name="foo-customer", value="bar-customer", visible=True))
    return c


@pytest.fixture
def template() -> InvoiceTemplate:
    return InvoiceTemplate(title="a test invoice template title", vat=Decimal("19"), due_days=9)


@pytest.fixture
def project(customer) -> Project:
    p = Project(name="project name", customer=customer)
    p.set_meta_field(MetaField(name="foo-project", value="bar-project", visible=True))
    return p


@pytest.fixture
def activity(project) -> Activity:
    a = Activity(name="activity description", project=project)
    a.set_meta_field(MetaField(name="foo-activity", value="bar-activity", visible=True))
    return a


@pytest.fixture
def timesheet_user() -> User:
    u = User(id=1, username="foo-bar")
    u.add_preference(UserPreference(name="hourly_rate", value="50"))
    return u


@pytest.fixture
def timesheet(timesheet_user, activity, project) -> Timesheet:
    now = now_utc()
    return Timesheet(
        duration=3600,
        rate=Decimal("293.27"),
        user=timesheet_user,
        activity=activity,
        project=project,
        begin=now,
        end=now,
    )


# =============================================================================
# INVOICE MODEL
# =============================================================================


@pytest.fixture
def invoice_model_factory(customer, template, user, activity, timesheet, number_lookup):
    """Build a fully wired InvoiceModel for a given invoice date."""

    def build(invoice_date, entries=None):
        query = InvoiceQuery(begin=now_utc(), end=now_utc())
        query.add_activity(activity)

        model = InvoiceModel(customer=customer, template=template, user=user, invoice_date=invoice_date, query=query)
        model.add_entries([timesheet] if entries is None else entries)
        model.calculator = DefaultCalculator()
        model.number_generator = DateNumberGenerator(number_lookup)
        return model

    return build


@pytest.fixture
def two_months_ago():
    return now_utc() - timedelta(days=61)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()
