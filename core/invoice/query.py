"""Filters used to select the timesheet entries of an invoice."""

from datetime import datetime

from pydantic import BaseModel, Field

from core.models import Activity, Customer, Project, User


class InvoiceQuery(BaseModel):
    """
    Selection criteria for the entries of one invoice.

    Entry selection happens upstream; the query travels with the invoice
    model so the generated invoice can be traced back to its filters.
    """

    customers: list[Customer] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)
    begin: datetime | None = None
    end: datetime | None = None

    model_config = {"validate_assignment": True}

    def add_customer(self, customer: Customer) -> None:
        self.customers.append(customer)

    def add_project(self, project: Project) -> None:
        self.projects.append(project)

    def add_activity(self, activity: Activity) -> None:
        self.activities.append(activity)

    def add_user(self, user: User) -> None:
        self.users.append(user)
