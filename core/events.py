"""
Domain events for invoicing.

Immutable event objects describing invoice state changes. The invoice service
publishes them; handlers (mail notifications, exports, ...) react without the
service knowing who is listening.

Events carry the Invoice itself so handlers don't need to re-fetch it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class InvoiceEvent:
    """Base class for all invoice events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)
    invoice: Any = None  # Invoice; Any avoids a circular import


@dataclass(frozen=True, kw_only=True)
class InvoiceCreated(InvoiceEvent):
    """An invoice was generated and persisted."""

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceCreated":
        return cls(invoice=invoice)


@dataclass(frozen=True, kw_only=True)
class InvoiceStatusChanged(InvoiceEvent):
    """An invoice moved from one status to another."""
    old_status: Any = None

    @classmethod
    def create(cls, invoice: Any, old_status: Any) -> "InvoiceStatusChanged":
        return cls(invoice=invoice, old_status=old_status)


@dataclass(frozen=True, kw_only=True)
class InvoicePaid(InvoiceEvent):
    """An invoice was marked as paid."""

    @classmethod
    def create(cls, invoice: Any) -> "InvoicePaid":
        return cls(invoice=invoice)
