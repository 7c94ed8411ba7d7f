"""
Event bus for invoice events.

Synchronous in-process pub/sub. Handlers execute immediately in the same
thread as the publisher. Handler errors are logged but never propagate;
the invoice has already been persisted when events are published.
"""

import logging
from typing import Callable

from core.events import InvoiceEvent

logger = logging.getLogger(__name__)


class EventBus:
    """
    In-process event bus.

    Subscribe by event class, publish by event instance. Handlers are
    called synchronously in subscription order.
    """

    def __init__(self):
        self._subscribers: dict[type[InvoiceEvent], list[Callable]] = {}

    def subscribe(self, event_type: type[InvoiceEvent], callback: Callable) -> None:
        """
        Subscribe to events of a specific class.

        Args:
            event_type: Event class to subscribe to (e.g. InvoicePaid)
            callback: Function called with the event instance
        """
        self._subscribers.setdefault(event_type, []).append(callback)

    def publish(self, event: InvoiceEvent) -> None:
        """
        Publish an event to all subscribers of its exact class.

        Args:
            event: Event instance to publish
        """
        for callback in self._subscribers.get(type(event), []):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (event_id=%s)",
                    getattr(callback, "__name__", repr(callback)),
                    type(event).__name__,
                    event.event_id,
                )
