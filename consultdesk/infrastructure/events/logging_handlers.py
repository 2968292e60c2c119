"""
Event handlers that write domain events to the application log.
"""

import logging

from consultdesk.domain.events.base import EventHandler
from consultdesk.domain.models.base import DomainEvent
from consultdesk.domain.models.invoice import InvoiceCreatedEvent, InvoiceStatusChangedEvent
from consultdesk.domain.models.project import ProjectCreatedEvent, ProjectStatusChangedEvent
from consultdesk.domain.models.time_entry import TimeEntryStartedEvent, TimeEntryStoppedEvent


logger = logging.getLogger("consultdesk.activity")


class ActivityLogHandler(EventHandler):
    """Logs every event at debug level."""

    def handle(self, event: DomainEvent) -> None:
        logger.debug(f"Event {event.event_name} ({event.event_id}): {event.to_dict()['data']}")


class TimeTrackingLogHandler(EventHandler):
    """Logs timer starts and stops."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, (TimeEntryStartedEvent, TimeEntryStoppedEvent))

    def handle(self, event: DomainEvent) -> None:
        if isinstance(event, TimeEntryStartedEvent):
            logger.info(f"Timer {event.entry_id} started on project {event.project_id}")
        elif isinstance(event, TimeEntryStoppedEvent):
            logger.info(f"Timer {event.entry_id} stopped, {event.duration_hours} hours tracked")


class BillingLogHandler(EventHandler):
    """Logs invoice creation and invoice or project status changes."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, (
            InvoiceCreatedEvent,
            InvoiceStatusChangedEvent,
            ProjectCreatedEvent,
            ProjectStatusChangedEvent
        ))

    def handle(self, event: DomainEvent) -> None:
        if isinstance(event, InvoiceCreatedEvent):
            logger.info(f"Invoice {event.invoice_number} created, total {event.total}")
        elif isinstance(event, InvoiceStatusChangedEvent):
            logger.info(f"Invoice {event.invoice_id}: {event.old_status} -> {event.new_status}")
        elif isinstance(event, ProjectCreatedEvent):
            logger.info(f"Project {event.project_id} created: {event.name}")
        elif isinstance(event, ProjectStatusChangedEvent):
            logger.info(f"Project {event.project_id}: {event.old_status} -> {event.new_status}")
