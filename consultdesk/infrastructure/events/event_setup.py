"""
Event system setup and configuration.
Registers all event handlers with the event dispatcher.
"""

import logging
from typing import Optional

from consultdesk.domain.events.base import EventDispatcher, get_event_dispatcher
from .logging_handlers import ActivityLogHandler, TimeTrackingLogHandler, BillingLogHandler

logger = logging.getLogger(__name__)


def setup_event_handlers(dispatcher: Optional[EventDispatcher] = None) -> EventDispatcher:
    """Set up and register all event handlers."""
    dispatcher = dispatcher or get_event_dispatcher()
    dispatcher.clear()

    time_handler = TimeTrackingLogHandler()
    billing_handler = BillingLogHandler()

    dispatcher.register_global_handler(ActivityLogHandler())

    dispatcher.register_handler("time_entry.started", time_handler)
    dispatcher.register_handler("time_entry.stopped", time_handler)

    dispatcher.register_handler("invoice.created", billing_handler)
    dispatcher.register_handler("invoice.status_changed", billing_handler)
    dispatcher.register_handler("project.created", billing_handler)
    dispatcher.register_handler("project.status_changed", billing_handler)

    registered = dispatcher.get_registered_handlers()
    for event_name, handlers in registered.items():
        logger.debug(f"Event {event_name}: {', '.join(handlers)}")
    return dispatcher


def initialize_event_system() -> None:
    """Initialize the complete event system."""
    setup_event_handlers()
    logger.info("Event system initialized successfully")
