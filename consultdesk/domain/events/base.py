"""
Event handling for domain events.
Entities collect events while they change; use cases publish them after commit.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional, Iterable

from consultdesk.domain.models.base import DomainEvent


logger = logging.getLogger(__name__)


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """Handle a domain event."""
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process the given event."""
        return True


class EventDispatcher:
    """Dispatches domain events to registered handlers."""

    def __init__(self, max_log_size: int = 500):
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self._event_log: List[Dict[str, Any]] = []
        self._max_log_size = max_log_size

    def register_handler(self, event_name: str, handler: EventHandler) -> None:
        """Register an event handler for a specific event name."""
        self._handlers.setdefault(event_name, []).append(handler)
        logger.debug(f"Registered handler {handler.__class__.__name__} for {event_name}")

    def register_global_handler(self, handler: EventHandler) -> None:
        """Register a handler that receives all events."""
        self._global_handlers.append(handler)
        logger.debug(f"Registered global handler {handler.__class__.__name__}")

    def dispatch(self, event: DomainEvent) -> None:
        """Dispatch event to all registered handlers."""
        self._event_log.append(event.to_dict())
        if len(self._event_log) > self._max_log_size:
            del self._event_log[0]

        handlers = self._handlers.get(event.event_name, []) + [
            h for h in self._global_handlers if h.can_handle(event)
        ]
        if not handlers:
            logger.debug(f"No handlers registered for event: {event.event_name}")
            return

        for handler in handlers:
            self._safe_handle(handler, event)

    def dispatch_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.dispatch(event)

    def _safe_handle(self, handler: EventHandler, event: DomainEvent) -> None:
        """Run one handler; a failing handler must not undo a committed change."""
        try:
            handler.handle(event)
        except Exception:
            logger.exception(
                f"Handler {handler.__class__.__name__} failed to process {event.event_name}"
            )

    def get_event_log(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get recent events, newest first."""
        events = list(reversed(self._event_log))
        return events[:limit] if limit else events

    def clear(self) -> None:
        """Drop handlers and the event log."""
        self._handlers.clear()
        self._global_handlers.clear()
        self._event_log.clear()

    def get_registered_handlers(self) -> Dict[str, List[str]]:
        """Get information about registered handlers."""
        result = {
            name: [h.__class__.__name__ for h in handlers]
            for name, handlers in self._handlers.items()
        }
        if self._global_handlers:
            result["global"] = [h.__class__.__name__ for h in self._global_handlers]
        return result


# Singleton instance
_event_dispatcher: Optional[EventDispatcher] = None


def get_event_dispatcher() -> EventDispatcher:
    """Get singleton event dispatcher instance."""
    global _event_dispatcher
    if _event_dispatcher is None:
        _event_dispatcher = EventDispatcher()
    return _event_dispatcher
