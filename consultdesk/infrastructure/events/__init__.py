"""
Event infrastructure: handlers that react to domain events.
"""

from .event_setup import setup_event_handlers, initialize_event_system

__all__ = ["setup_event_handlers", "initialize_event_system"]
