"""
Domain event dispatching.
"""

from .base import EventHandler, EventDispatcher, get_event_dispatcher
