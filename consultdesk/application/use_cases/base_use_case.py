"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from consultdesk.domain.events.base import EventDispatcher, get_event_dispatcher
from consultdesk.domain.models.base import BaseEntity, utc_now
from consultdesk.domain.repositories.unit_of_work import UnitOfWork


Clock = Callable[[], datetime]


class BaseUseCase:
    """
    Base class for all use cases.
    Subclasses implement execute(user_id, ...).
    """

    def __init__(self, clock: Optional[Clock] = None, dispatcher: Optional[EventDispatcher] = None):
        self.clock = clock or utc_now
        self.dispatcher = dispatcher or get_event_dispatcher()
        self.logger = logging.getLogger(self.__class__.__module__)

    def _publish_events(self, entity: BaseEntity) -> None:
        """Dispatch events collected by the entity. Call after commit."""
        self.dispatcher.dispatch_all(entity.pull_events())


class CommandUseCase(BaseUseCase):
    """Use case that writes and therefore owns the commit."""

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None,
                 dispatcher: Optional[EventDispatcher] = None):
        super().__init__(clock, dispatcher)
        self.uow = uow

    def _commit(self, *entities: BaseEntity) -> None:
        self.uow.commit()
        for entity in entities:
            self._publish_events(entity)
