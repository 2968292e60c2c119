"""
Shared building blocks of the domain layer: the entity base class,
domain events and the exception hierarchy the web layer maps to HTTP.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Dict, List
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import uuid


def utc_now() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DomainEvent(ABC):
    """Something that happened to an entity, published after commit."""

    def __init__(self):
        self.event_id = str(uuid.uuid4())
        self.occurred_at = utc_now()

    @property
    @abstractmethod
    def event_name(self) -> str:
        """Dotted name handlers subscribe to, e.g. ``invoice.created``."""

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            name: value for name, value in vars(self).items()
            if name not in ("event_id", "occurred_at")
        }
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "occurred_at": self.occurred_at.isoformat(),
            "data": payload
        }


@dataclass(kw_only=True, eq=False)
class BaseEntity(ABC):
    """
    Identity, timestamps and pending events common to every entity.

    Subclasses override ``validate`` which runs once after construction.
    """

    id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    _events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = utc_now()
        if self.updated_at is None:
            self.updated_at = self.created_at
        self.validate()

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self) or self.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return hash(id(self))
        return hash((type(self).__name__, self.id))

    @property
    def is_new(self) -> bool:
        """True until the repository has assigned an id."""
        return self.id is None

    def mark_as_updated(self) -> None:
        self.updated_at = utc_now()

    def add_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def pull_events(self) -> List[DomainEvent]:
        """Return the pending events and forget them."""
        pending, self._events = self._events, []
        return pending

    def validate(self) -> None:
        """Raise ValidationError when the entity is in an invalid state."""


class DomainException(Exception):
    """Base of all domain errors; ``code`` is the machine-readable name."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


class ValidationError(DomainException):
    """A value is malformed or out of range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """The request is well-formed but not allowed in the current state."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """The entity does not exist or belongs to another user."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} with id {entity_id} not found", "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainException):
    """The request conflicts with stored state; ``retryable`` hints the client may try again."""

    def __init__(self, message: str, retryable: bool = False):
        super().__init__(message, "CONFLICT")
        self.retryable = retryable


class DuplicateEntityError(ConflictError):
    """A unique field already holds the given value."""

    def __init__(self, entity_type: str, field: str, value: Any):
        super().__init__(f"{entity_type} with {field}='{value}' already exists")
        self.code = "DUPLICATE_ENTITY"
        self.entity_type = entity_type
        self.field = field
        self.value = value


class StoreError(DomainException):
    """The data store failed or timed out."""

    def __init__(self, message: str = "The data store could not complete the request"):
        super().__init__(message, "STORE_ERROR")
