"""
Domain models for the consulting desk.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainEvent,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ConflictError,
    DuplicateEntityError,
    StoreError,
    utc_now
)

# Value Objects
from .value_objects import (
    ValueObject,
    TimeRange,
    BillingPeriod,
    InvoiceNumber,
    round_money,
    to_decimal
)

# Domain entities
from .user import User
from .student import Student, StudentLevel, ProjectStudent
from .project import (
    Project,
    ProjectStatus,
    PROJECT_STATUS_TRANSITIONS,
    ProjectCreatedEvent,
    ProjectStatusChangedEvent
)
from .time_entry import TimeEntry, TimeEntryStartedEvent, TimeEntryStoppedEvent
from .invoice import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    INVOICE_STATUS_TRANSITIONS,
    InvoiceCreatedEvent,
    InvoiceStatusChangedEvent
)
