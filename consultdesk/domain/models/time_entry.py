"""
TimeEntry domain model.
Represents a stretch of work on a project, captured by a start/stop timer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List, TYPE_CHECKING

from consultdesk.domain.models.base import (
    BaseEntity,
    ValidationError,
    ConflictError,
    DomainEvent
)
from consultdesk.domain.models.project import normalize_tags
from consultdesk.domain.models.value_objects import TimeRange, to_decimal

if TYPE_CHECKING:
    from consultdesk.domain.models.project import Project


# Domain Events

class TimeEntryStartedEvent(DomainEvent):
    """Event raised when time tracking is started."""

    def __init__(self, entry_id: str, user_id: str, project_id: str):
        super().__init__()
        self.entry_id = entry_id
        self.user_id = user_id
        self.project_id = project_id

    @property
    def event_name(self) -> str:
        return "time_entry.started"


class TimeEntryStoppedEvent(DomainEvent):
    """Event raised when time tracking is stopped."""

    def __init__(self, entry_id: str, user_id: str, duration_hours: Decimal):
        super().__init__()
        self.entry_id = entry_id
        self.user_id = user_id
        self.duration_hours = str(duration_hours)

    @property
    def event_name(self) -> str:
        return "time_entry.stopped"


@dataclass(eq=False)
class TimeEntry(BaseEntity):
    """
    TimeEntry entity.

    A running entry has no end time and no duration. Stopping it sets both,
    exactly once; duration is the exact elapsed time in decimal hours.
    """

    user_id: str
    project_id: str
    description: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[Decimal] = None
    is_running: bool = False
    software_used: List[str] = field(default_factory=list)
    problems_encountered: Optional[str] = None
    project: Optional["Project"] = field(default=None, repr=False)

    def validate(self) -> None:
        """Validate time entry data."""
        if not self.user_id:
            raise ValidationError("Time entry must belong to a user", "user_id")
        if not self.project_id:
            raise ValidationError("Time entry must belong to a project", "project_id")
        if not self.description or not self.description.strip():
            raise ValidationError("Description is required", "description")
        if len(self.description) > 1000:
            raise ValidationError("Description cannot exceed 1000 characters", "description")
        if self.start_time is None:
            raise ValidationError("Start time is required", "start_time")

        # Raises when end precedes start
        TimeRange(self.start_time, self.end_time)

        if self.is_running and (self.end_time is not None or self.duration is not None):
            raise ValidationError("A running entry cannot have an end time or duration", "is_running")
        if self.duration is not None:
            self.duration = to_decimal(self.duration, "duration")
            if self.duration < 0:
                raise ValidationError("Duration cannot be negative", "duration")

        self.software_used = normalize_tags(self.software_used, "software_used")

    @classmethod
    def start(
        cls,
        user_id: str,
        project_id: str,
        description: str,
        now: datetime,
        problems_encountered: Optional[str] = None,
        software_used: Optional[List[str]] = None
    ) -> "TimeEntry":
        """Create a running entry starting at now."""
        return cls(
            user_id=user_id,
            project_id=project_id,
            description=(description or "").strip(),
            start_time=now,
            is_running=True,
            software_used=list(software_used or []),
            problems_encountered=problems_encountered,
            created_at=now,
            updated_at=now
        )

    def mark_started(self) -> None:
        """Record the start event once the entry has an id."""
        self.add_event(TimeEntryStartedEvent(self.id, self.user_id, self.project_id))

    def stop(self, now: datetime) -> None:
        """Stop the timer. A second stop is a conflict."""
        if not self.is_running:
            raise ConflictError("Time entry is already stopped")

        time_range = TimeRange(self.start_time).close(now)
        self.end_time = time_range.end
        self.duration = time_range.duration_hours
        self.is_running = False
        self.mark_as_updated()
        self.add_event(TimeEntryStoppedEvent(self.id, self.user_id, self.duration))

    def elapsed_seconds(self, now: datetime) -> int:
        """Whole seconds elapsed so far (or in total once stopped)."""
        return TimeRange(self.start_time, self.end_time).elapsed_seconds(now)

    def update_details(self, **fields) -> None:
        """Edit the descriptive fields. Timing fields are not editable."""
        for name in ("description", "software_used", "problems_encountered"):
            if name in fields:
                setattr(self, name, fields[name])
        if self.description:
            self.description = self.description.strip()
        self.validate()
        self.mark_as_updated()

    @property
    def entry_date(self) -> date:
        """Calendar date of the entry (UTC)."""
        return self.start_time.date()

    @property
    def is_billable(self) -> bool:
        return not self.is_running and self.duration is not None
