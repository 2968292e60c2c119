"""
Project domain model.
Represents client projects billed by the hour.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Set

from consultdesk.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    DomainEvent
)
from consultdesk.domain.models.value_objects import to_decimal


MAX_TOOL_TAGS = 20


class ProjectStatus(str, Enum):
    """Project status."""
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


PROJECT_STATUS_TRANSITIONS: Dict[ProjectStatus, Set[ProjectStatus]] = {
    ProjectStatus.ACTIVE: {ProjectStatus.ON_HOLD, ProjectStatus.COMPLETED, ProjectStatus.CANCELLED},
    ProjectStatus.ON_HOLD: {ProjectStatus.ACTIVE, ProjectStatus.COMPLETED, ProjectStatus.CANCELLED},
    ProjectStatus.COMPLETED: {ProjectStatus.ACTIVE},
    ProjectStatus.CANCELLED: set(),
}


# Domain Events

class ProjectCreatedEvent(DomainEvent):
    """Event raised when a project is created."""

    def __init__(self, project_id: str, user_id: str, name: str):
        super().__init__()
        self.project_id = project_id
        self.user_id = user_id
        self.name = name

    @property
    def event_name(self) -> str:
        return "project.created"


class ProjectStatusChangedEvent(DomainEvent):
    """Event raised when project status changes."""

    def __init__(self, project_id: str, old_status: ProjectStatus, new_status: ProjectStatus):
        super().__init__()
        self.project_id = project_id
        self.old_status = old_status.value
        self.new_status = new_status.value

    @property
    def event_name(self) -> str:
        return "project.status_changed"


def normalize_tags(tags: Optional[List[str]], field_name: str) -> List[str]:
    """Strip, drop blanks and de-duplicate tags while keeping order."""
    cleaned: List[str] = []
    for tag in tags or []:
        tag = (tag or "").strip()
        if not tag or tag in cleaned:
            continue
        if len(tag) > 50:
            raise ValidationError("Tags cannot exceed 50 characters", field_name)
        cleaned.append(tag)
    if len(cleaned) > MAX_TOOL_TAGS:
        raise ValidationError(f"Cannot have more than {MAX_TOOL_TAGS} tags", field_name)
    return cleaned


@dataclass(eq=False)
class Project(BaseEntity):
    """
    Project entity.
    Time can only be logged against active projects.
    """

    user_id: str
    name: str
    client_name: str
    hourly_rate: Decimal
    description: Optional[str] = None
    estimated_hours: Optional[Decimal] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    software_tools: List[str] = field(default_factory=list)

    def validate(self) -> None:
        """Validate project data."""
        if not self.user_id:
            raise ValidationError("Project must belong to a user", "user_id")
        if not self.name or not self.name.strip():
            raise ValidationError("Project name is required", "name")
        if len(self.name) > 255:
            raise ValidationError("Project name cannot exceed 255 characters", "name")
        if not self.client_name or not self.client_name.strip():
            raise ValidationError("Client name is required", "client_name")

        self.hourly_rate = to_decimal(self.hourly_rate, "hourly_rate")
        if self.hourly_rate < 0:
            raise ValidationError("Hourly rate cannot be negative", "hourly_rate")
        if self.estimated_hours is not None:
            self.estimated_hours = to_decimal(self.estimated_hours, "estimated_hours")
            if self.estimated_hours < 0:
                raise ValidationError("Estimated hours cannot be negative", "estimated_hours")

        if self.start_date and self.deadline and self.deadline < self.start_date:
            raise ValidationError("Deadline cannot be before start date", "deadline")

        if not isinstance(self.status, ProjectStatus):
            try:
                self.status = ProjectStatus(self.status)
            except ValueError:
                raise ValidationError(f"Invalid project status: {self.status}", "status")

        self.software_tools = normalize_tags(self.software_tools, "software_tools")

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE

    @property
    def can_track_time(self) -> bool:
        return self.status == ProjectStatus.ACTIVE

    def can_transition_to(self, new_status: ProjectStatus) -> bool:
        return new_status in PROJECT_STATUS_TRANSITIONS[self.status]

    def change_status(self, new_status: ProjectStatus) -> None:
        """Change project status following the transition table."""
        new_status = ProjectStatus(new_status)
        if new_status == self.status:
            return
        if not self.can_transition_to(new_status):
            raise BusinessRuleViolation(
                f"Cannot change project status from {self.status.value} to {new_status.value}"
            )

        old_status = self.status
        self.status = new_status
        self.mark_as_updated()
        self.add_event(ProjectStatusChangedEvent(self.id, old_status, new_status))

    def update_info(self, **fields) -> None:
        """Update editable project fields. Status changes go through change_status."""
        for name in (
            "name", "client_name", "description", "hourly_rate",
            "estimated_hours", "start_date", "deadline", "software_tools"
        ):
            if name in fields:
                setattr(self, name, fields[name])
        self.validate()
        self.mark_as_updated()
