"""
Project DTOs for the application layer.
"""

from typing import Optional, List
from datetime import date
from decimal import Decimal
from pydantic import Field, field_validator, model_validator

from consultdesk.domain.models.project import Project, ProjectStatus
from .base_dto import (
    ResponseDTO, CreateRequestDTO, UpdateRequestDTO, BaseDTO,
    clean_tags, strip_optional, require_text
)


class CreateProjectRequestDTO(CreateRequestDTO):
    """DTO for project creation requests."""

    name: str = Field(min_length=1, max_length=255, description="Project name")
    client_name: str = Field(min_length=1, max_length=255, description="Client name")
    description: Optional[str] = Field(default=None, max_length=5000, description="Project description")
    hourly_rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2, description="Hourly rate")
    estimated_hours: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE, description="Initial status")
    start_date: Optional[date] = Field(default=None)
    deadline: Optional[date] = Field(default=None)
    software_tools: List[str] = Field(default_factory=list, max_length=20, description="Software tags")

    @field_validator("name", "client_name")
    @classmethod
    def validate_required_text(cls, v):
        return require_text(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return strip_optional(v)

    @field_validator("software_tools")
    @classmethod
    def validate_tools(cls, v):
        return clean_tags(v)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start_date and self.deadline and self.deadline < self.start_date:
            raise ValueError("deadline cannot be before start_date")
        return self


class UpdateProjectRequestDTO(UpdateRequestDTO):
    """DTO for project update requests. Status changes follow the transition table."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    client_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    estimated_hours: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    status: Optional[ProjectStatus] = Field(default=None)
    start_date: Optional[date] = Field(default=None)
    deadline: Optional[date] = Field(default=None)
    software_tools: Optional[List[str]] = Field(default=None, max_length=20)

    @field_validator("name", "client_name")
    @classmethod
    def validate_required_text(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return require_text(v)

    @field_validator("hourly_rate")
    @classmethod
    def validate_rate(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("software_tools")
    @classmethod
    def validate_tools(cls, v):
        return clean_tags(v)


class ProjectSummaryDTO(BaseDTO):
    """Small project block embedded in other responses."""

    id: str
    name: str
    client_name: str
    hourly_rate: Decimal
    status: ProjectStatus

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectSummaryDTO":
        return cls(
            id=project.id,
            name=project.name,
            client_name=project.client_name,
            hourly_rate=project.hourly_rate,
            status=project.status
        )


class ProjectResponseDTO(ResponseDTO):
    """DTO for project responses."""

    user_id: str
    name: str
    client_name: str
    description: Optional[str] = None
    hourly_rate: Decimal
    estimated_hours: Optional[Decimal] = None
    status: ProjectStatus
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    software_tools: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponseDTO":
        """Create DTO from domain entity."""
        return cls(
            id=project.id,
            user_id=project.user_id,
            name=project.name,
            client_name=project.client_name,
            description=project.description,
            hourly_rate=project.hourly_rate,
            estimated_hours=project.estimated_hours,
            status=project.status,
            start_date=project.start_date,
            deadline=project.deadline,
            software_tools=list(project.software_tools),
            created_at=project.created_at,
            updated_at=project.updated_at
        )
