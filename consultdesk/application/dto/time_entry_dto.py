"""
Time Entry DTOs for the application layer.
Data Transfer Objects for time tracking operations.
"""

from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pydantic import Field, field_validator

from consultdesk.domain.models.time_entry import TimeEntry
from .base_dto import RequestDTO, ResponseDTO, UpdateRequestDTO, clean_tags, require_text, strip_optional
from .project_dto import ProjectSummaryDTO


# Request DTOs
class StartTimerRequestDTO(RequestDTO):
    """DTO for starting a timer."""

    project_id: str = Field(min_length=1, description="Project ID")
    description: str = Field(min_length=1, max_length=1000, description="Work description")
    problems_encountered: Optional[str] = Field(default=None, max_length=5000)
    software_used: List[str] = Field(default_factory=list, max_length=20, description="Software tags")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return require_text(v)

    @field_validator("problems_encountered")
    @classmethod
    def validate_problems(cls, v):
        return strip_optional(v)

    @field_validator("software_used")
    @classmethod
    def validate_software(cls, v):
        return clean_tags(v)


class UpdateTimeEntryRequestDTO(UpdateRequestDTO):
    """DTO for editing the descriptive fields of a time entry."""

    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    problems_encountered: Optional[str] = Field(default=None, max_length=5000)
    software_used: Optional[List[str]] = Field(default=None, max_length=20)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return require_text(v)

    @field_validator("problems_encountered")
    @classmethod
    def validate_problems(cls, v):
        return strip_optional(v)

    @field_validator("software_used")
    @classmethod
    def validate_software(cls, v):
        return clean_tags(v)


# Response DTOs
class TimeEntryResponseDTO(ResponseDTO):
    """DTO for time entry responses."""

    user_id: str
    project_id: str
    description: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[Decimal] = Field(default=None, description="Hours")
    is_running: bool
    software_used: List[str] = Field(default_factory=list)
    problems_encountered: Optional[str] = None
    project: Optional[ProjectSummaryDTO] = None

    @classmethod
    def from_domain(cls, entry: TimeEntry) -> "TimeEntryResponseDTO":
        """Create DTO from domain entity."""
        return cls(**cls._fields_from(entry))

    @staticmethod
    def _fields_from(entry: TimeEntry) -> dict:
        return dict(
            id=entry.id,
            user_id=entry.user_id,
            project_id=entry.project_id,
            description=entry.description,
            start_time=entry.start_time,
            end_time=entry.end_time,
            duration=entry.duration,
            is_running=entry.is_running,
            software_used=list(entry.software_used),
            problems_encountered=entry.problems_encountered,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
            project=ProjectSummaryDTO.from_domain(entry.project) if entry.project else None
        )


class ActiveTimeEntryResponseDTO(TimeEntryResponseDTO):
    """Running entry plus elapsed time measured by the server clock."""

    elapsed_seconds: int = Field(ge=0)
    elapsed_display: str = Field(description="HH:MM:SS")

    @classmethod
    def from_running(cls, entry: TimeEntry, elapsed_seconds: int, elapsed_display: str) -> "ActiveTimeEntryResponseDTO":
        return cls(
            **cls._fields_from(entry),
            elapsed_seconds=elapsed_seconds,
            elapsed_display=elapsed_display
        )
