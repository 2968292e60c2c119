"""
Student and assignment DTOs.
"""

from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from consultdesk.domain.models.student import Student, StudentLevel, ProjectStudent
from .base_dto import ResponseDTO, CreateRequestDTO, UpdateRequestDTO, RequestDTO, require_text, strip_optional


class CreateStudentRequestDTO(CreateRequestDTO):
    """DTO for student creation requests."""

    name: str = Field(min_length=1, max_length=255, description="Full name")
    email: EmailStr = Field(description="Email address, unique across all students")
    program: str = Field(min_length=1, max_length=255, description="Academic program")
    level: StudentLevel = Field(description="Academic level")

    @field_validator("name", "program")
    @classmethod
    def validate_required_text(cls, v):
        return require_text(v)


class UpdateStudentRequestDTO(UpdateRequestDTO):
    """DTO for student update requests."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = Field(default=None)
    program: Optional[str] = Field(default=None, min_length=1, max_length=255)
    level: Optional[StudentLevel] = Field(default=None)

    @field_validator("name", "program")
    @classmethod
    def validate_required_text(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return require_text(v)


class StudentResponseDTO(ResponseDTO):
    """DTO for student responses."""

    user_id: str
    name: str
    email: str
    program: str
    level: StudentLevel

    @classmethod
    def from_domain(cls, student: Student) -> "StudentResponseDTO":
        return cls(
            id=student.id,
            user_id=student.user_id,
            name=student.name,
            email=student.email,
            program=student.program,
            level=student.level,
            created_at=student.created_at,
            updated_at=student.updated_at
        )


class AssignStudentRequestDTO(RequestDTO):
    """DTO for assigning a student to a project."""

    student_id: str = Field(min_length=1, description="Student ID")
    role: Optional[str] = Field(default=None, max_length=100, description="Role on the project")

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        return strip_optional(v)


class ProjectStudentResponseDTO(ResponseDTO):
    """Assignment with the assigned student."""

    project_id: str
    student_id: str
    role: Optional[str] = None
    assigned_at: datetime
    student: Optional[StudentResponseDTO] = None

    @classmethod
    def from_domain(cls, assignment: ProjectStudent) -> "ProjectStudentResponseDTO":
        return cls(
            id=assignment.id,
            project_id=assignment.project_id,
            student_id=assignment.student_id,
            role=assignment.role,
            assigned_at=assignment.assigned_at,
            created_at=assignment.created_at,
            student=StudentResponseDTO.from_domain(assignment.student) if assignment.student else None
        )
