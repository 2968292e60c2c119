"""
Student domain models.
Students are research assistants the consultant assigns to projects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from consultdesk.domain.models.base import BaseEntity, ValidationError, utc_now


class StudentLevel(str, Enum):
    """Academic level of a student."""
    PHD = "PhD"
    MS = "MS"
    BS = "BS"
    UNDERGRADUATE = "Undergraduate"
    GRADUATE = "Graduate"


@dataclass(eq=False)
class Student(BaseEntity):
    """
    Student entity.
    Email addresses are unique across the whole store.
    """

    user_id: str
    name: str
    email: str
    program: str
    level: StudentLevel

    def validate(self) -> None:
        if not self.user_id:
            raise ValidationError("Student must belong to a user", "user_id")
        if not self.name or not self.name.strip():
            raise ValidationError("Student name is required", "name")
        if len(self.name) > 255:
            raise ValidationError("Student name cannot exceed 255 characters", "name")
        self.email = (self.email or "").strip().lower()
        if "@" not in self.email:
            raise ValidationError("A valid email is required", "email")
        if not self.program or not self.program.strip():
            raise ValidationError("Program is required", "program")
        if not isinstance(self.level, StudentLevel):
            try:
                self.level = StudentLevel(self.level)
            except ValueError:
                raise ValidationError(f"Invalid student level: {self.level}", "level")

    def update_info(self, **fields) -> None:
        """Update editable student fields and re-validate."""
        for name in ("name", "email", "program", "level"):
            if fields.get(name) is not None:
                setattr(self, name, fields[name])
        self.validate()
        self.mark_as_updated()


@dataclass(eq=False)
class ProjectStudent(BaseEntity):
    """Assignment of a student to a project, optionally with a role label."""

    project_id: str
    student_id: str
    role: Optional[str] = None
    assigned_at: datetime = field(default_factory=utc_now)
    student: Optional[Student] = field(default=None, repr=False)

    def validate(self) -> None:
        if not self.project_id:
            raise ValidationError("Project is required", "project_id")
        if not self.student_id:
            raise ValidationError("Student is required", "student_id")
        if self.role is not None and len(self.role) > 100:
            raise ValidationError("Role cannot exceed 100 characters", "role")
