"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .student_mapper import StudentMapper, ProjectStudentMapper
from .project_mapper import ProjectMapper
from .time_entry_mapper import TimeEntryMapper
from .invoice_mapper import InvoiceMapper

__all__ = [
    "UserMapper",
    "StudentMapper",
    "ProjectStudentMapper",
    "ProjectMapper",
    "TimeEntryMapper",
    "InvoiceMapper"
]
