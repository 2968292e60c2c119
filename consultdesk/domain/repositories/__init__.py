"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .project_repository import ProjectRepository
from .student_repository import StudentRepository, ProjectStudentRepository
from .time_entry_repository import TimeEntryRepository
from .invoice_repository import InvoiceRepository
from .user_repository import UserRepository
from .report_repository import ReportRepository, DashboardMetrics, ReportSummary
from .unit_of_work import UnitOfWork
