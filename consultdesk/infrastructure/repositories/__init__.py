"""
SQLAlchemy repository implementations.
"""

from .user_repository import SQLAlchemyUserRepository
from .project_repository import SQLAlchemyProjectRepository
from .student_repository import SQLAlchemyStudentRepository, SQLAlchemyProjectStudentRepository
from .time_entry_repository import SQLAlchemyTimeEntryRepository
from .invoice_repository import SQLAlchemyInvoiceRepository
from .report_repository import SQLAlchemyReportRepository
