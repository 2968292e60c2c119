"""
Application layer use cases.
Business logic for the consulting desk.
"""

from .base_use_case import BaseUseCase, CommandUseCase
from .project_use_cases import (
    get_owned_project,
    CreateProjectUseCase,
    UpdateProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    DeleteProjectUseCase
)
from .student_use_cases import (
    CreateStudentUseCase,
    UpdateStudentUseCase,
    GetStudentUseCase,
    ListStudentsUseCase,
    DeleteStudentUseCase,
    AssignStudentUseCase,
    ListProjectStudentsUseCase,
    RemoveStudentFromProjectUseCase
)
from .time_entry_use_cases import (
    StartTimerUseCase,
    StopTimerUseCase,
    GetActiveTimerUseCase,
    ListTimeEntriesUseCase,
    ListProjectTimeEntriesUseCase,
    UpdateTimeEntryUseCase,
    DeleteTimeEntryUseCase
)
from .invoice_use_cases import (
    CreateInvoiceUseCase,
    PreviewInvoiceUseCase,
    GetInvoiceUseCase,
    ListInvoicesUseCase,
    UpdateInvoiceUseCase,
    DeleteInvoiceUseCase
)
from .report_use_cases import GetDashboardMetricsUseCase, GetReportSummaryUseCase, month_bounds
from .generate_pdf_use_case import GenerateInvoiceDocumentUseCase

__all__ = [
    "BaseUseCase",
    "CommandUseCase",

    # Project Use Cases
    "get_owned_project",
    "CreateProjectUseCase",
    "UpdateProjectUseCase",
    "GetProjectUseCase",
    "ListProjectsUseCase",
    "DeleteProjectUseCase",

    # Student Use Cases
    "CreateStudentUseCase",
    "UpdateStudentUseCase",
    "GetStudentUseCase",
    "ListStudentsUseCase",
    "DeleteStudentUseCase",
    "AssignStudentUseCase",
    "ListProjectStudentsUseCase",
    "RemoveStudentFromProjectUseCase",

    # Time Entry Use Cases
    "StartTimerUseCase",
    "StopTimerUseCase",
    "GetActiveTimerUseCase",
    "ListTimeEntriesUseCase",
    "ListProjectTimeEntriesUseCase",
    "UpdateTimeEntryUseCase",
    "DeleteTimeEntryUseCase",

    # Invoice Use Cases
    "CreateInvoiceUseCase",
    "PreviewInvoiceUseCase",
    "GetInvoiceUseCase",
    "ListInvoicesUseCase",
    "UpdateInvoiceUseCase",
    "DeleteInvoiceUseCase",

    # Reports
    "GetDashboardMetricsUseCase",
    "GetReportSummaryUseCase",
    "month_bounds",
    "GenerateInvoiceDocumentUseCase",
]
