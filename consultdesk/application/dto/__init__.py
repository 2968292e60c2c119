"""
Data Transfer Objects for the application layer.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ErrorResponseDTO
from .project_dto import CreateProjectRequestDTO, UpdateProjectRequestDTO, ProjectResponseDTO, ProjectSummaryDTO
from .student_dto import (
    CreateStudentRequestDTO,
    UpdateStudentRequestDTO,
    StudentResponseDTO,
    AssignStudentRequestDTO,
    ProjectStudentResponseDTO
)
from .time_entry_dto import (
    StartTimerRequestDTO,
    UpdateTimeEntryRequestDTO,
    TimeEntryResponseDTO,
    ActiveTimeEntryResponseDTO
)
from .invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    InvoiceResponseDTO,
    InvoiceItemResponseDTO,
    InvoicePreviewResponseDTO
)
from .report_dto import DashboardMetricsResponseDTO, ReportSummaryResponseDTO
