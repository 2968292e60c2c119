"""
Reports router.
"""

from fastapi import APIRouter

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import ReportRepo
from consultdesk.application.use_cases.report_use_cases import GetReportSummaryUseCase
from consultdesk.application.dto.report_dto import ReportSummaryResponseDTO


router = APIRouter()


@router.get("/summary", response_model=ReportSummaryResponseDTO)
def get_report_summary(user_id: CurrentUserId, repository: ReportRepo):
    """Totals across all projects, time and invoices."""
    return ReportSummaryResponseDTO.from_domain(GetReportSummaryUseCase(repository).execute(user_id))
