"""
Dashboard router.
"""

from fastapi import APIRouter

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import Clock, ReportRepo
from consultdesk.application.use_cases.report_use_cases import GetDashboardMetricsUseCase
from consultdesk.application.dto.report_dto import DashboardMetricsResponseDTO


router = APIRouter()


@router.get("/metrics", response_model=DashboardMetricsResponseDTO)
def get_dashboard_metrics(user_id: CurrentUserId, repository: ReportRepo, clock: Clock):
    """
    Headline numbers for the current month: active projects, hours tracked,
    amount of sent invoices awaiting payment, students assigned.
    """
    metrics = GetDashboardMetricsUseCase(repository, clock=clock).execute(user_id)
    return DashboardMetricsResponseDTO.from_domain(metrics)
