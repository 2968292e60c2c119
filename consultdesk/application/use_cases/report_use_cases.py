"""
Dashboard and report use cases.
"""

from datetime import datetime
from typing import Tuple

from consultdesk.domain.repositories.report_repository import ReportRepository, DashboardMetrics, ReportSummary
from .base_use_case import BaseUseCase


def month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    """First instant of the month containing now, and of the month after."""
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1)
    else:
        end = datetime(now.year, now.month + 1, 1)
    return start, end


class GetDashboardMetricsUseCase(BaseUseCase):
    """Headline numbers for the current calendar month."""

    def __init__(self, report_repository: ReportRepository, **kwargs):
        super().__init__(**kwargs)
        self.report_repository = report_repository

    def execute(self, user_id: str) -> DashboardMetrics:
        month_start, month_end = month_bounds(self.clock())
        return self.report_repository.get_dashboard_metrics(user_id, month_start, month_end)


class GetReportSummaryUseCase(BaseUseCase):
    def __init__(self, report_repository: ReportRepository, **kwargs):
        super().__init__(**kwargs)
        self.report_repository = report_repository

    def execute(self, user_id: str) -> ReportSummary:
        return self.report_repository.get_report_summary(user_id)
