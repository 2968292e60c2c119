"""Read-only aggregate queries for the dashboard and reports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict


@dataclass
class DashboardMetrics:
    active_projects: int
    hours_this_month: Decimal
    pending_invoices_amount: Decimal
    students_assigned: int


@dataclass
class ReportSummary:
    total_projects: int
    total_hours: Decimal
    total_revenue: Decimal
    paid_revenue: Decimal
    pending_revenue: Decimal
    projects_by_status: Dict[str, int] = field(default_factory=dict)
    software_usage: Dict[str, int] = field(default_factory=dict)


class ReportRepository(ABC):
    """Aggregate queries. Recomputed per request, nothing is cached."""

    @abstractmethod
    def get_dashboard_metrics(
        self,
        user_id: str,
        month_start: datetime,
        month_end: datetime
    ) -> DashboardMetrics:
        """Metrics for entries starting in [month_start, month_end)."""
        pass

    @abstractmethod
    def get_report_summary(self, user_id: str) -> ReportSummary:
        pass
