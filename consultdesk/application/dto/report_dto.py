"""
Dashboard and report DTOs.
"""

from decimal import Decimal
from typing import Dict

from pydantic import Field

from consultdesk.domain.models.value_objects import round_money
from consultdesk.domain.repositories.report_repository import DashboardMetrics, ReportSummary
from .base_dto import BaseDTO


class DashboardMetricsResponseDTO(BaseDTO):
    """Four headline numbers for the current month."""

    active_projects: int
    hours_this_month: Decimal
    pending_invoices_amount: Decimal
    students_assigned: int

    @classmethod
    def from_domain(cls, metrics: DashboardMetrics) -> "DashboardMetricsResponseDTO":
        return cls(
            active_projects=metrics.active_projects,
            hours_this_month=metrics.hours_this_month,
            pending_invoices_amount=round_money(metrics.pending_invoices_amount),
            students_assigned=metrics.students_assigned
        )


class ReportSummaryResponseDTO(BaseDTO):
    """Totals shown on the reports page."""

    total_projects: int
    total_hours: Decimal
    total_revenue: Decimal
    paid_revenue: Decimal
    pending_revenue: Decimal
    projects_by_status: Dict[str, int] = Field(default_factory=dict)
    software_usage: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, summary: ReportSummary) -> "ReportSummaryResponseDTO":
        return cls(
            total_projects=summary.total_projects,
            total_hours=summary.total_hours,
            total_revenue=round_money(summary.total_revenue),
            paid_revenue=round_money(summary.paid_revenue),
            pending_revenue=round_money(summary.pending_revenue),
            projects_by_status=dict(summary.projects_by_status),
            software_usage=dict(summary.software_usage)
        )
