"""
Aggregate queries for the dashboard and the reports page.
"""

from collections import Counter
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from consultdesk.domain.models.invoice import InvoiceStatus
from consultdesk.domain.models.project import ProjectStatus
from consultdesk.domain.repositories.report_repository import (
    ReportRepository as ReportRepositoryInterface,
    DashboardMetrics,
    ReportSummary
)
from consultdesk.infrastructure.db.models import (
    ProjectModel,
    ProjectStudentModel,
    TimeEntryModel,
    InvoiceModel
)


def _decimal_sum(values: Iterable[Optional[Decimal]]) -> Decimal:
    # Summed in Python: SQLite would add these as floats
    return sum((value for value in values if value is not None), Decimal("0"))


class SQLAlchemyReportRepository(ReportRepositoryInterface):
    """SQLAlchemy implementation of the aggregate queries."""

    def __init__(self, session: Session):
        self.session = session

    def _stopped_durations(self, user_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None):
        conditions = [
            TimeEntryModel.user_id == user_id,
            TimeEntryModel.is_running.is_(False),
            TimeEntryModel.duration.isnot(None),
        ]
        if start is not None:
            conditions.append(TimeEntryModel.start_time >= start)
        if end is not None:
            conditions.append(TimeEntryModel.start_time < end)
        rows = self.session.query(TimeEntryModel.duration).filter(and_(*conditions)).all()
        return [row.duration for row in rows]

    def _invoice_totals(self, user_id: str, *statuses: InvoiceStatus):
        rows = self.session.query(InvoiceModel.total).filter(
            InvoiceModel.user_id == user_id,
            InvoiceModel.status.in_(statuses)
        ).all()
        return [row.total for row in rows]

    def get_dashboard_metrics(self, user_id: str, month_start: datetime, month_end: datetime) -> DashboardMetrics:
        active_projects = self.session.query(func.count(ProjectModel.id)).filter(
            ProjectModel.user_id == user_id,
            ProjectModel.status == ProjectStatus.ACTIVE
        ).scalar() or 0

        students_assigned = self.session.query(
            func.count(func.distinct(ProjectStudentModel.student_id))
        ).join(
            ProjectModel, ProjectModel.id == ProjectStudentModel.project_id
        ).filter(ProjectModel.user_id == user_id).scalar() or 0

        return DashboardMetrics(
            active_projects=active_projects,
            hours_this_month=_decimal_sum(self._stopped_durations(user_id, month_start, month_end)),
            pending_invoices_amount=_decimal_sum(self._invoice_totals(user_id, InvoiceStatus.SENT)),
            students_assigned=students_assigned
        )

    def get_report_summary(self, user_id: str) -> ReportSummary:
        projects = self.session.query(
            ProjectModel.status, ProjectModel.software_tools
        ).filter(ProjectModel.user_id == user_id).all()

        projects_by_status = {status.value: 0 for status in ProjectStatus}
        software_usage: Counter = Counter()
        for row in projects:
            projects_by_status[ProjectStatus(row.status).value] += 1
            software_usage.update(row.software_tools or [])

        billed_statuses = (InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.PAID)
        return ReportSummary(
            total_projects=len(projects),
            total_hours=_decimal_sum(self._stopped_durations(user_id)),
            total_revenue=_decimal_sum(self._invoice_totals(user_id, *billed_statuses)),
            paid_revenue=_decimal_sum(self._invoice_totals(user_id, InvoiceStatus.PAID)),
            pending_revenue=_decimal_sum(self._invoice_totals(user_id, InvoiceStatus.SENT)),
            projects_by_status=projects_by_status,
            software_usage=dict(software_usage.most_common())
        )
