"""
Request-scoped dependencies shared by the routers.
Every repository of one request wraps the same session.
"""

from datetime import datetime
from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from consultdesk.config import settings
from consultdesk.domain.events.base import EventDispatcher, get_event_dispatcher
from consultdesk.domain.models.base import utc_now
from consultdesk.infrastructure.db.database import get_db, SQLAlchemyUnitOfWork
from consultdesk.infrastructure.repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyStudentRepository,
    SQLAlchemyProjectStudentRepository,
    SQLAlchemyTimeEntryRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyReportRepository
)
from consultdesk.domain.services.numbering_service import NumberingService


DbSession = Annotated[Session, Depends(get_db)]


def get_clock() -> Callable[[], datetime]:
    """Dependency for the time source; tests override it with a fixed clock."""
    return utc_now


def get_dispatcher() -> EventDispatcher:
    return get_event_dispatcher()


def get_unit_of_work(session: DbSession) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(session)


def get_user_repository(session: DbSession) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session)


def get_project_repository(session: DbSession) -> SQLAlchemyProjectRepository:
    return SQLAlchemyProjectRepository(session)


def get_student_repository(session: DbSession) -> SQLAlchemyStudentRepository:
    return SQLAlchemyStudentRepository(session)


def get_assignment_repository(session: DbSession) -> SQLAlchemyProjectStudentRepository:
    return SQLAlchemyProjectStudentRepository(session)


def get_time_entry_repository(session: DbSession) -> SQLAlchemyTimeEntryRepository:
    return SQLAlchemyTimeEntryRepository(session)


def get_invoice_repository(session: DbSession) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(session)


def get_report_repository(session: DbSession) -> SQLAlchemyReportRepository:
    return SQLAlchemyReportRepository(session)


def get_numbering_service() -> NumberingService:
    return NumberingService(prefix=settings.invoice_number_prefix)


Clock = Annotated[Callable[[], datetime], Depends(get_clock)]
Dispatcher = Annotated[EventDispatcher, Depends(get_dispatcher)]
UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]
UserRepo = Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]
StudentRepo = Annotated[SQLAlchemyStudentRepository, Depends(get_student_repository)]
AssignmentRepo = Annotated[SQLAlchemyProjectStudentRepository, Depends(get_assignment_repository)]
TimeEntryRepo = Annotated[SQLAlchemyTimeEntryRepository, Depends(get_time_entry_repository)]
InvoiceRepo = Annotated[SQLAlchemyInvoiceRepository, Depends(get_invoice_repository)]
ReportRepo = Annotated[SQLAlchemyReportRepository, Depends(get_report_repository)]
Numbering = Annotated[NumberingService, Depends(get_numbering_service)]
