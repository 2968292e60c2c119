"""
Time entry repository implementation using SQLAlchemy.
"""

import logging
from typing import Optional, List

from sqlalchemy import and_, desc, asc, exists, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from consultdesk.domain.models.base import ConflictError, EntityNotFoundError, StoreError
from consultdesk.domain.models.invoice import InvoiceStatus
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.models.value_objects import BillingPeriod
from consultdesk.domain.repositories.time_entry_repository import TimeEntryRepository as TimeEntryRepositoryInterface
from consultdesk.infrastructure.db.models import TimeEntryModel, InvoiceItemModel, InvoiceModel
from consultdesk.infrastructure.mappers.time_entry_mapper import TimeEntryMapper


logger = logging.getLogger(__name__)


class SQLAlchemyTimeEntryRepository(TimeEntryRepositoryInterface):
    """SQLAlchemy implementation of time entry repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeEntryMapper()
        self.model = TimeEntryModel

    def _get_model(self, entry_id: str, user_id: str) -> Optional[TimeEntryModel]:
        return self.session.query(TimeEntryModel).filter_by(
            id=entry_id,
            user_id=user_id
        ).first()

    def _has_running_entry(self, user_id: str) -> bool:
        return self.session.query(
            exists().where(and_(
                TimeEntryModel.user_id == user_id,
                TimeEntryModel.is_running.is_(True)
            ))
        ).scalar()

    def add(self, time_entry: TimeEntry) -> TimeEntry:
        """Insert a new entry; the running-timer index rejects a second running entry."""
        model = self.mapper.domain_to_model(time_entry)
        try:
            with self.session.begin_nested():
                self.session.add(model)
        except IntegrityError as e:
            if time_entry.is_running and self._has_running_entry(time_entry.user_id):
                raise ConflictError("A timer is already running; stop it first") from e
            logger.error(f"Failed to insert time entry: {e.orig}")
            raise StoreError() from e

        time_entry.id = model.id
        return time_entry

    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """Update descriptive fields of an existing entry."""
        model = self._get_model(time_entry.id, time_entry.user_id)
        if not model:
            raise EntityNotFoundError("TimeEntry", time_entry.id)
        self.mapper.update_details(model, time_entry)
        self.session.flush()
        return time_entry

    def mark_stopped(self, time_entry: TimeEntry) -> bool:
        """Conditional update so two concurrent stops cannot both win."""
        result = self.session.execute(
            update(TimeEntryModel)
            .where(and_(
                TimeEntryModel.id == time_entry.id,
                TimeEntryModel.user_id == time_entry.user_id,
                TimeEntryModel.is_running.is_(True)
            ))
            .values(
                end_time=time_entry.end_time,
                duration=time_entry.duration,
                is_running=False,
                updated_at=time_entry.updated_at
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def get_by_id(self, entry_id: str, user_id: str) -> Optional[TimeEntry]:
        """Get time entry by ID for its owner."""
        model = self.session.query(TimeEntryModel).options(
            joinedload(TimeEntryModel.project)
        ).filter_by(id=entry_id, user_id=user_id).first()

        if not model:
            return None
        return self.mapper.model_to_domain(model, with_project=True)

    def get_running_entry(self, user_id: str) -> Optional[TimeEntry]:
        """Get currently running time entry for user."""
        model = self.session.query(TimeEntryModel).options(
            joinedload(TimeEntryModel.project)
        ).filter(
            and_(
                TimeEntryModel.user_id == user_id,
                TimeEntryModel.is_running.is_(True)
            )
        ).first()

        if not model:
            return None
        return self.mapper.model_to_domain(model, with_project=True)

    def list_by_user(self, user_id: str) -> List[TimeEntry]:
        models = self.session.query(TimeEntryModel).options(
            joinedload(TimeEntryModel.project)
        ).filter_by(user_id=user_id).order_by(
            desc(TimeEntryModel.created_at), desc(TimeEntryModel.id)
        ).all()
        return [self.mapper.model_to_domain(model, with_project=True) for model in models]

    def list_by_project(self, project_id: str, user_id: str) -> List[TimeEntry]:
        models = self.session.query(TimeEntryModel).filter_by(
            project_id=project_id,
            user_id=user_id
        ).order_by(desc(TimeEntryModel.start_time), desc(TimeEntryModel.id)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def find_billable(self, project_id: str, user_id: str, period: BillingPeriod) -> List[TimeEntry]:
        """Stopped, not yet invoiced entries starting inside the period."""
        already_billed = exists().where(and_(
            InvoiceItemModel.time_entry_id == TimeEntryModel.id,
            InvoiceItemModel.invoice_id == InvoiceModel.id,
            InvoiceModel.status != InvoiceStatus.CANCELLED
        ))

        models = self.session.query(TimeEntryModel).filter(
            and_(
                TimeEntryModel.project_id == project_id,
                TimeEntryModel.user_id == user_id,
                TimeEntryModel.is_running.is_(False),
                TimeEntryModel.duration.isnot(None),
                TimeEntryModel.start_time >= period.starts_at,
                TimeEntryModel.start_time < period.ends_before,
                ~already_billed
            )
        ).order_by(asc(TimeEntryModel.start_time), asc(TimeEntryModel.id)).all()

        return [self.mapper.model_to_domain(model) for model in models]

    def is_invoiced(self, entry_id: str) -> bool:
        return self.session.query(
            exists().where(InvoiceItemModel.time_entry_id == entry_id)
        ).scalar()

    def delete(self, entry_id: str, user_id: str) -> bool:
        """Delete time entry by ID."""
        model = self._get_model(entry_id, user_id)
        if not model:
            return False

        try:
            with self.session.begin_nested():
                self.session.delete(model)
        except IntegrityError as e:
            raise ConflictError("Time entry is billed on an invoice and cannot be deleted") from e
        return True
