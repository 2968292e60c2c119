"""
Invoice repository implementation using SQLAlchemy.
"""

import logging
from typing import Optional, List

from sqlalchemy import desc, exists, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from consultdesk.domain.models.base import DuplicateEntityError, EntityNotFoundError, StoreError
from consultdesk.domain.models.invoice import Invoice
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository as InvoiceRepositoryInterface
from consultdesk.infrastructure.db.models import InvoiceModel
from consultdesk.infrastructure.mappers.invoice_mapper import InvoiceMapper


logger = logging.getLogger(__name__)


class SQLAlchemyInvoiceRepository(InvoiceRepositoryInterface):
    """SQLAlchemy implementation of invoice repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = InvoiceMapper()
        self.model = InvoiceModel

    def _query_with_relations(self):
        return self.session.query(InvoiceModel).options(
            joinedload(InvoiceModel.project),
            selectinload(InvoiceModel.items)
        )

    def add_with_items(self, invoice: Invoice) -> Invoice:
        """
        Insert invoice and items inside one savepoint.
        A failure anywhere rolls back every row written here.
        """
        model = self.mapper.domain_to_model(invoice)
        try:
            with self.session.begin_nested():
                self.session.add(model)
        except IntegrityError as e:
            if self.exists_by_number(invoice.invoice_number):
                raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number) from e
            logger.error(f"Failed to insert invoice {invoice.invoice_number}: {e.orig}")
            raise StoreError() from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert invoice {invoice.invoice_number}: {e}")
            raise StoreError() from e

        return self.mapper.model_to_domain(model)

    def save(self, invoice: Invoice) -> Invoice:
        """Update status, dates and notes."""
        model = self.session.query(InvoiceModel).filter_by(
            id=invoice.id,
            user_id=invoice.user_id
        ).first()
        if not model:
            raise EntityNotFoundError("Invoice", invoice.id)

        self.mapper.update_model(model, invoice)
        self.session.flush()
        return invoice

    def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        """Get invoice with project and items for its owner."""
        model = self._query_with_relations().filter_by(
            id=invoice_id,
            user_id=user_id
        ).first()

        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_user(self, user_id: str) -> List[Invoice]:
        models = self.session.query(InvoiceModel).options(
            joinedload(InvoiceModel.project)
        ).filter_by(user_id=user_id).order_by(
            desc(InvoiceModel.created_at), desc(InvoiceModel.id)
        ).all()
        return [self.mapper.model_to_domain(model, with_items=False) for model in models]

    def count_by_project(self, project_id: str) -> int:
        return self.session.query(func.count(InvoiceModel.id)).filter_by(
            project_id=project_id
        ).scalar() or 0

    def exists_by_number(self, invoice_number: str) -> bool:
        return self.session.query(
            exists().where(InvoiceModel.invoice_number == invoice_number)
        ).scalar()

    def delete(self, invoice_id: str, user_id: str) -> bool:
        """Delete an invoice; its items go with it."""
        model = self.session.query(InvoiceModel).filter_by(
            id=invoice_id,
            user_id=user_id
        ).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
