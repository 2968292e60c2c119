"""
Invoice use cases for the application layer.
Handles invoice generation from tracked time and invoice management.
"""

from typing import List, Optional, Tuple

from consultdesk.domain.models.base import ConflictError, DuplicateEntityError, EntityNotFoundError
from consultdesk.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from consultdesk.domain.models.project import Project
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.models.value_objects import BillingPeriod
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository
from consultdesk.domain.repositories.project_repository import ProjectRepository
from consultdesk.domain.repositories.time_entry_repository import TimeEntryRepository
from consultdesk.domain.services.billing_service import BillingService, InvoiceTotals
from consultdesk.domain.services.numbering_service import NumberingService
from consultdesk.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    InvoicePreviewResponseDTO
)
from .base_use_case import BaseUseCase, CommandUseCase
from .project_use_cases import get_owned_project


def get_owned_invoice(repository: InvoiceRepository, invoice_id: str, user_id: str) -> Invoice:
    invoice = repository.get_by_id(invoice_id, user_id)
    if not invoice:
        raise EntityNotFoundError("Invoice", invoice_id)
    return invoice


class _InvoiceDraftMixin:
    """Shared selection and pricing for create and preview."""

    billing_service: BillingService
    project_repository: ProjectRepository
    time_entry_repository: TimeEntryRepository

    def _draft(
        self,
        user_id: str,
        request: CreateInvoiceRequestDTO
    ) -> Tuple[Project, List[TimeEntry], List[InvoiceItem], InvoiceTotals]:
        project = get_owned_project(self.project_repository, request.project_id, user_id)
        period = BillingPeriod(request.from_date, request.to_date)

        candidates = self.time_entry_repository.find_billable(project.id, user_id, period)
        entries = self.billing_service.select_billable_entries(candidates, period, project.id)
        entries = self.billing_service.restrict_selection(entries, request.selected_entry_ids)

        items = self.billing_service.build_line_items(entries, project.hourly_rate)
        totals = self.billing_service.compute_totals(entries, project.hourly_rate, request.tax_rate).rounded()
        return project, entries, items, totals


class CreateInvoiceUseCase(_InvoiceDraftMixin, CommandUseCase):
    """
    Use case for generating an invoice from a project's billable time.

    Nothing is written when the selection is empty. The invoice and its
    items are inserted together; a taken invoice number is retried with a
    fresh one a bounded number of times.
    """

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        project_repository: ProjectRepository,
        time_entry_repository: TimeEntryRepository,
        uow,
        numbering_service: Optional[NumberingService] = None,
        max_number_attempts: int = 5,
        **kwargs
    ):
        super().__init__(uow, **kwargs)
        self.invoice_repository = invoice_repository
        self.project_repository = project_repository
        self.time_entry_repository = time_entry_repository
        self.billing_service = BillingService()
        self.numbering_service = numbering_service or NumberingService()
        self.max_number_attempts = max(1, max_number_attempts)

    def execute(self, user_id: str, request: CreateInvoiceRequestDTO) -> Invoice:
        project, entries, items, totals = self._draft(user_id, request)
        now = self.clock()

        for attempt in range(1, self.max_number_attempts + 1):
            invoice_number = str(self.numbering_service.generate_invoice_number(now.date()))
            if self.invoice_repository.exists_by_number(invoice_number):
                self.logger.info(f"Invoice number {invoice_number} taken, attempt {attempt}")
                continue

            invoice = Invoice(
                user_id=user_id,
                project_id=project.id,
                invoice_number=invoice_number,
                client_name=project.client_name,
                from_date=request.from_date,
                to_date=request.to_date,
                subtotal=totals.subtotal,
                tax_rate=totals.tax_rate,
                tax_amount=totals.tax_amount,
                total=totals.total,
                due_date=request.due_date,
                notes=request.notes,
                items=items,
                created_at=now,
                updated_at=now
            )
            try:
                saved = self.invoice_repository.add_with_items(invoice)
            except DuplicateEntityError:
                # Another request claimed the number between check and insert
                self.logger.warning(f"Invoice number {invoice_number} collided on insert, attempt {attempt}")
                continue

            saved.mark_created()
            self._commit(saved)
            self.logger.info(
                f"Invoice {saved.invoice_number} created for project {project.id}: "
                f"{len(entries)} entries, total {saved.total}"
            )
            return saved

        raise ConflictError("Could not allocate a unique invoice number, please retry", retryable=True)


class PreviewInvoiceUseCase(_InvoiceDraftMixin, BaseUseCase):
    """Selection, line items and totals an invoice would get. Writes nothing."""

    def __init__(self, project_repository: ProjectRepository, time_entry_repository: TimeEntryRepository, **kwargs):
        super().__init__(**kwargs)
        self.project_repository = project_repository
        self.time_entry_repository = time_entry_repository
        self.billing_service = BillingService()

    def execute(self, user_id: str, request: CreateInvoiceRequestDTO) -> InvoicePreviewResponseDTO:
        project, entries, items, totals = self._draft(user_id, request)
        return InvoicePreviewResponseDTO.build(
            project_id=project.id,
            client_name=project.client_name,
            from_date=request.from_date,
            to_date=request.to_date,
            hourly_rate=project.hourly_rate,
            totals=totals,
            entries=entries,
            items=items
        )


class GetInvoiceUseCase(BaseUseCase):
    """Use case for getting an invoice with its items."""

    def __init__(self, invoice_repository: InvoiceRepository, **kwargs):
        super().__init__(**kwargs)
        self.invoice_repository = invoice_repository

    def execute(self, user_id: str, invoice_id: str) -> Invoice:
        return get_owned_invoice(self.invoice_repository, invoice_id, user_id)


class ListInvoicesUseCase(BaseUseCase):
    def __init__(self, invoice_repository: InvoiceRepository, **kwargs):
        super().__init__(**kwargs)
        self.invoice_repository = invoice_repository

    def execute(self, user_id: str) -> List[Invoice]:
        return self.invoice_repository.list_by_user(user_id)


class UpdateInvoiceUseCase(CommandUseCase):
    """
    Use case for invoice status and detail changes.
    The status moves first so a paid date sent with status=paid is accepted.
    """

    def __init__(self, invoice_repository: InvoiceRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.invoice_repository = invoice_repository

    def execute(self, user_id: str, invoice_id: str, request: UpdateInvoiceRequestDTO) -> Invoice:
        invoice = get_owned_invoice(self.invoice_repository, invoice_id, user_id)
        changes = request.changes()

        new_status = changes.pop("status", None)
        if new_status is not None:
            invoice.change_status(
                InvoiceStatus(new_status),
                today=self.clock().date(),
                paid_date=changes.get("paid_date")
            )
        if changes:
            invoice.update_details(**changes)

        saved = self.invoice_repository.save(invoice)
        self._commit(saved)
        return saved


class DeleteInvoiceUseCase(CommandUseCase):
    """Delete an invoice; its entries become billable again."""

    def __init__(self, invoice_repository: InvoiceRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.invoice_repository = invoice_repository

    def execute(self, user_id: str, invoice_id: str) -> None:
        if not self.invoice_repository.delete(invoice_id, user_id):
            raise EntityNotFoundError("Invoice", invoice_id)
        self.uow.commit()
        self.logger.info(f"Invoice {invoice_id} deleted by {user_id}")
