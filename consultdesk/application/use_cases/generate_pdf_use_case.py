"""
Use case for rendering invoice documents (HTML preview and PDF).
"""

from typing import Optional, Tuple

from consultdesk.domain.models.base import EntityNotFoundError
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository
from consultdesk.domain.repositories.time_entry_repository import TimeEntryRepository
from consultdesk.domain.repositories.user_repository import UserRepository
from consultdesk.infrastructure.pdf.layout import InvoiceDocument, build_invoice_document
from consultdesk.infrastructure.pdf.pdf_service import PDFService, pdf_service
from .base_use_case import BaseUseCase
from .invoice_use_cases import get_owned_invoice


class GenerateInvoiceDocumentUseCase(BaseUseCase):
    """Builds the paginated invoice document and renders it."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        time_entry_repository: TimeEntryRepository,
        user_repository: UserRepository,
        renderer: Optional[PDFService] = None,
        currency: str = "USD",
        **kwargs
    ):
        super().__init__(**kwargs)
        self.invoice_repository = invoice_repository
        self.time_entry_repository = time_entry_repository
        self.user_repository = user_repository
        self.renderer = renderer or pdf_service
        self.currency = currency

    def build(self, user_id: str, invoice_id: str) -> InvoiceDocument:
        invoice = get_owned_invoice(self.invoice_repository, invoice_id, user_id)

        issuer = self.user_repository.get_by_id(user_id)
        if not issuer:
            raise EntityNotFoundError("User", user_id)

        # Line items keep only the entry id; dates come from the entries themselves
        billed = {item.time_entry_id for item in invoice.items}
        entry_dates = {
            entry.id: entry.entry_date
            for entry in self.time_entry_repository.list_by_project(invoice.project_id, user_id)
            if entry.id in billed
        }

        return build_invoice_document(
            invoice,
            issuer=issuer,
            generated_on=self.clock().date(),
            entry_dates=entry_dates,
            currency=self.currency
        )

    def render_html(self, user_id: str, invoice_id: str) -> str:
        return self.renderer.render_invoice_html(self.build(user_id, invoice_id))

    def render_pdf(self, user_id: str, invoice_id: str) -> Tuple[str, bytes]:
        """Return the download filename and the PDF bytes."""
        document = self.build(user_id, invoice_id)
        content = self.renderer.render_invoice_pdf(document)
        self.logger.info(f"Generated PDF for invoice {document.invoice_number}")
        return document.filename, content
