"""
Invoice router.
Generates invoices from tracked time and serves the rendered document.
"""

from typing import List

from fastapi import APIRouter, Response, status
from fastapi.responses import HTMLResponse

from consultdesk.config import settings
from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import (
    Clock,
    Dispatcher,
    Numbering,
    UnitOfWorkDep,
    ProjectRepo,
    TimeEntryRepo,
    InvoiceRepo,
    UserRepo
)
from consultdesk.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    PreviewInvoiceUseCase,
    GetInvoiceUseCase,
    ListInvoicesUseCase,
    UpdateInvoiceUseCase,
    DeleteInvoiceUseCase
)
from consultdesk.application.use_cases.generate_pdf_use_case import GenerateInvoiceDocumentUseCase
from consultdesk.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    InvoiceResponseDTO,
    InvoicePreviewResponseDTO
)


router = APIRouter()


@router.get("", response_model=List[InvoiceResponseDTO])
def list_invoices(user_id: CurrentUserId, repository: InvoiceRepo):
    """List the user's invoices with their projects, newest first. Items are not included."""
    invoices = ListInvoicesUseCase(repository).execute(user_id)
    return [InvoiceResponseDTO.from_domain(invoice, include_items=False) for invoice in invoices]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InvoiceResponseDTO)
def create_invoice(
    request: CreateInvoiceRequestDTO,
    user_id: CurrentUserId,
    repository: InvoiceRepo,
    project_repository: ProjectRepo,
    time_entry_repository: TimeEntryRepo,
    uow: UnitOfWorkDep,
    numbering: Numbering,
    clock: Clock,
    dispatcher: Dispatcher
):
    """
    Generate an invoice for a project and period.

    - **from_date** / **to_date**: billing period, both days inclusive
    - **tax_rate**: percent, 0 to 100
    - **items**: optional subset of the billable entries to bill

    Fails with 400 when the period has no billable hours.
    """
    use_case = CreateInvoiceUseCase(
        repository,
        project_repository,
        time_entry_repository,
        uow,
        numbering_service=numbering,
        max_number_attempts=settings.invoice_number_max_attempts,
        clock=clock,
        dispatcher=dispatcher
    )
    return InvoiceResponseDTO.from_domain(use_case.execute(user_id, request))


@router.post("/preview", response_model=InvoicePreviewResponseDTO)
def preview_invoice(
    request: CreateInvoiceRequestDTO,
    user_id: CurrentUserId,
    project_repository: ProjectRepo,
    time_entry_repository: TimeEntryRepo
):
    """Totals and line items the invoice would get. Nothing is saved."""
    return PreviewInvoiceUseCase(project_repository, time_entry_repository).execute(user_id, request)


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
def get_invoice(invoice_id: str, user_id: CurrentUserId, repository: InvoiceRepo):
    return InvoiceResponseDTO.from_domain(GetInvoiceUseCase(repository).execute(user_id, invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceResponseDTO)
def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestDTO,
    user_id: CurrentUserId,
    repository: InvoiceRepo,
    uow: UnitOfWorkDep,
    clock: Clock,
    dispatcher: Dispatcher
):
    """Change status, due date, paid date or notes. Amounts and items are fixed."""
    use_case = UpdateInvoiceUseCase(repository, uow, clock=clock, dispatcher=dispatcher)
    return InvoiceResponseDTO.from_domain(use_case.execute(user_id, invoice_id, request))


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(invoice_id: str, user_id: CurrentUserId, repository: InvoiceRepo, uow: UnitOfWorkDep):
    DeleteInvoiceUseCase(repository, uow).execute(user_id, invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _document_use_case(
    repository: InvoiceRepo,
    time_entry_repository: TimeEntryRepo,
    user_repository: UserRepo,
    clock
) -> GenerateInvoiceDocumentUseCase:
    return GenerateInvoiceDocumentUseCase(
        repository,
        time_entry_repository,
        user_repository,
        currency=settings.default_currency,
        clock=clock
    )


@router.get("/{invoice_id}/document", response_class=HTMLResponse)
def get_invoice_document(
    invoice_id: str,
    user_id: CurrentUserId,
    repository: InvoiceRepo,
    time_entry_repository: TimeEntryRepo,
    user_repository: UserRepo,
    clock: Clock
):
    """The invoice rendered as printable HTML."""
    use_case = _document_use_case(repository, time_entry_repository, user_repository, clock)
    return HTMLResponse(use_case.render_html(user_id, invoice_id))


@router.get("/{invoice_id}/pdf", response_class=Response)
def get_invoice_pdf(
    invoice_id: str,
    user_id: CurrentUserId,
    repository: InvoiceRepo,
    time_entry_repository: TimeEntryRepo,
    user_repository: UserRepo,
    clock: Clock
):
    """The invoice as a PDF download."""
    use_case = _document_use_case(repository, time_entry_repository, user_repository, clock)
    filename, content = use_case.render_pdf(user_id, invoice_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
