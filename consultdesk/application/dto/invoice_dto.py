"""
Invoice DTOs for the application layer.
Data Transfer Objects for invoice generation and management.
"""

from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from pydantic import Field, field_validator, model_validator

from consultdesk.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.services.billing_service import InvoiceTotals
from .base_dto import BaseDTO, RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO, strip_optional
from .project_dto import ProjectSummaryDTO


# Request DTOs
class InvoiceItemSelectionDTO(RequestDTO):
    """One time entry the client wants billed."""

    time_entry_id: str = Field(min_length=1)


class CreateInvoiceRequestDTO(CreateRequestDTO):
    """DTO for invoice creation requests."""

    project_id: str = Field(min_length=1, description="Project to bill")
    from_date: date = Field(description="First day of the billing period (inclusive)")
    to_date: date = Field(description="Last day of the billing period (inclusive)")
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, max_digits=5, decimal_places=2,
                              description="Tax rate in percent")
    due_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=2000)
    items: Optional[List[InvoiceItemSelectionDTO]] = Field(
        default=None,
        description="Restrict billing to these entries; all billable entries when omitted"
    )

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return strip_optional(v)

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("items cannot be an empty list")
        return v

    @model_validator(mode="after")
    def validate_period(self):
        if self.to_date < self.from_date:
            raise ValueError("to_date cannot be before from_date")
        return self

    @property
    def selected_entry_ids(self) -> Optional[List[str]]:
        if self.items is None:
            return None
        return [item.time_entry_id for item in self.items]


class UpdateInvoiceRequestDTO(UpdateRequestDTO):
    """
    DTO for invoice updates.
    Amounts, period and items are fixed once the invoice exists.
    """

    status: Optional[InvoiceStatus] = Field(default=None)
    due_date: Optional[date] = Field(default=None)
    paid_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return strip_optional(v)


# Response DTOs
class InvoiceItemResponseDTO(BaseDTO):
    """DTO for invoice line items."""

    id: Optional[str] = None
    time_entry_id: str
    description: str
    hours: Decimal
    rate: Decimal
    amount: Decimal

    @classmethod
    def from_domain(cls, item: InvoiceItem) -> "InvoiceItemResponseDTO":
        return cls(
            id=item.id,
            time_entry_id=item.time_entry_id,
            description=item.description,
            hours=item.hours,
            rate=item.rate,
            amount=item.amount
        )


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice responses."""

    user_id: str
    project_id: str
    invoice_number: str
    client_name: str
    from_date: date
    to_date: date
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    status: InvoiceStatus
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None
    project: Optional[ProjectSummaryDTO] = None
    items: Optional[List[InvoiceItemResponseDTO]] = None

    @classmethod
    def from_domain(cls, invoice: Invoice, include_items: bool = True) -> "InvoiceResponseDTO":
        """Create DTO from domain entity."""
        return cls(
            id=invoice.id,
            user_id=invoice.user_id,
            project_id=invoice.project_id,
            invoice_number=invoice.invoice_number,
            client_name=invoice.client_name,
            from_date=invoice.from_date,
            to_date=invoice.to_date,
            subtotal=invoice.subtotal,
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            total=invoice.total,
            status=invoice.status,
            due_date=invoice.due_date,
            paid_date=invoice.paid_date,
            notes=invoice.notes,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
            project=ProjectSummaryDTO.from_domain(invoice.project) if invoice.project else None,
            items=[InvoiceItemResponseDTO.from_domain(item) for item in invoice.items] if include_items else None
        )


class InvoicePreviewEntryDTO(BaseDTO):
    """A billable entry shown in the preview."""

    time_entry_id: str
    description: str
    start_time: datetime
    duration: Decimal

    @classmethod
    def from_domain(cls, entry: TimeEntry) -> "InvoicePreviewEntryDTO":
        return cls(
            time_entry_id=entry.id,
            description=entry.description,
            start_time=entry.start_time,
            duration=entry.duration
        )


class InvoicePreviewResponseDTO(BaseDTO):
    """Totals an invoice would have, computed without writing anything."""

    project_id: str
    client_name: str
    from_date: date
    to_date: date
    hourly_rate: Decimal
    total_hours: Decimal
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    entries: List[InvoicePreviewEntryDTO] = Field(default_factory=list)
    items: List[InvoiceItemResponseDTO] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        project_id: str,
        client_name: str,
        from_date: date,
        to_date: date,
        hourly_rate: Decimal,
        totals: InvoiceTotals,
        entries: List[TimeEntry],
        items: List[InvoiceItem]
    ) -> "InvoicePreviewResponseDTO":
        return cls(
            project_id=project_id,
            client_name=client_name,
            from_date=from_date,
            to_date=to_date,
            hourly_rate=hourly_rate,
            total_hours=totals.total_hours,
            subtotal=totals.subtotal,
            tax_rate=totals.tax_rate,
            tax_amount=totals.tax_amount,
            total=totals.total,
            entries=[InvoicePreviewEntryDTO.from_domain(entry) for entry in entries],
            items=[InvoiceItemResponseDTO.from_domain(item) for item in items]
        )
