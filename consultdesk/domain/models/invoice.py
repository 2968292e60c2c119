"""
Invoice domain models.
An invoice bills a project's stopped time entries over a period of days.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Set, TYPE_CHECKING

from consultdesk.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    DomainEvent
)
from consultdesk.domain.models.value_objects import BillingPeriod, InvoiceNumber, round_money, to_decimal

if TYPE_CHECKING:
    from consultdesk.domain.models.project import Project
    from consultdesk.domain.models.time_entry import TimeEntry


DESCRIPTION_MAX_LENGTH = 1000


class InvoiceStatus(str, Enum):
    """Invoice status."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


INVOICE_STATUS_TRANSITIONS: Dict[InvoiceStatus, Set[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.CANCELLED},
    InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}


# Domain Events

class InvoiceCreatedEvent(DomainEvent):
    """Event raised when an invoice is created."""

    def __init__(self, invoice_id: str, invoice_number: str, user_id: str, total: Decimal):
        super().__init__()
        self.invoice_id = invoice_id
        self.invoice_number = invoice_number
        self.user_id = user_id
        self.total = str(total)

    @property
    def event_name(self) -> str:
        return "invoice.created"


class InvoiceStatusChangedEvent(DomainEvent):
    """Event raised when invoice status changes."""

    def __init__(self, invoice_id: str, old_status: InvoiceStatus, new_status: InvoiceStatus):
        super().__init__()
        self.invoice_id = invoice_id
        self.old_status = old_status.value
        self.new_status = new_status.value

    @property
    def event_name(self) -> str:
        return "invoice.status_changed"


@dataclass(frozen=True)
class InvoiceItem:
    """
    Snapshot of one billed time entry.
    Never changes after the invoice is created.
    """

    time_entry_id: str
    description: str
    hours: Decimal
    rate: Decimal
    amount: Decimal
    id: Optional[str] = None
    invoice_id: Optional[str] = None

    @classmethod
    def from_time_entry(cls, entry: "TimeEntry", rate: Decimal) -> "InvoiceItem":
        hours = to_decimal(entry.duration, "hours")
        rate = to_decimal(rate, "rate")
        return cls(
            time_entry_id=entry.id,
            description=entry.description[:DESCRIPTION_MAX_LENGTH],
            hours=hours,
            rate=rate,
            amount=round_money(hours * rate)
        )


@dataclass(eq=False)
class Invoice(BaseEntity):
    """
    Invoice aggregate.
    Amounts are fixed at creation; only status, dates and notes change afterwards.
    """

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
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None
    items: List[InvoiceItem] = field(default_factory=list)
    project: Optional["Project"] = field(default=None, repr=False)

    def validate(self) -> None:
        """Validate invoice data."""
        if not self.user_id:
            raise ValidationError("Invoice must belong to a user", "user_id")
        if not self.project_id:
            raise ValidationError("Invoice must belong to a project", "project_id")
        InvoiceNumber.parse(self.invoice_number)
        if not self.client_name:
            raise ValidationError("Client name is required", "client_name")

        BillingPeriod(self.from_date, self.to_date)

        self.tax_rate = to_decimal(self.tax_rate, "tax_rate")
        if self.tax_rate < 0 or self.tax_rate > 100:
            raise ValidationError("Tax rate must be between 0 and 100", "tax_rate")
        for name in ("subtotal", "tax_amount", "total"):
            value = to_decimal(getattr(self, name), name)
            if value < 0:
                raise ValidationError(f"{name} cannot be negative", name)
            setattr(self, name, value)

        if not isinstance(self.status, InvoiceStatus):
            try:
                self.status = InvoiceStatus(self.status)
            except ValueError:
                raise ValidationError(f"Invalid invoice status: {self.status}", "status")

        if self.notes is not None and len(self.notes) > 2000:
            raise ValidationError("Notes cannot exceed 2000 characters", "notes")

    def can_transition_to(self, new_status: InvoiceStatus) -> bool:
        return new_status in INVOICE_STATUS_TRANSITIONS[self.status]

    def change_status(self, new_status: InvoiceStatus, today: date, paid_date: Optional[date] = None) -> None:
        """Move the invoice along its status table. Paying stamps the paid date."""
        new_status = InvoiceStatus(new_status)
        if new_status == self.status:
            return
        if not self.can_transition_to(new_status):
            raise BusinessRuleViolation(
                f"Cannot change invoice status from {self.status.value} to {new_status.value}"
            )

        old_status = self.status
        self.status = new_status
        if new_status == InvoiceStatus.PAID:
            self.paid_date = paid_date or self.paid_date or today
        self.mark_as_updated()
        self.add_event(InvoiceStatusChangedEvent(self.id, old_status, new_status))

    def update_details(self, **fields) -> None:
        """Update due date, paid date or notes."""
        if "paid_date" in fields and fields["paid_date"] is not None and self.status != InvoiceStatus.PAID:
            raise BusinessRuleViolation("Paid date can only be set on paid invoices")
        for name in ("due_date", "paid_date", "notes"):
            if name in fields:
                setattr(self, name, fields[name])
        self.validate()
        self.mark_as_updated()

    def mark_created(self) -> None:
        self.add_event(InvoiceCreatedEvent(self.id, self.invoice_number, self.user_id, self.total))
