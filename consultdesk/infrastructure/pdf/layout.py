"""
Invoice document layout.

Turns an invoice into a view model split into A4 pages. Positions are in
millimetres from the top edge of the page. Pure: no templates, no I/O.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from consultdesk.domain.models.invoice import Invoice, InvoiceStatus
from consultdesk.domain.models.user import User
from consultdesk.domain.models.value_objects import round_money


PAGE_HEIGHT_MM = 297
MARGIN_TOP_MM = 20
FOOTER_HEIGHT_MM = 20
CONTENT_BOTTOM_MM = PAGE_HEIGHT_MM - MARGIN_TOP_MM - FOOTER_HEIGHT_MM

# Header, issuer/client blocks and project line on the first page
FIRST_PAGE_TABLE_TOP_MM = 120
TABLE_HEADER_HEIGHT_MM = 10
ROW_HEIGHT_MM = 10
TOTALS_HEIGHT_MM = 40

DESCRIPTION_LIMIT = 40

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "$",
    "AUD": "$",
}

STATUS_LABELS = {
    InvoiceStatus.DRAFT: "Draft",
    InvoiceStatus.SENT: "Sent",
    InvoiceStatus.PAID: "Paid",
    InvoiceStatus.CANCELLED: "Cancelled",
}


def truncate_description(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


@dataclass
class DocumentRow:
    """One line of the items table."""
    entry_date: Optional[date]
    description: str
    hours: Decimal
    rate: Decimal
    amount: Decimal
    shaded: bool = False


@dataclass
class DocumentPage:
    number: int
    rows: List[DocumentRow] = field(default_factory=list)
    is_first: bool = False
    show_totals: bool = False


@dataclass
class InvoiceDocument:
    """Everything the invoice template needs."""
    invoice_number: str
    status_label: str
    issued_on: date
    generated_on: date
    issuer: Dict[str, Optional[str]]
    client_name: str
    project_name: str
    from_date: date
    to_date: date
    due_date: Optional[date]
    notes: Optional[str]
    currency_symbol: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    pages: List[DocumentPage] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def filename(self) -> str:
        return f"Invoice_{self.invoice_number}.pdf"


def paginate(rows: List[DocumentRow]) -> List[DocumentPage]:
    """
    Lay rows out top to bottom, starting a new page whenever the next row
    would cross the footer. The totals block goes after the last row, or on
    a page of its own when it does not fit.
    """
    pages = [DocumentPage(number=1, is_first=True)]
    y = FIRST_PAGE_TABLE_TOP_MM + TABLE_HEADER_HEIGHT_MM

    for row in rows:
        if y + ROW_HEIGHT_MM > CONTENT_BOTTOM_MM:
            pages.append(DocumentPage(number=len(pages) + 1))
            # Continuation pages repeat the table header
            y = MARGIN_TOP_MM + TABLE_HEADER_HEIGHT_MM
        pages[-1].rows.append(row)
        y += ROW_HEIGHT_MM

    if y + TOTALS_HEIGHT_MM > CONTENT_BOTTOM_MM:
        pages.append(DocumentPage(number=len(pages) + 1))
    pages[-1].show_totals = True
    return pages


def build_invoice_document(
    invoice: Invoice,
    issuer: User,
    generated_on: date,
    entry_dates: Optional[Dict[str, date]] = None,
    currency: str = "USD"
) -> InvoiceDocument:
    """Build the paginated view model of an invoice."""
    entry_dates = entry_dates or {}
    rows = [
        DocumentRow(
            entry_date=entry_dates.get(item.time_entry_id),
            description=truncate_description(item.description),
            hours=item.hours,
            rate=item.rate,
            amount=item.amount,
            shaded=index % 2 == 1
        )
        for index, item in enumerate(invoice.items)
    ]

    return InvoiceDocument(
        invoice_number=invoice.invoice_number,
        status_label=STATUS_LABELS.get(invoice.status, str(invoice.status)),
        issued_on=invoice.created_at.date() if invoice.created_at else generated_on,
        generated_on=generated_on,
        issuer={
            "name": issuer.name,
            "title": issuer.title,
            "address": issuer.address,
            "email": issuer.email,
            "phone": issuer.phone,
        },
        client_name=invoice.client_name,
        project_name=invoice.project.name if invoice.project else "",
        from_date=invoice.from_date,
        to_date=invoice.to_date,
        due_date=invoice.due_date,
        notes=invoice.notes,
        currency_symbol=CURRENCY_SYMBOLS.get(currency, currency + " "),
        subtotal=round_money(invoice.subtotal),
        tax_rate=invoice.tax_rate,
        tax_amount=round_money(invoice.tax_amount),
        total=round_money(invoice.total),
        pages=paginate(rows)
    )
