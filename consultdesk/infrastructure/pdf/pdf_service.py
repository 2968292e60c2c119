"""
PDF generation service using WeasyPrint and Jinja2.
Renders the paginated invoice document to HTML and PDF.
"""

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from consultdesk.domain.models.value_objects import format_hours, round_money
from consultdesk.infrastructure.pdf.layout import InvoiceDocument


logger = logging.getLogger(__name__)

INVOICE_TEMPLATE = "invoice.html"
INVOICE_STYLESHEET = "invoice.css"


class PDFService:
    """Service for rendering invoice documents from templates."""

    def __init__(self, templates_dir: Optional[Path] = None):
        self.templates_dir = templates_dir or (Path(__file__).parent / "templates")

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"])
        )
        self._register_filters()

    def _register_filters(self):
        """Register custom Jinja2 filters."""

        def currency_format(value: Decimal, symbol: str = "$") -> str:
            return f"{symbol}{round_money(value):,.2f}"

        def hours_format(value: Decimal) -> str:
            return f"{Decimal(value):.2f}"

        def percentage_format(value: Decimal) -> str:
            return f"{Decimal(value).normalize():f}%"

        def date_format(value: Optional[date]) -> str:
            return value.strftime("%b %d, %Y") if value else ""

        self.env.filters["currency"] = currency_format
        self.env.filters["hours"] = hours_format
        self.env.filters["duration"] = format_hours
        self.env.filters["percentage"] = percentage_format
        self.env.filters["date"] = date_format

    def render_invoice_html(self, document: InvoiceDocument) -> str:
        """Render the invoice document as a standalone HTML page."""
        template = self.env.get_template(INVOICE_TEMPLATE)
        stylesheet = (self.templates_dir / INVOICE_STYLESHEET).read_text(encoding="utf-8")
        return template.render(doc=document, stylesheet=stylesheet)

    def render_invoice_pdf(self, document: InvoiceDocument) -> bytes:
        """Render the invoice document to PDF bytes."""
        # Imported here so the API starts on hosts without the Pango libraries
        from weasyprint import HTML
        from weasyprint.text.fonts import FontConfiguration

        html_content = self.render_invoice_html(document)
        logger.info(f"Rendering PDF for invoice {document.invoice_number} ({document.page_count} pages)")
        return HTML(string=html_content, base_url=str(self.templates_dir)).write_pdf(
            font_config=FontConfiguration()
        )


# Singleton instance
pdf_service = PDFService()
