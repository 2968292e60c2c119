"""
Invoice mapper for converting between domain entities and database models.
"""

from consultdesk.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from consultdesk.infrastructure.db.models import InvoiceModel, InvoiceItemModel, generate_id
from consultdesk.infrastructure.mappers.project_mapper import ProjectMapper


class InvoiceMapper:
    """Maps between Invoice aggregate and InvoiceModel / InvoiceItemModel."""

    def __init__(self):
        self.project_mapper = ProjectMapper()

    def domain_to_model(self, invoice: Invoice) -> InvoiceModel:
        """New InvoiceModel with item models attached."""
        model = InvoiceModel(
            id=invoice.id or generate_id(),
            invoice_number=invoice.invoice_number,
            user_id=invoice.user_id,
            project_id=invoice.project_id,
            client_name=invoice.client_name,
            from_date=invoice.from_date,
            to_date=invoice.to_date,
            subtotal=invoice.subtotal,
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            total=invoice.total,
            created_at=invoice.created_at
        )
        self.update_model(model, invoice)
        model.items = [self.item_to_model(item) for item in invoice.items]
        return model

    def update_model(self, model: InvoiceModel, invoice: Invoice) -> None:
        """Copy the fields that may change after creation."""
        model.status = invoice.status
        model.due_date = invoice.due_date
        model.paid_date = invoice.paid_date
        model.notes = invoice.notes
        model.updated_at = invoice.updated_at

    def item_to_model(self, item: InvoiceItem) -> InvoiceItemModel:
        return InvoiceItemModel(
            id=item.id or generate_id(),
            time_entry_id=item.time_entry_id,
            description=item.description,
            hours=item.hours,
            rate=item.rate,
            amount=item.amount
        )

    def item_to_domain(self, model: InvoiceItemModel) -> InvoiceItem:
        return InvoiceItem(
            id=model.id,
            invoice_id=model.invoice_id,
            time_entry_id=model.time_entry_id,
            description=model.description,
            hours=model.hours,
            rate=model.rate,
            amount=model.amount
        )

    def model_to_domain(self, model: InvoiceModel, with_items: bool = True) -> Invoice:
        """Convert InvoiceModel to Invoice, including project and items when loaded."""
        project = self.project_mapper.model_to_domain(model.project) if model.project else None
        items = [self.item_to_domain(item) for item in model.items] if with_items else []

        return Invoice(
            id=model.id,
            invoice_number=model.invoice_number,
            user_id=model.user_id,
            project_id=model.project_id,
            client_name=model.client_name,
            from_date=model.from_date,
            to_date=model.to_date,
            subtotal=model.subtotal,
            tax_rate=model.tax_rate,
            tax_amount=model.tax_amount,
            total=model.total,
            status=InvoiceStatus(model.status),
            due_date=model.due_date,
            paid_date=model.paid_date,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
            items=items,
            project=project
        )
