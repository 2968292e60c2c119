"""Invoice repository interface.
Defines the contract for invoice data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.invoice import Invoice


class InvoiceRepository(ABC):
    """Repository interface for Invoice aggregate."""

    @abstractmethod
    def add_with_items(self, invoice: Invoice) -> Invoice:
        """
        Insert the invoice and all of its items atomically.

        Raises DuplicateEntityError when the invoice number is taken, leaving
        no rows behind, and StoreError for any other store failure.
        """
        pass

    @abstractmethod
    def save(self, invoice: Invoice) -> Invoice:
        """Update invoice-level fields. Items are never rewritten."""
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        """Return the invoice with its project and items."""
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Invoice]:
        """Return the user's invoices with their projects, newest first."""
        pass

    @abstractmethod
    def count_by_project(self, project_id: str) -> int:
        pass

    @abstractmethod
    def exists_by_number(self, invoice_number: str) -> bool:
        pass

    @abstractmethod
    def delete(self, invoice_id: str, user_id: str) -> bool:
        """Delete an invoice and its items."""
        pass
