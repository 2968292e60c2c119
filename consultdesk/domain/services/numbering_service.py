"""Numbering service for generating invoice numbers.
Numbers look like INV-20240315-042: issue date plus a 3-digit suffix.
"""

import random
from datetime import date
from typing import Optional

from consultdesk.domain.models.value_objects import InvoiceNumber


class NumberingService:
    """
    Domain service for invoice numbers.
    Uniqueness is enforced by the store; callers retry on collision.
    """

    def __init__(self, prefix: str = "INV", rng: Optional[random.Random] = None):
        self.prefix = prefix
        self.rng = rng or random.SystemRandom()
        self.max_sequence = 999

    def generate_invoice_number(self, issued_on: date) -> InvoiceNumber:
        """Generate a candidate invoice number for the given day."""
        return InvoiceNumber(
            issued_on=issued_on,
            sequence=self.rng.randint(0, self.max_sequence),
            prefix=self.prefix
        )
