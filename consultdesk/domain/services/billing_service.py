"""Billing service for invoice calculations.
Selects billable time and computes subtotal, tax and total.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Collection

from consultdesk.domain.models.base import ValidationError, BusinessRuleViolation
from consultdesk.domain.models.invoice import InvoiceItem
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.models.value_objects import BillingPeriod, round_money, to_decimal


HUNDRED = Decimal("100")


@dataclass(frozen=True)
class InvoiceTotals:
    """Invoice amounts. Unrounded until rounded() is called."""

    total_hours: Decimal
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal

    def rounded(self) -> "InvoiceTotals":
        """Round amounts to cents for storage and display."""
        subtotal = round_money(self.subtotal)
        tax_amount = round_money(self.tax_amount)
        return InvoiceTotals(
            total_hours=self.total_hours,
            subtotal=subtotal,
            tax_rate=self.tax_rate,
            tax_amount=tax_amount,
            total=round_money(self.total)
        )


class BillingService:
    """
    Domain service for billing calculations and business logic.
    All arithmetic is exact Decimal; rounding happens only in InvoiceTotals.rounded().
    """

    def __init__(self):
        self.min_tax_rate = Decimal("0")
        self.max_tax_rate = HUNDRED

    def select_billable_entries(
        self,
        entries: List[TimeEntry],
        period: BillingPeriod,
        project_id: Optional[str] = None
    ) -> List[TimeEntry]:
        """
        Keep stopped entries whose start date falls inside the period.
        Both ends of the period are inclusive.
        """
        selected = [
            entry for entry in entries
            if entry.is_billable
            and period.contains(entry.start_time)
            and (project_id is None or entry.project_id == project_id)
        ]
        return sorted(selected, key=lambda entry: entry.start_time)

    def restrict_selection(
        self,
        entries: List[TimeEntry],
        entry_ids: Optional[Collection[str]]
    ) -> List[TimeEntry]:
        """Narrow the selection to the requested entries, rejecting unknown ids."""
        if entry_ids is None:
            return entries
        requested = list(dict.fromkeys(entry_ids))
        available = {entry.id for entry in entries}
        unknown = [entry_id for entry_id in requested if entry_id not in available]
        if unknown:
            raise ValidationError(
                f"Time entries not billable in this period: {', '.join(unknown)}",
                "items"
            )
        wanted = set(requested)
        return [entry for entry in entries if entry.id in wanted]

    def validate_tax_rate(self, tax_rate) -> Decimal:
        rate = to_decimal(tax_rate, "tax_rate")
        if rate < self.min_tax_rate or rate > self.max_tax_rate:
            raise ValidationError("Tax rate must be between 0 and 100", "tax_rate")
        return rate

    def compute_totals(
        self,
        entries: List[TimeEntry],
        hourly_rate: Decimal,
        tax_rate: Decimal
    ) -> InvoiceTotals:
        """
        subtotal = sum(duration x rate), tax = subtotal x rate / 100,
        total = subtotal + tax.
        """
        rate = to_decimal(hourly_rate, "hourly_rate")
        if rate < 0:
            raise ValidationError("Hourly rate cannot be negative", "hourly_rate")
        tax_rate = self.validate_tax_rate(tax_rate)

        total_hours = sum((entry.duration for entry in entries if entry.duration is not None), Decimal("0"))
        subtotal = sum(
            (entry.duration * rate for entry in entries if entry.duration is not None),
            Decimal("0")
        )
        tax_amount = subtotal * tax_rate / HUNDRED
        return InvoiceTotals(
            total_hours=total_hours,
            subtotal=subtotal,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            total=subtotal + tax_amount
        )

    def build_line_items(self, entries: List[TimeEntry], hourly_rate: Decimal) -> List[InvoiceItem]:
        """One immutable snapshot per billed entry."""
        if not entries:
            raise BusinessRuleViolation("No billable hours found for the selected period")
        return [InvoiceItem.from_time_entry(entry, hourly_rate) for entry in entries]
