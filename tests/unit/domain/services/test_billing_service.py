"""
Unit tests for BillingService domain service.
"""

import pytest
from decimal import Decimal
from datetime import date, datetime, timedelta

from consultdesk.domain.models.base import ValidationError, BusinessRuleViolation
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.models.value_objects import BillingPeriod
from consultdesk.domain.services.billing_service import BillingService


def stopped_entry(entry_id: str, start: datetime, hours: str, project_id: str = "p-1") -> TimeEntry:
    entry = TimeEntry.start("user-1", project_id, f"Work {entry_id}", start)
    entry.id = entry_id
    entry.stop(start + timedelta(hours=float(hours)))
    return entry


class TestBillingService:
    """Test cases for BillingService domain service."""

    def setup_method(self):
        """Set up test fixtures."""
        self.billing_service = BillingService()
        self.period = BillingPeriod(date(2024, 3, 1), date(2024, 3, 31))

    def test_compute_totals(self):
        """Two entries at 100/h with 8.5% tax."""
        entries = [
            stopped_entry("a", datetime(2024, 3, 4, 9, 0), "2.0"),
            stopped_entry("b", datetime(2024, 3, 5, 9, 0), "1.5"),
        ]

        totals = self.billing_service.compute_totals(entries, Decimal("100"), Decimal("8.5")).rounded()

        assert totals.total_hours == Decimal("3.5")
        assert totals.subtotal == Decimal("350.00")
        assert totals.tax_amount == Decimal("29.75")
        assert totals.total == Decimal("379.75")

    def test_totals_rounded_only_at_the_end(self):
        """Line amounts round per row while the subtotal rounds the exact sum."""
        entries = [
            stopped_entry(str(i), datetime(2024, 3, 4 + i, 9, 0), "0") for i in range(3)
        ]
        for entry in entries:
            entry.duration = Decimal("0.333333")

        totals = self.billing_service.compute_totals(entries, Decimal("100"), Decimal("0"))
        items = self.billing_service.build_line_items(entries, Decimal("100"))

        assert totals.rounded().subtotal == Decimal("100.00")
        assert [item.amount for item in items] == [Decimal("33.33")] * 3
        assert sum(item.amount for item in items) == Decimal("99.99")

    def test_zero_tax(self):
        entries = [stopped_entry("a", datetime(2024, 3, 4, 9, 0), "0.5")]
        totals = self.billing_service.compute_totals(entries, Decimal("75"), Decimal("0")).rounded()
        assert totals.tax_amount == Decimal("0.00")
        assert totals.total == Decimal("37.50")

    @pytest.mark.parametrize("tax_rate", ["-1", "100.01"])
    def test_tax_rate_out_of_range(self, tax_rate):
        with pytest.raises(ValidationError, match="Tax rate must be between 0 and 100"):
            self.billing_service.compute_totals([], Decimal("100"), Decimal(tax_rate))

    def test_select_billable_entries_inclusive_bounds(self):
        """Entries on the first and last day are in; the day after is out."""
        first_day = stopped_entry("first", datetime(2024, 3, 1, 0, 0), "1")
        last_day = stopped_entry("last", datetime(2024, 3, 31, 23, 0), "0.5")
        day_after = stopped_entry("after", datetime(2024, 4, 1, 0, 0), "1")
        day_before = stopped_entry("before", datetime(2024, 2, 29, 23, 0), "1")

        selected = self.billing_service.select_billable_entries(
            [last_day, day_after, first_day, day_before], self.period
        )

        assert [entry.id for entry in selected] == ["first", "last"]

    def test_select_skips_running_and_other_projects(self):
        running = TimeEntry.start("user-1", "p-1", "Still going", datetime(2024, 3, 10, 9, 0))
        other = stopped_entry("other", datetime(2024, 3, 10, 9, 0), "1", project_id="p-2")
        mine = stopped_entry("mine", datetime(2024, 3, 11, 9, 0), "1")

        selected = self.billing_service.select_billable_entries([running, other, mine], self.period, "p-1")

        assert [entry.id for entry in selected] == ["mine"]

    def test_restrict_selection(self):
        entries = [
            stopped_entry("a", datetime(2024, 3, 4, 9, 0), "1"),
            stopped_entry("b", datetime(2024, 3, 5, 9, 0), "1"),
        ]
        assert self.billing_service.restrict_selection(entries, None) == entries
        assert [e.id for e in self.billing_service.restrict_selection(entries, ["b", "b"])] == ["b"]

    def test_restrict_selection_unknown_id(self):
        entries = [stopped_entry("a", datetime(2024, 3, 4, 9, 0), "1")]
        with pytest.raises(ValidationError, match="not billable in this period: zzz"):
            self.billing_service.restrict_selection(entries, ["a", "zzz"])

    def test_build_line_items(self):
        entries = [stopped_entry("a", datetime(2024, 3, 4, 9, 0), "1.25")]

        items = self.billing_service.build_line_items(entries, Decimal("80"))

        assert len(items) == 1
        assert items[0].time_entry_id == "a"
        assert items[0].hours == Decimal("1.25")
        assert items[0].amount == Decimal("100.00")

    def test_empty_selection_rejected(self):
        with pytest.raises(BusinessRuleViolation, match="No billable hours found"):
            self.billing_service.build_line_items([], Decimal("100"))
