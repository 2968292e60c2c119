"""
Unit tests for value objects and the number helpers.
"""

import pytest
from decimal import Decimal
from datetime import date, datetime, timedelta

from consultdesk.domain.models.base import ValidationError, BusinessRuleViolation
from consultdesk.domain.models.value_objects import (
    TimeRange,
    BillingPeriod,
    InvoiceNumber,
    to_decimal,
    round_money,
    timedelta_to_hours,
    format_clock,
    format_hours
)


class TestNumberHelpers:
    """Decimal conversion, rounding and formatting."""

    def test_to_decimal_avoids_binary_float(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal("85.50") == Decimal("85.50")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid numeric value for rate"):
            to_decimal("abc", "rate")

    def test_round_money_half_up(self):
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("2.665")) == Decimal("2.67")
        assert round_money(Decimal("0.005")) == Decimal("0.01")

    def test_timedelta_to_hours(self):
        assert timedelta_to_hours(timedelta(minutes=30)) == Decimal("0.5")
        assert timedelta_to_hours(timedelta(minutes=20)) == Decimal(1) / Decimal(3)
        assert timedelta_to_hours(timedelta(seconds=90)) == Decimal("0.025")
        assert timedelta_to_hours(timedelta(days=1, hours=2)) == Decimal("26")

    def test_format_clock(self):
        assert format_clock(3725) == "01:02:05"
        assert format_clock(0) == "00:00:00"
        assert format_clock(-5) == "00:00:00"

    def test_format_hours(self):
        assert format_hours(Decimal("1.5")) == "1h 30m"
        assert format_hours(Decimal("0.25")) == "0h 15m"
        assert format_hours(None) == "0h 0m"


class TestTimeRange:
    """Test cases for TimeRange."""

    def test_open_range(self):
        time_range = TimeRange(datetime(2024, 3, 15, 10, 0))
        assert time_range.is_open
        assert time_range.duration_hours is None

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="End time cannot be before start time"):
            TimeRange(datetime(2024, 3, 15, 10, 0), datetime(2024, 3, 15, 9, 59))

    def test_close_sets_duration(self):
        closed = TimeRange(datetime(2024, 3, 15, 10, 0)).close(datetime(2024, 3, 15, 11, 45))
        assert not closed.is_open
        assert closed.duration_hours == Decimal("1.75")

    def test_close_twice_rejected(self):
        closed = TimeRange(datetime(2024, 3, 15, 10, 0), datetime(2024, 3, 15, 11, 0))
        with pytest.raises(BusinessRuleViolation, match="already closed"):
            closed.close(datetime(2024, 3, 15, 12, 0))

    def test_elapsed_seconds_while_open(self):
        time_range = TimeRange(datetime(2024, 3, 15, 10, 0))
        assert time_range.elapsed_seconds(datetime(2024, 3, 15, 10, 1, 5)) == 65


class TestBillingPeriod:
    """Billing periods are inclusive on both days."""

    def setup_method(self):
        self.period = BillingPeriod(date(2024, 3, 1), date(2024, 3, 31))

    def test_contains_both_boundary_days(self):
        assert self.period.contains(datetime(2024, 3, 1, 0, 0))
        assert self.period.contains(datetime(2024, 3, 31, 23, 59, 59))
        assert self.period.contains(date(2024, 3, 15))

    def test_excludes_days_outside(self):
        assert not self.period.contains(datetime(2024, 2, 29, 23, 59))
        assert not self.period.contains(datetime(2024, 4, 1, 0, 0))

    def test_bounds(self):
        assert self.period.starts_at == datetime(2024, 3, 1, 0, 0)
        assert self.period.ends_before == datetime(2024, 4, 1, 0, 0)

    def test_single_day_period(self):
        period = BillingPeriod(date(2024, 3, 15), date(2024, 3, 15))
        assert period.contains(datetime(2024, 3, 15, 18, 0))

    def test_reversed_period_rejected(self):
        with pytest.raises(ValidationError, match="to_date cannot be before from_date"):
            BillingPeriod(date(2024, 3, 31), date(2024, 3, 1))


class TestInvoiceNumber:
    """Test cases for InvoiceNumber."""

    def test_string_form(self):
        number = InvoiceNumber(date(2024, 3, 15), 42)
        assert str(number) == "INV-20240315-042"

    def test_parse(self):
        number = InvoiceNumber.parse("INV-20240315-007")
        assert number.issued_on == date(2024, 3, 15)
        assert number.sequence == 7
        assert number.prefix == "INV"

    @pytest.mark.parametrize("value", ["INV-2024031-001", "inv-20240315-001", "INV-20241345-001", "", "INV-20240315-1000"])
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            InvoiceNumber.parse(value)

    def test_sequence_bounds(self):
        with pytest.raises(ValidationError, match="between 000 and 999"):
            InvoiceNumber(date(2024, 3, 15), 1000)

    def test_prefix_must_be_upper_case_letters(self):
        with pytest.raises(ValidationError, match="upper-case letters"):
            InvoiceNumber(date(2024, 3, 15), 1, prefix="In1")
