"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate business logic.
"""

from typing import Optional, Union
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import date, datetime, time, timedelta
from dataclasses import dataclass
from abc import ABC, abstractmethod
import re

from consultdesk.domain.models.base import ValidationError, BusinessRuleViolation


CENT = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)
MICROSECONDS_PER_SECOND = Decimal(1_000_000)

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number, field_name: str = "value") -> Decimal:
    """Convert a number to Decimal without going through binary floats."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid numeric value for {field_name}: {value!r}", field_name)


def round_money(amount: Decimal) -> Decimal:
    """Round a monetary amount to cents, half-up."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def timedelta_to_hours(delta: timedelta) -> Decimal:
    """Exact decimal hours for a timedelta."""
    micros = (
        Decimal(delta.days) * 86400 * MICROSECONDS_PER_SECOND
        + Decimal(delta.seconds) * MICROSECONDS_PER_SECOND
        + Decimal(delta.microseconds)
    )
    return micros / MICROSECONDS_PER_SECOND / SECONDS_PER_HOUR


def format_clock(total_seconds: int) -> str:
    """Format seconds as HH:MM:SS."""
    total_seconds = max(int(total_seconds), 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hours(hours: Optional[Decimal]) -> str:
    """Format decimal hours as '1h 30m'."""
    if hours is None:
        return "0h 0m"
    total_minutes = int((to_decimal(hours) * 60).to_integral_value(rounding=ROUND_HALF_UP))
    return f"{total_minutes // 60}h {total_minutes % 60}m"


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """Time range value object."""

    start: datetime
    end: Optional[datetime] = None

    def validate(self) -> None:
        """Validate time range."""
        if self.end is not None and self.end < self.start:
            raise ValidationError("End time cannot be before start time", "end_time")

    @property
    def is_open(self) -> bool:
        """Check if the time range is open (no end time)."""
        return self.end is None

    @property
    def duration_hours(self) -> Optional[Decimal]:
        """Exact duration in hours, None while open."""
        if self.end is None:
            return None
        return timedelta_to_hours(self.end - self.start)

    def elapsed_seconds(self, now: datetime) -> int:
        end = self.end or now
        return max(int((end - self.start).total_seconds()), 0)

    def close(self, end_time: datetime) -> "TimeRange":
        """Close the time range with an end time."""
        if not self.is_open:
            raise BusinessRuleViolation("Time range is already closed")
        return TimeRange(self.start, end_time)


@dataclass(frozen=True)
class BillingPeriod(ValueObject):
    """Inclusive range of calendar days an invoice covers."""

    from_date: date
    to_date: date

    def validate(self) -> None:
        if self.to_date < self.from_date:
            raise ValidationError("to_date cannot be before from_date", "to_date")

    @property
    def starts_at(self) -> datetime:
        """First instant of the period."""
        return datetime.combine(self.from_date, time.min)

    @property
    def ends_before(self) -> datetime:
        """First instant after the period (exclusive bound)."""
        return datetime.combine(self.to_date + timedelta(days=1), time.min)

    def contains(self, moment: Union[date, datetime]) -> bool:
        day = moment.date() if isinstance(moment, datetime) else moment
        return self.from_date <= day <= self.to_date

    def __str__(self) -> str:
        return f"{self.from_date.isoformat()} - {self.to_date.isoformat()}"


INVOICE_NUMBER_PATTERN = re.compile(r"^(?P<prefix>[A-Z]+)-(?P<day>\d{8})-(?P<seq>\d{3})$")


@dataclass(frozen=True)
class InvoiceNumber(ValueObject):
    """Invoice number of the form PREFIX-YYYYMMDD-NNN."""

    issued_on: date
    sequence: int
    prefix: str = "INV"

    def validate(self) -> None:
        if not 0 <= self.sequence <= 999:
            raise ValidationError("Invoice sequence must be between 000 and 999", "invoice_number")
        if not self.prefix or not self.prefix.isalpha() or not self.prefix.isupper():
            raise ValidationError("Invoice prefix must be upper-case letters", "invoice_number")

    @classmethod
    def parse(cls, value: str) -> "InvoiceNumber":
        match = INVOICE_NUMBER_PATTERN.match(value or "")
        if not match:
            raise ValidationError(f"Invalid invoice number: {value}", "invoice_number")
        try:
            issued_on = datetime.strptime(match.group("day"), "%Y%m%d").date()
        except ValueError:
            raise ValidationError(f"Invalid invoice number date: {value}", "invoice_number")
        return cls(issued_on, int(match.group("seq")), match.group("prefix"))

    def __str__(self) -> str:
        return f"{self.prefix}-{self.issued_on.strftime('%Y%m%d')}-{self.sequence:03d}"
