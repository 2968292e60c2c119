"""
Unit tests for the TimeEntry entity.
"""

import pytest
from decimal import Decimal
from datetime import date, datetime

from consultdesk.domain.models.base import ValidationError, ConflictError
from consultdesk.domain.models.time_entry import TimeEntry


START = datetime(2024, 3, 15, 10, 0)


def start_entry(**overrides) -> TimeEntry:
    fields = dict(user_id="user-1", project_id="p-1", description="Sequence alignment", now=START)
    fields.update(overrides)
    return TimeEntry.start(**fields)


class TestTimeEntry:
    """Test cases for TimeEntry entity."""

    def test_start_creates_running_entry(self):
        entry = start_entry(description="  Sequence alignment  ")

        assert entry.is_running
        assert entry.end_time is None
        assert entry.duration is None
        assert entry.description == "Sequence alignment"
        assert entry.created_at == START
        assert not entry.is_billable

    def test_start_records_no_event_until_marked(self):
        entry = start_entry()
        assert entry.pull_events() == []

        entry.id = "te-1"
        entry.mark_started()
        events = entry.pull_events()
        assert events[0].event_name == "time_entry.started"
        assert events[0].entry_id == "te-1"

    def test_stop_sets_exact_duration(self):
        entry = start_entry()
        entry.stop(datetime(2024, 3, 15, 10, 30))

        assert not entry.is_running
        assert entry.end_time == datetime(2024, 3, 15, 10, 30)
        assert entry.duration == Decimal("0.5")
        assert entry.is_billable
        assert entry.pull_events()[-1].event_name == "time_entry.stopped"

    def test_zero_length_entry(self):
        entry = start_entry()
        entry.stop(START)
        assert entry.duration == Decimal("0")

    def test_second_stop_is_conflict(self):
        entry = start_entry()
        entry.stop(datetime(2024, 3, 15, 11, 0))
        with pytest.raises(ConflictError, match="already stopped"):
            entry.stop(datetime(2024, 3, 15, 12, 0))
        assert entry.end_time == datetime(2024, 3, 15, 11, 0)

    def test_stop_before_start_rejected(self):
        entry = start_entry()
        with pytest.raises(ValidationError, match="End time cannot be before start time"):
            entry.stop(datetime(2024, 3, 15, 9, 0))

    def test_running_entry_cannot_have_end_time(self):
        with pytest.raises(ValidationError, match="running entry cannot have an end time"):
            TimeEntry(
                user_id="user-1",
                project_id="p-1",
                description="Broken",
                start_time=START,
                end_time=datetime(2024, 3, 15, 11, 0),
                is_running=True
            )

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError, match="Description is required"):
            start_entry(description="   ")

    def test_elapsed_seconds(self):
        entry = start_entry()
        assert entry.elapsed_seconds(datetime(2024, 3, 15, 10, 2, 5)) == 125

    def test_update_details_leaves_timing_alone(self):
        entry = start_entry()
        entry.stop(datetime(2024, 3, 15, 11, 0))
        entry.update_details(description="Variant calling", software_used=["GATK"], duration=Decimal("9"))

        assert entry.description == "Variant calling"
        assert entry.software_used == ["GATK"]
        assert entry.duration == Decimal("1")

    def test_entry_date(self):
        assert start_entry().entry_date == date(2024, 3, 15)
