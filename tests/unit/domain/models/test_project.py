"""
Unit tests for the Project entity.
"""

import pytest
from decimal import Decimal
from datetime import date

from consultdesk.domain.models.base import ValidationError, BusinessRuleViolation
from consultdesk.domain.models.project import Project, ProjectStatus


def make_project(**overrides) -> Project:
    fields = dict(
        user_id="user-1",
        name="Genome Assembly Pipeline",
        client_name="Biology Department",
        hourly_rate=Decimal("100.00"),
    )
    fields.update(overrides)
    return Project(**fields)


class TestProject:
    """Test cases for Project entity."""

    def test_defaults(self):
        project = make_project()
        assert project.status == ProjectStatus.ACTIVE
        assert project.can_track_time
        assert project.id is None

    def test_rate_converted_to_decimal(self):
        project = make_project(hourly_rate="85.5")
        assert project.hourly_rate == Decimal("85.5")

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError, match="Hourly rate cannot be negative"):
            make_project(hourly_rate=Decimal("-1"))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Project name is required"):
            make_project(name="   ")

    def test_deadline_before_start_rejected(self):
        with pytest.raises(ValidationError, match="Deadline cannot be before start date"):
            make_project(start_date=date(2024, 3, 10), deadline=date(2024, 3, 1))

    def test_tags_are_cleaned(self):
        project = make_project(software_tools=[" Python ", "R", "Python", ""])
        assert project.software_tools == ["Python", "R"]

    def test_too_many_tags_rejected(self):
        with pytest.raises(ValidationError, match="Cannot have more than 20 tags"):
            make_project(software_tools=[f"tool-{i}" for i in range(21)])

    def test_status_change_records_event(self):
        project = make_project(id="p-1")
        project.change_status(ProjectStatus.ON_HOLD)

        assert project.status == ProjectStatus.ON_HOLD
        assert not project.can_track_time
        events = project.pull_events()
        assert [event.event_name for event in events] == ["project.status_changed"]
        assert events[0].new_status == "on-hold"

    def test_same_status_is_a_no_op(self):
        project = make_project()
        project.change_status(ProjectStatus.ACTIVE)
        assert project.pull_events() == []

    def test_cancelled_is_terminal(self):
        project = make_project(status=ProjectStatus.CANCELLED)
        with pytest.raises(BusinessRuleViolation, match="from cancelled to active"):
            project.change_status(ProjectStatus.ACTIVE)

    def test_completed_can_reopen(self):
        project = make_project(status=ProjectStatus.COMPLETED)
        project.change_status(ProjectStatus.ACTIVE)
        assert project.is_active

    def test_update_info_revalidates(self):
        project = make_project()
        with pytest.raises(ValidationError):
            project.update_info(hourly_rate=Decimal("-5"))

    def test_update_info_ignores_status(self):
        project = make_project()
        project.update_info(name="Renamed", status=ProjectStatus.CANCELLED)
        assert project.name == "Renamed"
        assert project.status == ProjectStatus.ACTIVE
