"""
Unit tests for the timer and time entry use cases.
"""

import pytest
from decimal import Decimal
from datetime import datetime, timedelta
from unittest.mock import Mock

from consultdesk.application.dto.time_entry_dto import StartTimerRequestDTO
from consultdesk.application.use_cases.time_entry_use_cases import (
    StartTimerUseCase,
    StopTimerUseCase,
    GetActiveTimerUseCase,
    DeleteTimeEntryUseCase
)
from consultdesk.domain.events.base import EventDispatcher
from consultdesk.domain.models.base import ConflictError, EntityNotFoundError
from consultdesk.domain.models.project import Project
from consultdesk.domain.models.time_entry import TimeEntry


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def with_id(entry: TimeEntry) -> TimeEntry:
    entry.id = "te-1"
    return entry


class TestStartTimerUseCase:

    def setup_method(self):
        self.clock = Clock(datetime(2024, 3, 15, 10, 0))
        self.project = Project(
            id="p-1",
            user_id="user-1",
            name="Genome Assembly Pipeline",
            client_name="Biology Department",
            hourly_rate=Decimal("100")
        )
        self.project_repository = Mock()
        self.project_repository.get_by_id.return_value = self.project
        self.time_entry_repository = Mock()
        self.time_entry_repository.get_running_entry.return_value = None
        self.time_entry_repository.add.side_effect = with_id
        self.uow = Mock()
        self.dispatcher = EventDispatcher()
        self.use_case = StartTimerUseCase(
            self.time_entry_repository,
            self.project_repository,
            self.uow,
            clock=self.clock,
            dispatcher=self.dispatcher
        )

    def test_start(self):
        entry = self.use_case.execute(
            "user-1", StartTimerRequestDTO(project_id="p-1", description="Read QC")
        )

        assert entry.id == "te-1"
        assert entry.is_running
        assert entry.start_time == self.clock.now
        assert entry.project is self.project
        self.uow.commit.assert_called_once()

        event = self.dispatcher.get_event_log()[0]
        assert event["event_name"] == "time_entry.started"
        assert event["data"]["entry_id"] == "te-1"

    def test_second_timer_is_conflict(self):
        self.time_entry_repository.get_running_entry.return_value = TimeEntry.start(
            "user-1", "p-1", "Already going", self.clock.now
        )

        with pytest.raises(ConflictError):
            self.use_case.execute("user-1", StartTimerRequestDTO(project_id="p-1", description="Read QC"))

        self.time_entry_repository.add.assert_not_called()
        self.uow.commit.assert_not_called()

    def test_project_of_another_user(self):
        self.project_repository.get_by_id.return_value = None
        with pytest.raises(EntityNotFoundError):
            self.use_case.execute("user-2", StartTimerRequestDTO(project_id="p-1", description="Read QC"))


class TestStopTimerUseCase:

    def setup_method(self):
        self.clock = Clock(datetime(2024, 3, 15, 10, 0))
        self.entry = with_id(TimeEntry.start("user-1", "p-1", "Read QC", self.clock.now))
        self.repository = Mock()
        self.repository.get_by_id.return_value = self.entry
        self.repository.mark_stopped.return_value = True
        self.uow = Mock()
        self.use_case = StopTimerUseCase(self.repository, self.uow, clock=self.clock)

    def test_stop_after_thirty_minutes(self):
        self.clock.now += timedelta(minutes=30)

        entry = self.use_case.execute("user-1", "te-1")

        assert entry.duration == Decimal("0.5")
        assert entry.end_time == datetime(2024, 3, 15, 10, 30)
        self.repository.mark_stopped.assert_called_once_with(self.entry)
        self.uow.commit.assert_called_once()

    def test_lost_race_is_conflict(self):
        self.repository.mark_stopped.return_value = False

        with pytest.raises(ConflictError, match="already stopped"):
            self.use_case.execute("user-1", "te-1")
        self.uow.commit.assert_not_called()

    def test_already_stopped(self):
        self.entry.stop(self.clock.now)
        with pytest.raises(ConflictError):
            self.use_case.execute("user-1", "te-1")
        self.repository.mark_stopped.assert_not_called()


class TestGetActiveTimerUseCase:

    def test_no_running_timer(self):
        repository = Mock()
        repository.get_running_entry.return_value = None
        assert GetActiveTimerUseCase(repository).execute("user-1") is None

    def test_elapsed_from_server_clock(self):
        start = datetime(2024, 3, 15, 10, 0)
        repository = Mock()
        repository.get_running_entry.return_value = with_id(TimeEntry.start("user-1", "p-1", "Read QC", start))

        active = GetActiveTimerUseCase(
            repository, clock=lambda: start + timedelta(hours=2, seconds=7)
        ).execute("user-1")

        assert active.elapsed_seconds == 7207
        assert active.elapsed_display == "02:00:07"


class TestDeleteTimeEntryUseCase:

    def test_invoiced_entry_is_kept(self):
        repository = Mock()
        repository.get_by_id.return_value = with_id(
            TimeEntry.start("user-1", "p-1", "Read QC", datetime(2024, 3, 15, 10, 0))
        )
        repository.is_invoiced.return_value = True
        uow = Mock()

        with pytest.raises(ConflictError, match="billed on an invoice"):
            DeleteTimeEntryUseCase(repository, uow).execute("user-1", "te-1")

        repository.delete.assert_not_called()
        uow.commit.assert_not_called()
