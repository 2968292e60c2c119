"""Time Entry repository interface.
Defines the contract for time entry data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.models.value_objects import BillingPeriod


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry entity.
    Defines all operations needed for time entry data persistence.
    """

    @abstractmethod
    def add(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Insert a new entry.
        Raises ConflictError when it would be a second running entry for the user.
        """
        pass

    @abstractmethod
    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """Update descriptive fields of an existing entry."""
        pass

    @abstractmethod
    def mark_stopped(self, time_entry: TimeEntry) -> bool:
        """
        Persist the stop of a running entry.
        Only succeeds while the stored entry is still running; returns False otherwise.
        """
        pass

    @abstractmethod
    def get_by_id(self, entry_id: str, user_id: str) -> Optional[TimeEntry]:
        pass

    @abstractmethod
    def get_running_entry(self, user_id: str) -> Optional[TimeEntry]:
        """Return the user's running entry with its project, if any."""
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[TimeEntry]:
        """All entries of the user with their projects, newest first."""
        pass

    @abstractmethod
    def list_by_project(self, project_id: str, user_id: str) -> List[TimeEntry]:
        """Entries of one project, most recent start first."""
        pass

    @abstractmethod
    def find_billable(self, project_id: str, user_id: str, period: BillingPeriod) -> List[TimeEntry]:
        """
        Stopped entries of the project whose start date falls inside the period,
        excluding entries already billed on a non-cancelled invoice.
        Ordered by start time.
        """
        pass

    @abstractmethod
    def is_invoiced(self, entry_id: str) -> bool:
        """True if any invoice item references the entry."""
        pass

    @abstractmethod
    def delete(self, entry_id: str, user_id: str) -> bool:
        pass
