"""Timer service for managing time tracking logic.
Handles timer operations, validations, and business rules.
"""

from typing import Callable, List, Optional
from datetime import datetime

from consultdesk.domain.models.base import BusinessRuleViolation, ConflictError, ValidationError, utc_now
from consultdesk.domain.models.project import Project
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.models.value_objects import format_clock


Clock = Callable[[], datetime]


class TimerService:
    """
    Domain service for the start/stop timer lifecycle.
    A user has at most one running entry at a time.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utc_now

    def start_timer(
        self,
        user_id: str,
        project: Project,
        description: str,
        running_entry: Optional[TimeEntry] = None,
        problems_encountered: Optional[str] = None,
        software_used: Optional[List[str]] = None
    ) -> TimeEntry:
        """
        Start a new timer for time tracking.
        """
        if not user_id:
            raise ValidationError("User ID is required", "user_id")

        if running_entry is not None:
            raise ConflictError(
                f"A timer is already running for project {running_entry.project_id}; stop it first"
            )

        if not project.can_track_time:
            raise BusinessRuleViolation(
                f"Cannot track time on a project with status {project.status.value}"
            )

        return TimeEntry.start(
            user_id=user_id,
            project_id=project.id,
            description=description,
            now=self.clock(),
            problems_encountered=problems_encountered,
            software_used=software_used
        )

    def stop_timer(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Stop a running timer at the current clock time.
        """
        time_entry.stop(self.clock())
        return time_entry

    def elapsed_seconds(self, time_entry: TimeEntry) -> int:
        return time_entry.elapsed_seconds(self.clock())

    def elapsed_display(self, time_entry: TimeEntry) -> str:
        """Elapsed time formatted as HH:MM:SS."""
        return format_clock(self.elapsed_seconds(time_entry))
