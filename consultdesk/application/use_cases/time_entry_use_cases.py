"""
Time Entry use cases for the application layer.
Handles the start/stop timer lifecycle and time entry management.
"""

from typing import List, Optional

from consultdesk.domain.models.base import ConflictError, EntityNotFoundError
from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.domain.repositories.project_repository import ProjectRepository
from consultdesk.domain.repositories.time_entry_repository import TimeEntryRepository
from consultdesk.domain.services.timer_service import TimerService
from consultdesk.application.dto.time_entry_dto import (
    StartTimerRequestDTO,
    UpdateTimeEntryRequestDTO,
    ActiveTimeEntryResponseDTO
)
from .base_use_case import BaseUseCase, CommandUseCase
from .project_use_cases import get_owned_project


def get_owned_entry(repository: TimeEntryRepository, entry_id: str, user_id: str) -> TimeEntry:
    entry = repository.get_by_id(entry_id, user_id)
    if not entry:
        raise EntityNotFoundError("TimeEntry", entry_id)
    return entry


class StartTimerUseCase(CommandUseCase):
    """Use case for starting a timer on a project."""

    def __init__(self, time_entry_repository: TimeEntryRepository, project_repository: ProjectRepository,
                 uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.time_entry_repository = time_entry_repository
        self.project_repository = project_repository
        self.timer_service = TimerService(self.clock)

    def execute(self, user_id: str, request: StartTimerRequestDTO) -> TimeEntry:
        project = get_owned_project(self.project_repository, request.project_id, user_id)
        running = self.time_entry_repository.get_running_entry(user_id)

        entry = self.timer_service.start_timer(
            user_id=user_id,
            project=project,
            description=request.description,
            running_entry=running,
            problems_encountered=request.problems_encountered,
            software_used=request.software_used
        )

        saved = self.time_entry_repository.add(entry)
        saved.project = project
        saved.mark_started()
        self._commit(saved)
        self.logger.info(f"Timer started for user {user_id} on project {project.id}")
        return saved


class StopTimerUseCase(CommandUseCase):
    """Use case for stopping a running timer."""

    def __init__(self, time_entry_repository: TimeEntryRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.time_entry_repository = time_entry_repository
        self.timer_service = TimerService(self.clock)

    def execute(self, user_id: str, entry_id: str) -> TimeEntry:
        entry = get_owned_entry(self.time_entry_repository, entry_id, user_id)
        self.timer_service.stop_timer(entry)

        # Lost a race with a concurrent stop
        if not self.time_entry_repository.mark_stopped(entry):
            raise ConflictError("Time entry is already stopped")

        self._commit(entry)
        self.logger.info(f"Timer {entry_id} stopped after {entry.duration} hours")
        return entry


class GetActiveTimerUseCase(BaseUseCase):
    """Use case for the user's running entry, if any."""

    def __init__(self, time_entry_repository: TimeEntryRepository, **kwargs):
        super().__init__(**kwargs)
        self.time_entry_repository = time_entry_repository
        self.timer_service = TimerService(self.clock)

    def execute(self, user_id: str) -> Optional[ActiveTimeEntryResponseDTO]:
        entry = self.time_entry_repository.get_running_entry(user_id)
        if entry is None:
            return None
        return ActiveTimeEntryResponseDTO.from_running(
            entry,
            elapsed_seconds=self.timer_service.elapsed_seconds(entry),
            elapsed_display=self.timer_service.elapsed_display(entry)
        )


class ListTimeEntriesUseCase(BaseUseCase):
    """All of the user's entries with their projects."""

    def __init__(self, time_entry_repository: TimeEntryRepository, **kwargs):
        super().__init__(**kwargs)
        self.time_entry_repository = time_entry_repository

    def execute(self, user_id: str) -> List[TimeEntry]:
        return self.time_entry_repository.list_by_user(user_id)


class ListProjectTimeEntriesUseCase(BaseUseCase):
    """Entries of one owned project, most recent first."""

    def __init__(self, time_entry_repository: TimeEntryRepository, project_repository: ProjectRepository, **kwargs):
        super().__init__(**kwargs)
        self.time_entry_repository = time_entry_repository
        self.project_repository = project_repository

    def execute(self, user_id: str, project_id: str) -> List[TimeEntry]:
        get_owned_project(self.project_repository, project_id, user_id)
        return self.time_entry_repository.list_by_project(project_id, user_id)


class UpdateTimeEntryUseCase(CommandUseCase):
    """Edit description, software tags and problems note."""

    def __init__(self, time_entry_repository: TimeEntryRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.time_entry_repository = time_entry_repository

    def execute(self, user_id: str, entry_id: str, request: UpdateTimeEntryRequestDTO) -> TimeEntry:
        entry = get_owned_entry(self.time_entry_repository, entry_id, user_id)
        entry.update_details(**request.changes())
        saved = self.time_entry_repository.save(entry)
        self._commit(saved)
        return saved


class DeleteTimeEntryUseCase(CommandUseCase):
    """Delete an entry, running or stopped, unless an invoice bills it."""

    def __init__(self, time_entry_repository: TimeEntryRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.time_entry_repository = time_entry_repository

    def execute(self, user_id: str, entry_id: str) -> None:
        get_owned_entry(self.time_entry_repository, entry_id, user_id)
        if self.time_entry_repository.is_invoiced(entry_id):
            raise ConflictError("Time entry is billed on an invoice and cannot be deleted")

        self.time_entry_repository.delete(entry_id, user_id)
        self.uow.commit()
