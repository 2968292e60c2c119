"""
Time tracking router.
Starting a timer creates a running entry; stopping it fixes the duration.
"""

from typing import List, Optional

from fastapi import APIRouter, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import (
    Clock,
    Dispatcher,
    UnitOfWorkDep,
    ProjectRepo,
    TimeEntryRepo
)
from consultdesk.application.use_cases.time_entry_use_cases import (
    StartTimerUseCase,
    StopTimerUseCase,
    GetActiveTimerUseCase,
    ListTimeEntriesUseCase,
    UpdateTimeEntryUseCase,
    DeleteTimeEntryUseCase
)
from consultdesk.application.dto.time_entry_dto import (
    StartTimerRequestDTO,
    UpdateTimeEntryRequestDTO,
    TimeEntryResponseDTO,
    ActiveTimeEntryResponseDTO
)


router = APIRouter()


@router.get("", response_model=List[TimeEntryResponseDTO])
def list_time_entries(user_id: CurrentUserId, repository: TimeEntryRepo):
    """All of the user's time entries with their projects, newest first."""
    entries = ListTimeEntriesUseCase(repository).execute(user_id)
    return [TimeEntryResponseDTO.from_domain(entry) for entry in entries]


@router.get("/active", response_model=Optional[ActiveTimeEntryResponseDTO])
def get_active_time_entry(user_id: CurrentUserId, repository: TimeEntryRepo, clock: Clock):
    """The running entry with elapsed time, or null when no timer runs."""
    return GetActiveTimerUseCase(repository, clock=clock).execute(user_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeEntryResponseDTO)
def start_timer(
    request: StartTimerRequestDTO,
    user_id: CurrentUserId,
    repository: TimeEntryRepo,
    project_repository: ProjectRepo,
    uow: UnitOfWorkDep,
    clock: Clock,
    dispatcher: Dispatcher
):
    """
    Start a timer on an active project.
    Fails with 409 while another timer is running.
    """
    use_case = StartTimerUseCase(repository, project_repository, uow, clock=clock, dispatcher=dispatcher)
    return TimeEntryResponseDTO.from_domain(use_case.execute(user_id, request))


@router.post("/{entry_id}/stop", response_model=TimeEntryResponseDTO)
def stop_timer(
    entry_id: str,
    user_id: CurrentUserId,
    repository: TimeEntryRepo,
    uow: UnitOfWorkDep,
    clock: Clock,
    dispatcher: Dispatcher
):
    """Stop a running timer. Stopping twice is a conflict."""
    use_case = StopTimerUseCase(repository, uow, clock=clock, dispatcher=dispatcher)
    return TimeEntryResponseDTO.from_domain(use_case.execute(user_id, entry_id))


@router.put("/{entry_id}", response_model=TimeEntryResponseDTO)
def update_time_entry(
    entry_id: str,
    request: UpdateTimeEntryRequestDTO,
    user_id: CurrentUserId,
    repository: TimeEntryRepo,
    uow: UnitOfWorkDep,
    clock: Clock
):
    """Edit description, software used or problems encountered."""
    entry = UpdateTimeEntryUseCase(repository, uow, clock=clock).execute(user_id, entry_id, request)
    return TimeEntryResponseDTO.from_domain(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_time_entry(entry_id: str, user_id: CurrentUserId, repository: TimeEntryRepo, uow: UnitOfWorkDep):
    DeleteTimeEntryUseCase(repository, uow).execute(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
