"""
Project management router.
Handles project CRUD plus the project's students and time entries.
"""

from typing import List

from fastapi import APIRouter, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import (
    Clock,
    Dispatcher,
    UnitOfWorkDep,
    ProjectRepo,
    StudentRepo,
    AssignmentRepo,
    TimeEntryRepo,
    InvoiceRepo
)
from consultdesk.application.use_cases.project_use_cases import (
    CreateProjectUseCase,
    UpdateProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    DeleteProjectUseCase
)
from consultdesk.application.use_cases.student_use_cases import (
    AssignStudentUseCase,
    ListProjectStudentsUseCase,
    RemoveStudentFromProjectUseCase
)
from consultdesk.application.use_cases.time_entry_use_cases import ListProjectTimeEntriesUseCase
from consultdesk.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    ProjectResponseDTO
)
from consultdesk.application.dto.student_dto import AssignStudentRequestDTO, ProjectStudentResponseDTO
from consultdesk.application.dto.time_entry_dto import TimeEntryResponseDTO


router = APIRouter()


@router.get("", response_model=List[ProjectResponseDTO])
def list_projects(user_id: CurrentUserId, repository: ProjectRepo):
    """List the user's projects, newest first."""
    projects = ListProjectsUseCase(repository).execute(user_id)
    return [ProjectResponseDTO.from_domain(project) for project in projects]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponseDTO)
def create_project(
    request: CreateProjectRequestDTO,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    uow: UnitOfWorkDep,
    clock: Clock,
    dispatcher: Dispatcher
):
    """
    Create a new project.

    - **name**: Project name (required)
    - **client_name**: Client billed for the project (required)
    - **hourly_rate**: Rate applied to tracked hours (required, >= 0)
    - **status**: active, on-hold, completed or cancelled
    - **software_tools**: List of tool tags
    """
    use_case = CreateProjectUseCase(repository, uow, clock=clock, dispatcher=dispatcher)
    return ProjectResponseDTO.from_domain(use_case.execute(user_id, request))


@router.get("/{project_id}", response_model=ProjectResponseDTO)
def get_project(project_id: str, user_id: CurrentUserId, repository: ProjectRepo):
    project = GetProjectUseCase(repository).execute(user_id, project_id)
    return ProjectResponseDTO.from_domain(project)


@router.put("/{project_id}", response_model=ProjectResponseDTO)
def update_project(
    project_id: str,
    request: UpdateProjectRequestDTO,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    uow: UnitOfWorkDep,
    clock: Clock,
    dispatcher: Dispatcher
):
    """Update project fields. Status changes follow the project status table."""
    use_case = UpdateProjectUseCase(repository, uow, clock=clock, dispatcher=dispatcher)
    return ProjectResponseDTO.from_domain(use_case.execute(user_id, project_id, request))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    invoice_repository: InvoiceRepo,
    uow: UnitOfWorkDep
):
    """Delete a project with its time entries and assignments. Refused while it has invoices."""
    DeleteProjectUseCase(repository, invoice_repository, uow).execute(user_id, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Students assigned to a project

@router.get("/{project_id}/students", response_model=List[ProjectStudentResponseDTO])
def list_project_students(
    project_id: str,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    assignment_repository: AssignmentRepo
):
    assignments = ListProjectStudentsUseCase(repository, assignment_repository).execute(user_id, project_id)
    return [ProjectStudentResponseDTO.from_domain(assignment) for assignment in assignments]


@router.post(
    "/{project_id}/students",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectStudentResponseDTO
)
def assign_student(
    project_id: str,
    request: AssignStudentRequestDTO,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    student_repository: StudentRepo,
    assignment_repository: AssignmentRepo,
    uow: UnitOfWorkDep,
    clock: Clock
):
    """Assign one of the user's students to the project. A pair can only be assigned once."""
    use_case = AssignStudentUseCase(repository, student_repository, assignment_repository, uow, clock=clock)
    return ProjectStudentResponseDTO.from_domain(use_case.execute(user_id, project_id, request))


@router.delete("/{project_id}/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_student(
    project_id: str,
    student_id: str,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    assignment_repository: AssignmentRepo,
    uow: UnitOfWorkDep
):
    RemoveStudentFromProjectUseCase(repository, assignment_repository, uow).execute(
        user_id, project_id, student_id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Time entries of a project

@router.get("/{project_id}/time-entries", response_model=List[TimeEntryResponseDTO])
def list_project_time_entries(
    project_id: str,
    user_id: CurrentUserId,
    repository: ProjectRepo,
    time_entry_repository: TimeEntryRepo
):
    entries = ListProjectTimeEntriesUseCase(time_entry_repository, repository).execute(user_id, project_id)
    return [TimeEntryResponseDTO.from_domain(entry) for entry in entries]
