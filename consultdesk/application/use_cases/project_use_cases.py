"""
Project use cases for the application layer.
Handles project CRUD and status transitions.
"""

from typing import List

from consultdesk.domain.models.base import ConflictError, EntityNotFoundError
from consultdesk.domain.models.project import Project, ProjectStatus, ProjectCreatedEvent
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository
from consultdesk.domain.repositories.project_repository import ProjectRepository
from consultdesk.application.dto.project_dto import CreateProjectRequestDTO, UpdateProjectRequestDTO
from .base_use_case import BaseUseCase, CommandUseCase


def get_owned_project(repository: ProjectRepository, project_id: str, user_id: str) -> Project:
    """Load a project the user owns or raise EntityNotFoundError."""
    project = repository.get_by_id(project_id, user_id)
    if not project:
        raise EntityNotFoundError("Project", project_id)
    return project


class CreateProjectUseCase(CommandUseCase):
    """Use case for creating a new project."""

    def __init__(self, project_repository: ProjectRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.project_repository = project_repository

    def execute(self, user_id: str, request: CreateProjectRequestDTO) -> Project:
        now = self.clock()
        project = Project(
            user_id=user_id,
            name=request.name,
            client_name=request.client_name,
            description=request.description,
            hourly_rate=request.hourly_rate,
            estimated_hours=request.estimated_hours,
            status=ProjectStatus(request.status),
            start_date=request.start_date,
            deadline=request.deadline,
            software_tools=request.software_tools,
            created_at=now,
            updated_at=now
        )

        saved = self.project_repository.save(project)
        saved.add_event(ProjectCreatedEvent(saved.id, user_id, saved.name))
        self._commit(saved)
        return saved


class UpdateProjectUseCase(CommandUseCase):
    """Use case for updating project fields and status."""

    def __init__(self, project_repository: ProjectRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.project_repository = project_repository

    def execute(self, user_id: str, project_id: str, request: UpdateProjectRequestDTO) -> Project:
        project = get_owned_project(self.project_repository, project_id, user_id)
        changes = request.changes()

        new_status = changes.pop("status", None)
        if new_status is not None:
            project.change_status(ProjectStatus(new_status))
        if changes:
            project.update_info(**changes)

        saved = self.project_repository.save(project)
        self._commit(saved)
        return saved


class GetProjectUseCase(BaseUseCase):
    """Use case for getting a single project."""

    def __init__(self, project_repository: ProjectRepository, **kwargs):
        super().__init__(**kwargs)
        self.project_repository = project_repository

    def execute(self, user_id: str, project_id: str) -> Project:
        return get_owned_project(self.project_repository, project_id, user_id)


class ListProjectsUseCase(BaseUseCase):
    """Use case for listing the user's projects, newest first."""

    def __init__(self, project_repository: ProjectRepository, **kwargs):
        super().__init__(**kwargs)
        self.project_repository = project_repository

    def execute(self, user_id: str) -> List[Project]:
        return self.project_repository.list_by_user(user_id)


class DeleteProjectUseCase(CommandUseCase):
    """
    Use case for deleting a project.
    Refused while invoices reference the project; otherwise assignments
    and time entries are removed with it.
    """

    def __init__(self, project_repository: ProjectRepository, invoice_repository: InvoiceRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.project_repository = project_repository
        self.invoice_repository = invoice_repository

    def execute(self, user_id: str, project_id: str) -> None:
        get_owned_project(self.project_repository, project_id, user_id)

        invoice_count = self.invoice_repository.count_by_project(project_id)
        if invoice_count:
            raise ConflictError(
                f"Project has {invoice_count} invoice(s) and cannot be deleted; delete the invoices first"
            )

        if not self.project_repository.delete(project_id, user_id):
            raise EntityNotFoundError("Project", project_id)
        self.uow.commit()
        self.logger.info(f"Project {project_id} deleted by {user_id}")
