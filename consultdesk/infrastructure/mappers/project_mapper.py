"""
Project mapper for converting between domain entities and database models.
"""

from consultdesk.domain.models.project import Project, ProjectStatus
from consultdesk.infrastructure.db.models import ProjectModel, generate_id


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        """Convert Project domain entity to a new ProjectModel."""
        model = ProjectModel(
            id=project.id or generate_id(),
            user_id=project.user_id,
            created_at=project.created_at
        )
        self.update_model(model, project)
        return model

    def update_model(self, model: ProjectModel, project: Project) -> None:
        """Copy mutable fields onto an existing model."""
        model.name = project.name
        model.description = project.description
        model.client_name = project.client_name
        model.hourly_rate = project.hourly_rate
        model.estimated_hours = project.estimated_hours
        model.status = project.status
        model.start_date = project.start_date
        model.deadline = project.deadline
        model.software_tools = list(project.software_tools)
        model.updated_at = project.updated_at

    def model_to_domain(self, model: ProjectModel) -> Project:
        """Convert ProjectModel to Project domain entity."""
        return Project(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            description=model.description,
            client_name=model.client_name,
            hourly_rate=model.hourly_rate,
            estimated_hours=model.estimated_hours,
            status=ProjectStatus(model.status),
            start_date=model.start_date,
            deadline=model.deadline,
            software_tools=list(model.software_tools or []),
            created_at=model.created_at,
            updated_at=model.updated_at
        )
