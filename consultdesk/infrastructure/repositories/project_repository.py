"""
Project repository implementation using SQLAlchemy.
"""

import logging
from typing import Optional, List

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from consultdesk.domain.models.base import ConflictError, EntityNotFoundError
from consultdesk.domain.models.project import Project
from consultdesk.domain.repositories.project_repository import ProjectRepository as ProjectRepositoryInterface
from consultdesk.infrastructure.db.models import ProjectModel
from consultdesk.infrastructure.mappers.project_mapper import ProjectMapper


logger = logging.getLogger(__name__)


class SQLAlchemyProjectRepository(ProjectRepositoryInterface):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()
        self.model = ProjectModel

    def _get_model(self, project_id: str, user_id: str) -> Optional[ProjectModel]:
        return self.session.query(ProjectModel).filter_by(
            id=project_id,
            user_id=user_id
        ).first()

    def save(self, project: Project) -> Project:
        """Save a project entity."""
        if project.is_new:
            model = self.mapper.domain_to_model(project)
            self.session.add(model)
        else:
            model = self._get_model(project.id, project.user_id)
            if not model:
                raise EntityNotFoundError("Project", project.id)
            self.mapper.update_model(model, project)

        self.session.flush()
        project.id = model.id
        return project

    def get_by_id(self, project_id: str, user_id: str) -> Optional[Project]:
        """Get project by ID for its owner."""
        model = self._get_model(project_id, user_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_user(self, user_id: str) -> List[Project]:
        """Get all projects of a user, newest first."""
        models = self.session.query(ProjectModel).filter_by(
            user_id=user_id
        ).order_by(desc(ProjectModel.created_at), desc(ProjectModel.id)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, project_id: str, user_id: str) -> bool:
        """Delete a project. Assignments and time entries cascade in the store."""
        model = self._get_model(project_id, user_id)
        if not model:
            return False

        try:
            with self.session.begin_nested():
                self.session.delete(model)
        except IntegrityError as e:
            logger.info(f"Refused to delete project {project_id}: {e.orig}")
            raise ConflictError("Project has invoices and cannot be deleted") from e
        return True
