"""Project repository interface.
Defines the contract for project data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.project import Project


class ProjectRepository(ABC):
    """
    Repository interface for Project entity.
    Every lookup is scoped to the owning user.
    """

    @abstractmethod
    def save(self, project: Project) -> Project:
        """Insert or update a project and return it with its id."""
        pass

    @abstractmethod
    def get_by_id(self, project_id: str, user_id: str) -> Optional[Project]:
        """Return the project if it exists and belongs to the user."""
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Project]:
        """Return the user's projects, newest first."""
        pass

    @abstractmethod
    def delete(self, project_id: str, user_id: str) -> bool:
        """
        Delete a project together with its assignments and time entries.
        Returns False when there was nothing to delete.
        """
        pass
