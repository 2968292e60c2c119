"""Student and assignment repository interfaces."""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.student import Student, ProjectStudent


class StudentRepository(ABC):
    """Repository interface for Student entity."""

    @abstractmethod
    def save(self, student: Student) -> Student:
        """
        Insert or update a student.
        Raises DuplicateEntityError when the email is already taken.
        """
        pass

    @abstractmethod
    def get_by_id(self, student_id: str, user_id: str) -> Optional[Student]:
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Student]:
        """Return the user's students ordered by name."""
        pass

    @abstractmethod
    def delete(self, student_id: str, user_id: str) -> bool:
        """Delete a student and its project assignments."""
        pass


class ProjectStudentRepository(ABC):
    """Repository interface for project/student assignments."""

    @abstractmethod
    def add(self, assignment: ProjectStudent) -> ProjectStudent:
        """
        Persist a new assignment.
        Raises DuplicateEntityError when the pair already exists.
        """
        pass

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ProjectStudent]:
        """Return assignments of a project with their students loaded."""
        pass

    @abstractmethod
    def remove(self, project_id: str, student_id: str) -> bool:
        pass
