"""
Student and assignment repositories using SQLAlchemy.
"""

from typing import Optional, List

from sqlalchemy import asc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from consultdesk.domain.models.base import ConflictError, DuplicateEntityError, EntityNotFoundError
from consultdesk.domain.models.student import Student, ProjectStudent
from consultdesk.domain.repositories.student_repository import (
    StudentRepository as StudentRepositoryInterface,
    ProjectStudentRepository as ProjectStudentRepositoryInterface
)
from consultdesk.infrastructure.db.models import StudentModel, ProjectStudentModel
from consultdesk.infrastructure.mappers.student_mapper import StudentMapper, ProjectStudentMapper


class SQLAlchemyStudentRepository(StudentRepositoryInterface):
    """SQLAlchemy implementation of student repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = StudentMapper()
        self.model = StudentModel

    def _get_model(self, student_id: str, user_id: str) -> Optional[StudentModel]:
        return self.session.query(StudentModel).filter_by(
            id=student_id,
            user_id=user_id
        ).first()

    def save(self, student: Student) -> Student:
        """Save a student; email must be unique."""
        try:
            with self.session.begin_nested():
                if student.is_new:
                    model = self.mapper.domain_to_model(student)
                    self.session.add(model)
                else:
                    model = self._get_model(student.id, student.user_id)
                    if not model:
                        raise EntityNotFoundError("Student", student.id)
                    self.mapper.update_model(model, student)
        except IntegrityError as e:
            raise DuplicateEntityError("Student", "email", student.email) from e

        student.id = model.id
        return student

    def get_by_id(self, student_id: str, user_id: str) -> Optional[Student]:
        model = self._get_model(student_id, user_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_user(self, user_id: str) -> List[Student]:
        models = self.session.query(StudentModel).filter_by(
            user_id=user_id
        ).order_by(asc(StudentModel.name), asc(StudentModel.id)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, student_id: str, user_id: str) -> bool:
        model = self._get_model(student_id, user_id)
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True


class SQLAlchemyProjectStudentRepository(ProjectStudentRepositoryInterface):
    """SQLAlchemy implementation of assignment repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectStudentMapper()
        self.model = ProjectStudentModel

    def add(self, assignment: ProjectStudent) -> ProjectStudent:
        model = self.mapper.domain_to_model(assignment)
        try:
            with self.session.begin_nested():
                self.session.add(model)
        except IntegrityError as e:
            raise ConflictError("Student is already assigned to this project") from e

        assignment.id = model.id
        return self.mapper.model_to_domain(model)

    def list_by_project(self, project_id: str) -> List[ProjectStudent]:
        models = self.session.query(ProjectStudentModel).options(
            joinedload(ProjectStudentModel.student)
        ).filter_by(project_id=project_id).order_by(asc(ProjectStudentModel.assigned_at)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def remove(self, project_id: str, student_id: str) -> bool:
        deleted = self.session.query(ProjectStudentModel).filter_by(
            project_id=project_id,
            student_id=student_id
        ).delete(synchronize_session=False)
        return deleted > 0
