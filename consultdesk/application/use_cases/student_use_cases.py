"""
Student use cases: student CRUD and project assignments.
"""

from typing import List

from consultdesk.domain.models.base import EntityNotFoundError
from consultdesk.domain.models.student import Student, StudentLevel, ProjectStudent
from consultdesk.domain.repositories.project_repository import ProjectRepository
from consultdesk.domain.repositories.student_repository import StudentRepository, ProjectStudentRepository
from consultdesk.application.dto.student_dto import (
    CreateStudentRequestDTO,
    UpdateStudentRequestDTO,
    AssignStudentRequestDTO
)
from .base_use_case import BaseUseCase, CommandUseCase
from .project_use_cases import get_owned_project


def get_owned_student(repository: StudentRepository, student_id: str, user_id: str) -> Student:
    student = repository.get_by_id(student_id, user_id)
    if not student:
        raise EntityNotFoundError("Student", student_id)
    return student


class CreateStudentUseCase(CommandUseCase):
    """Use case for creating a student."""

    def __init__(self, student_repository: StudentRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.student_repository = student_repository

    def execute(self, user_id: str, request: CreateStudentRequestDTO) -> Student:
        now = self.clock()
        student = Student(
            user_id=user_id,
            name=request.name,
            email=str(request.email),
            program=request.program,
            level=StudentLevel(request.level),
            created_at=now,
            updated_at=now
        )
        saved = self.student_repository.save(student)
        self._commit(saved)
        return saved


class UpdateStudentUseCase(CommandUseCase):
    """Use case for updating a student."""

    def __init__(self, student_repository: StudentRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.student_repository = student_repository

    def execute(self, user_id: str, student_id: str, request: UpdateStudentRequestDTO) -> Student:
        student = get_owned_student(self.student_repository, student_id, user_id)
        changes = request.changes()
        if "email" in changes and changes["email"] is not None:
            changes["email"] = str(changes["email"])
        student.update_info(**changes)

        saved = self.student_repository.save(student)
        self._commit(saved)
        return saved


class GetStudentUseCase(BaseUseCase):
    def __init__(self, student_repository: StudentRepository, **kwargs):
        super().__init__(**kwargs)
        self.student_repository = student_repository

    def execute(self, user_id: str, student_id: str) -> Student:
        return get_owned_student(self.student_repository, student_id, user_id)


class ListStudentsUseCase(BaseUseCase):
    """Use case for listing students ordered by name."""

    def __init__(self, student_repository: StudentRepository, **kwargs):
        super().__init__(**kwargs)
        self.student_repository = student_repository

    def execute(self, user_id: str) -> List[Student]:
        return self.student_repository.list_by_user(user_id)


class DeleteStudentUseCase(CommandUseCase):
    """Use case for deleting a student and its assignments."""

    def __init__(self, student_repository: StudentRepository, uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.student_repository = student_repository

    def execute(self, user_id: str, student_id: str) -> None:
        if not self.student_repository.delete(student_id, user_id):
            raise EntityNotFoundError("Student", student_id)
        self.uow.commit()


class AssignStudentUseCase(CommandUseCase):
    """Use case for assigning one of the user's students to one of the user's projects."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        student_repository: StudentRepository,
        assignment_repository: ProjectStudentRepository,
        uow,
        **kwargs
    ):
        super().__init__(uow, **kwargs)
        self.project_repository = project_repository
        self.student_repository = student_repository
        self.assignment_repository = assignment_repository

    def execute(self, user_id: str, project_id: str, request: AssignStudentRequestDTO) -> ProjectStudent:
        get_owned_project(self.project_repository, project_id, user_id)
        student = get_owned_student(self.student_repository, request.student_id, user_id)

        assignment = ProjectStudent(
            project_id=project_id,
            student_id=student.id,
            role=request.role,
            assigned_at=self.clock()
        )
        saved = self.assignment_repository.add(assignment)
        self._commit()
        return saved


class ListProjectStudentsUseCase(BaseUseCase):
    def __init__(self, project_repository: ProjectRepository, assignment_repository: ProjectStudentRepository, **kwargs):
        super().__init__(**kwargs)
        self.project_repository = project_repository
        self.assignment_repository = assignment_repository

    def execute(self, user_id: str, project_id: str) -> List[ProjectStudent]:
        get_owned_project(self.project_repository, project_id, user_id)
        return self.assignment_repository.list_by_project(project_id)


class RemoveStudentFromProjectUseCase(CommandUseCase):
    def __init__(self, project_repository: ProjectRepository, assignment_repository: ProjectStudentRepository,
                 uow, **kwargs):
        super().__init__(uow, **kwargs)
        self.project_repository = project_repository
        self.assignment_repository = assignment_repository

    def execute(self, user_id: str, project_id: str, student_id: str) -> None:
        get_owned_project(self.project_repository, project_id, user_id)
        if not self.assignment_repository.remove(project_id, student_id):
            raise EntityNotFoundError("Assignment", student_id)
        self.uow.commit()
