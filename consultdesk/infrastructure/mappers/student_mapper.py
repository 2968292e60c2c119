"""
Student and assignment mappers.
"""

from consultdesk.domain.models.student import Student, StudentLevel, ProjectStudent
from consultdesk.infrastructure.db.models import StudentModel, ProjectStudentModel, generate_id


class StudentMapper:
    """Maps between Student domain entity and StudentModel database model."""

    def domain_to_model(self, student: Student) -> StudentModel:
        model = StudentModel(
            id=student.id or generate_id(),
            user_id=student.user_id,
            created_at=student.created_at
        )
        self.update_model(model, student)
        return model

    def update_model(self, model: StudentModel, student: Student) -> None:
        model.name = student.name
        model.email = student.email
        model.program = student.program
        model.level = student.level
        model.updated_at = student.updated_at

    def model_to_domain(self, model: StudentModel) -> Student:
        return Student(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            program=model.program,
            level=StudentLevel(model.level),
            created_at=model.created_at,
            updated_at=model.updated_at
        )


class ProjectStudentMapper:
    """Maps assignments, carrying the student along when it is loaded."""

    def __init__(self):
        self.student_mapper = StudentMapper()

    def domain_to_model(self, assignment: ProjectStudent) -> ProjectStudentModel:
        return ProjectStudentModel(
            id=assignment.id or generate_id(),
            project_id=assignment.project_id,
            student_id=assignment.student_id,
            role=assignment.role,
            assigned_at=assignment.assigned_at
        )

    def model_to_domain(self, model: ProjectStudentModel) -> ProjectStudent:
        student = self.student_mapper.model_to_domain(model.student) if model.student else None
        return ProjectStudent(
            id=model.id,
            project_id=model.project_id,
            student_id=model.student_id,
            role=model.role,
            assigned_at=model.assigned_at,
            created_at=model.assigned_at,
            updated_at=model.assigned_at,
            student=student
        )
