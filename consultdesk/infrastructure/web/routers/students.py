"""
Student management router.
"""

from typing import List

from fastapi import APIRouter, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import Clock, UnitOfWorkDep, StudentRepo
from consultdesk.application.use_cases.student_use_cases import (
    CreateStudentUseCase,
    UpdateStudentUseCase,
    GetStudentUseCase,
    ListStudentsUseCase,
    DeleteStudentUseCase
)
from consultdesk.application.dto.student_dto import (
    CreateStudentRequestDTO,
    UpdateStudentRequestDTO,
    StudentResponseDTO
)


router = APIRouter()


@router.get("", response_model=List[StudentResponseDTO])
def list_students(user_id: CurrentUserId, repository: StudentRepo):
    """List the user's students ordered by name."""
    students = ListStudentsUseCase(repository).execute(user_id)
    return [StudentResponseDTO.from_domain(student) for student in students]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=StudentResponseDTO)
def create_student(
    request: CreateStudentRequestDTO,
    user_id: CurrentUserId,
    repository: StudentRepo,
    uow: UnitOfWorkDep,
    clock: Clock
):
    """
    Create a student.

    - **email**: must be unique
    - **level**: PhD, MS, BS, Undergraduate or Graduate
    """
    student = CreateStudentUseCase(repository, uow, clock=clock).execute(user_id, request)
    return StudentResponseDTO.from_domain(student)


@router.get("/{student_id}", response_model=StudentResponseDTO)
def get_student(student_id: str, user_id: CurrentUserId, repository: StudentRepo):
    return StudentResponseDTO.from_domain(GetStudentUseCase(repository).execute(user_id, student_id))


@router.put("/{student_id}", response_model=StudentResponseDTO)
def update_student(
    student_id: str,
    request: UpdateStudentRequestDTO,
    user_id: CurrentUserId,
    repository: StudentRepo,
    uow: UnitOfWorkDep,
    clock: Clock
):
    student = UpdateStudentUseCase(repository, uow, clock=clock).execute(user_id, student_id, request)
    return StudentResponseDTO.from_domain(student)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, user_id: CurrentUserId, repository: StudentRepo, uow: UnitOfWorkDep):
    """Delete a student; its project assignments go with it."""
    DeleteStudentUseCase(repository, uow).execute(user_id, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
