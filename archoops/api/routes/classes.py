from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from archoops.api.error import ClientError, ServerError
from archoops.api.utils.session_auth import require_student, require_teacher, subject_uuid
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.app.use_cases.classes import (
    ClassRoster,
    ClassSummary,
    CreateClassUseCase,
    DeleteClassUseCase,
    GetClassRosterUseCase,
    JoinClassUseCase,
    LeaveClassUseCase,
    ListStudentClassesUseCase,
    ListTeacherClassesUseCase,
    RotateJoinCodeResponse,
    RotateJoinCodeUseCase,
    TeacherClassSummary,
)
from archoops.depends import get_join_code_max_attempts, get_unit_of_work
from archoops.domain.identity import SessionIdentity

router = APIRouter()


def _raise_for_class_error(error):
    if error.code in ("CLASS_NOT_FOUND", "NOT_ENROLLED"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("/teacher/classes", status_code=status.HTTP_200_OK, response_model=List[TeacherClassSummary])
async def list_teacher_classes(
    identity: SessionIdentity = Depends(require_teacher),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Classes owned by the current teacher, newest first"""
    result = await ListTeacherClassesUseCase(uow).execute(subject_uuid(identity))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/student/classes", status_code=status.HTTP_200_OK, response_model=List[ClassSummary])
async def list_student_classes(
    identity: SessionIdentity = Depends(require_student),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Classes the current student is enrolled in, most recently joined first"""
    result = await ListStudentClassesUseCase(uow).execute(subject_uuid(identity))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class CreateClassRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Class name")


@router.post("/classes", status_code=status.HTTP_201_CREATED, response_model=ClassSummary)
async def create_class(
    request: CreateClassRequest,
    identity: SessionIdentity = Depends(require_teacher),
    uow: UnitOfWork = Depends(get_unit_of_work),
    max_attempts: int = Depends(get_join_code_max_attempts),
):
    """
    Create Class (teacher only)

    Raises:
        - 401 Unauthorized / 403 Forbidden: not a teacher session
        - 500 Internal Server Error: ALLOCATION_EXHAUSTED
    """
    use_case = CreateClassUseCase(uow, max_attempts=max_attempts)
    result = await use_case.execute(subject_uuid(identity), request.name)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete("/classes/{class_id}", status_code=status.HTTP_200_OK)
async def delete_class(
    class_id: UUID,
    identity: SessionIdentity = Depends(require_teacher),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Class (owning teacher only)

    Removes the class and its enrollments; its join code stops working.

    Raises:
        - 404 Not Found: class missing or owned by another teacher
    """
    result = await DeleteClassUseCase(uow).execute(subject_uuid(identity), class_id)

    if result.is_err():
        _raise_for_class_error(result.error)

    return {"ok": True}


@router.post(
    "/classes/{class_id}/rotate-code",
    status_code=status.HTTP_200_OK,
    response_model=RotateJoinCodeResponse,
)
async def rotate_join_code(
    class_id: UUID,
    identity: SessionIdentity = Depends(require_teacher),
    uow: UnitOfWork = Depends(get_unit_of_work),
    max_attempts: int = Depends(get_join_code_max_attempts),
):
    """
    Rotate Join Code (owning teacher only)

    Raises:
        - 404 Not Found: class missing or owned by another teacher
        - 500 Internal Server Error: ALLOCATION_EXHAUSTED
    """
    use_case = RotateJoinCodeUseCase(uow, max_attempts=max_attempts)
    result = await use_case.execute(subject_uuid(identity), class_id)

    if result.is_err():
        _raise_for_class_error(result.error)

    return result.value


@router.get("/classes/{class_id}/roster", status_code=status.HTTP_200_OK, response_model=ClassRoster)
async def get_class_roster(
    class_id: UUID,
    identity: SessionIdentity = Depends(require_teacher),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Class Roster (owning teacher only)

    Raises:
        - 404 Not Found: class missing or owned by another teacher
    """
    result = await GetClassRosterUseCase(uow).execute(subject_uuid(identity), class_id)

    if result.is_err():
        _raise_for_class_error(result.error)

    return result.value


class JoinClassRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=20, description="Class join code")


@router.post("/classes/join", status_code=status.HTTP_201_CREATED, response_model=ClassSummary)
async def join_class(
    request: JoinClassRequest,
    identity: SessionIdentity = Depends(require_student),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Join Class (student only)

    Raises:
        - 400 Bad Request: malformed code
        - 404 Not Found: no class with this code
        - 409 Conflict: already enrolled
    """
    result = await JoinClassUseCase(uow).execute(subject_uuid(identity), request.code)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_JOIN_CODE":
            raise ClientError(error)
        if error.code == "ALREADY_ENROLLED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        _raise_for_class_error(error)

    return result.value


@router.delete("/classes/{class_id}/leave", status_code=status.HTTP_200_OK)
async def leave_class(
    class_id: UUID,
    identity: SessionIdentity = Depends(require_student),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Leave Class (student only)

    Raises:
        - 404 Not Found: NOT_ENROLLED
    """
    result = await LeaveClassUseCase(uow).execute(subject_uuid(identity), class_id)

    if result.is_err():
        _raise_for_class_error(result.error)

    return {"ok": True}
