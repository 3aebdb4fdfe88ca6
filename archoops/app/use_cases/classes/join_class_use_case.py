"""
Join Class Use Case

Enrolls a student in the class behind a join code.
"""

from uuid import UUID

from archoops.app.repositories.enrollment_repository import DuplicateEnrollmentError
from archoops.app.result import Error, Result, Return
from archoops.app.services.join_code_allocator import is_valid_join_code, normalize_join_code
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import Enrollment
from .class_summary import to_class_summary
from .dtos import ClassSummary

ALREADY_ENROLLED = Error("ALREADY_ENROLLED", "You are already enrolled in this class")


class JoinClassUseCase:
    """
    Use case for class enrollment.

    Business Rules:
    - Codes are case-insensitive and surrounding whitespace is ignored
    - A student can enroll in a class only once; the unique constraint on
      (user, class) settles two concurrent joins
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, student_id: UUID, code: str) -> Result[ClassSummary]:
        join_code = normalize_join_code(code)
        if not is_valid_join_code(join_code):
            return Return.err(
                Error("INVALID_JOIN_CODE", "Class code must be exactly 6 letters or digits")
            )

        async with self.uow:
            class_room = await self.uow.classes.get_by_join_code(join_code)
            if class_room is None:
                return Return.err(Error("CLASS_NOT_FOUND", "Invalid join code"))

            existing = await self.uow.enrollments.get_by_user_and_class(student_id, class_room.id)
            if existing is not None:
                return Return.err(ALREADY_ENROLLED)

            try:
                await self.uow.enrollments.create(
                    Enrollment(user_id=student_id, class_id=class_room.id)
                )
            except DuplicateEnrollmentError:
                return Return.err(ALREADY_ENROLLED)

            await self.uow.commit()
            return Return.ok(to_class_summary(class_room))
