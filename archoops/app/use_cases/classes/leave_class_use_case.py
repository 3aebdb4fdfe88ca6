from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.unit_of_work import UnitOfWork


class LeaveClassUseCase:
    """Removes a student's own enrollment"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, student_id: UUID, class_id: UUID) -> Result[None]:
        async with self.uow:
            enrollment = await self.uow.enrollments.get_by_user_and_class(student_id, class_id)
            if enrollment is None:
                return Return.err(Error("NOT_ENROLLED", "You are not enrolled in this class"))

            await self.uow.enrollments.delete(enrollment)
            await self.uow.commit()
            return Return.ok(None)
