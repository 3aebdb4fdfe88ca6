"""
Delete Class Use Case

Removes a class and its enrollments.
"""

import logging
from uuid import UUID

from archoops.app.result import Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from .class_summary import class_not_found, find_owned_class

logger = logging.getLogger(__name__)


class DeleteClassUseCase:
    """
    Use case for class deletion.

    Business Rules:
    - Only the owning teacher may delete a class; others get CLASS_NOT_FOUND
    - Enrollments go with the class; predictions and points stay with students
    - The join code is no longer live and may be allocated again
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, teacher_id: UUID, class_id: UUID) -> Result[None]:
        async with self.uow:
            class_room = await find_owned_class(self.uow, teacher_id, class_id)
            if class_room is None:
                return Return.err(class_not_found("delete"))

            removed = await self.uow.enrollments.delete_by_class(class_room.id)
            await self.uow.classes.delete(class_room)
            await self.uow.commit()

            logger.info(f"Deleted class {class_id} with {removed} enrollments")
            return Return.ok(None)
