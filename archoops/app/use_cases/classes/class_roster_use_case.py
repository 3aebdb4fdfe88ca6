from uuid import UUID

from archoops.app.result import Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from .class_summary import class_not_found, find_owned_class
from .dtos import ClassRoster, RosterStudent


class GetClassRosterUseCase:
    """Students of a class, visible to the owning teacher only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, teacher_id: UUID, class_id: UUID) -> Result[ClassRoster]:
        async with self.uow:
            class_room = await find_owned_class(self.uow, teacher_id, class_id)
            if class_room is None:
                return Return.err(class_not_found("view"))

            roster = await self.uow.enrollments.list_roster(class_room.id)
            return Return.ok(
                ClassRoster(
                    id=str(class_room.id),
                    name=class_room.name,
                    join_code=class_room.join_code,
                    students=[
                        RosterStudent(
                            id=str(user.id),
                            display_name=user.display_name,
                            email=user.email,
                            joined_at=enrollment.joined_at,
                        )
                        for enrollment, user in roster
                    ],
                )
            )
