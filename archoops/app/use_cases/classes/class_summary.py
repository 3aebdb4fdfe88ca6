from typing import Optional
from uuid import UUID

from archoops.app.result import Error
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import ClassRoom
from .dtos import ClassSummary


def to_class_summary(class_room: ClassRoom) -> ClassSummary:
    return ClassSummary(
        id=str(class_room.id),
        name=class_room.name,
        join_code=class_room.join_code,
        created_at=class_room.created_at,
    )


def class_not_found(action: str) -> Error:
    return Error(
        "CLASS_NOT_FOUND",
        f"Class not found or you do not have permission to {action} it",
    )


async def find_owned_class(
    uow: UnitOfWork, teacher_id: UUID, class_id: UUID
) -> Optional[ClassRoom]:
    """The class when it exists and belongs to the teacher, otherwise None"""
    class_room = await uow.classes.get_by_id(class_id)
    if class_room is None or class_room.teacher_id != teacher_id:
        return None
    return class_room
