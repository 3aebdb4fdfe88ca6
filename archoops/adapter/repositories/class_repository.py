from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.app.repositories.class_repository import DuplicateJoinCodeError, IClassRepository
from archoops.domain.entities import ClassRoom


def _is_join_code_violation(exc: IntegrityError) -> bool:
    return "join_code" in str(exc.orig)


class ClassRepository(IClassRepository):
    """
    ClassRoom repository implementation using SQLModel.

    Writes touching join_code run inside a SAVEPOINT so a unique-index
    violation rolls back only that write and the unit of work stays usable.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, class_id: UUID) -> Optional[ClassRoom]:
        """Get class by ID"""
        stmt = select(ClassRoom).where(ClassRoom.id == class_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_join_code(self, join_code: str) -> Optional[ClassRoom]:
        """Get live class by join code"""
        stmt = select(ClassRoom).where(ClassRoom.join_code == join_code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, class_room: ClassRoom) -> ClassRoom:
        """Create a new class"""
        try:
            async with self.session.begin_nested():
                self.session.add(class_room)
                await self.session.flush()
        except IntegrityError as exc:
            if not _is_join_code_violation(exc):
                raise
            raise DuplicateJoinCodeError(class_room.join_code) from exc
        await self.session.refresh(class_room)
        return class_room

    async def update_join_code(self, class_room: ClassRoom, join_code: str) -> ClassRoom:
        """Replace the join code with a single UPDATE"""
        stmt = (
            update(ClassRoom)
            .where(ClassRoom.id == class_room.id)
            .values(join_code=join_code)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as exc:
            if not _is_join_code_violation(exc):
                raise
            raise DuplicateJoinCodeError(join_code) from exc
        await self.session.refresh(class_room)
        return class_room

    async def list_by_teacher(self, teacher_id: UUID) -> List[ClassRoom]:
        """Classes owned by a teacher, newest first"""
        stmt = (
            select(ClassRoom)
            .where(ClassRoom.teacher_id == teacher_id)
            .order_by(ClassRoom.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete(self, class_room: ClassRoom) -> None:
        await self.session.delete(class_room)
        await self.session.flush()
