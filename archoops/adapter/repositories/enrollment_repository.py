from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.app.repositories.enrollment_repository import (
    DuplicateEnrollmentError,
    IEnrollmentRepository,
)
from archoops.domain.entities import ClassRoom, Enrollment, User


def _is_enrollment_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    # Postgres names the constraint, SQLite names the columns
    return "uq_enrollment_user_class" in message or "enrollments.user_id" in message


class EnrollmentRepository(IEnrollmentRepository):
    """Enrollment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_class(
        self, user_id: UUID, class_id: UUID
    ) -> Optional[Enrollment]:
        """Get enrollment of a user in a class"""
        stmt = select(Enrollment).where(
            Enrollment.user_id == user_id, Enrollment.class_id == class_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, enrollment: Enrollment) -> Enrollment:
        """Create a new enrollment inside a SAVEPOINT"""
        try:
            async with self.session.begin_nested():
                self.session.add(enrollment)
                await self.session.flush()
        except IntegrityError as exc:
            if not _is_enrollment_violation(exc):
                raise
            raise DuplicateEnrollmentError(enrollment.user_id, enrollment.class_id) from exc
        await self.session.refresh(enrollment)
        return enrollment

    async def delete(self, enrollment: Enrollment) -> None:
        await self.session.delete(enrollment)
        await self.session.flush()

    async def delete_by_class(self, class_id: UUID) -> int:
        stmt = (
            delete(Enrollment)
            .where(Enrollment.class_id == class_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def count_by_class(self, class_id: UUID) -> int:
        stmt = select(func.count()).select_from(Enrollment).where(Enrollment.class_id == class_id)
        result = await self.session.exec(stmt)
        return int(result.one())

    async def list_classes_for_user(self, user_id: UUID) -> List[ClassRoom]:
        stmt = (
            select(ClassRoom)
            .join(Enrollment, Enrollment.class_id == ClassRoom.id)
            .where(Enrollment.user_id == user_id)
            .order_by(Enrollment.joined_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_roster(self, class_id: UUID) -> List[Tuple[Enrollment, User]]:
        stmt = (
            select(Enrollment, User)
            .join(User, User.id == Enrollment.user_id)
            .where(Enrollment.class_id == class_id)
            .order_by(Enrollment.joined_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
