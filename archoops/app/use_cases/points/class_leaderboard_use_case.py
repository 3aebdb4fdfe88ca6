"""
Class Leaderboard Use Case

Ranks the students of a class by total points.
"""

from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.clock import Clock, utc_now
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import UserRole
from archoops.domain.identity import SessionIdentity
from .dtos import ClassLeaderboard, LeaderboardEntry
from .points_summary import build_points_summary


class GetClassLeaderboardUseCase:
    """
    Use case for a class leaderboard.

    Business Rules:
    - Visible to the owning teacher and to students enrolled in the class;
      everyone else, including for a missing class, gets FORBIDDEN
    - Entries are ordered by total points, highest first, ties by name
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def _can_view(self, identity: SessionIdentity, user_id: UUID, class_id: UUID) -> bool:
        class_room = await self.uow.classes.get_by_id(class_id)
        if class_room is None:
            return False
        if identity.role == UserRole.teacher:
            return class_room.teacher_id == user_id
        if identity.role == UserRole.student:
            enrollment = await self.uow.enrollments.get_by_user_and_class(user_id, class_id)
            return enrollment is not None
        return False

    async def execute(
        self, identity: SessionIdentity, user_id: UUID, class_id: UUID
    ) -> Result[ClassLeaderboard]:
        async with self.uow:
            if not await self._can_view(identity, user_id, class_id):
                return Return.err(Error("FORBIDDEN", "You do not have access to this class"))

            entries = []
            for _, student in await self.uow.enrollments.list_roster(class_id):
                summary = await build_points_summary(self.uow, student.id)
                entries.append(
                    LeaderboardEntry(**summary.model_dump(), display_name=student.display_name)
                )
            entries.sort(key=lambda entry: (-entry.total_points, entry.display_name))

            return Return.ok(
                ClassLeaderboard(
                    class_id=str(class_id),
                    entries=entries,
                    generated_at=self.clock(),
                )
            )
