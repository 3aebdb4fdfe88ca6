"""
Get Points Summary Use Case

Totals, accuracy and streaks for a user.
"""

from uuid import UUID

from archoops.app.result import Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from .dtos import PointsSummaryResponse
from .points_summary import build_points_summary


class GetPointsSummaryUseCase:
    """Use case for a user's points summary"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[PointsSummaryResponse]:
        async with self.uow:
            return Return.ok(await build_points_summary(self.uow, user_id))
