from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.app.repositories.points_transaction_repository import (
    DuplicatePointsAwardError,
    IPointsTransactionRepository,
)
from archoops.domain.entities import PointsTransaction


class PointsTransactionRepository(IPointsTransactionRepository):
    """PointsTransaction repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: PointsTransaction) -> PointsTransaction:
        """Create a new points transaction inside a SAVEPOINT"""
        try:
            async with self.session.begin_nested():
                self.session.add(transaction)
                await self.session.flush()
        except IntegrityError as exc:
            if transaction.prediction_id is None or "prediction_id" not in str(exc.orig):
                raise
            raise DuplicatePointsAwardError(transaction.prediction_id) from exc
        await self.session.refresh(transaction)
        return transaction

    async def total_for_user(self, user_id: UUID) -> int:
        """Sum of all points awarded to a user"""
        stmt = select(func.coalesce(func.sum(PointsTransaction.points), 0)).where(
            PointsTransaction.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return int(result.one())
