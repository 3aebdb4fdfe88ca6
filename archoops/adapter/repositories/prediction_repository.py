from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.app.repositories.prediction_repository import IPredictionRepository
from archoops.domain.entities import Prediction


class PredictionRepository(IPredictionRepository):
    """Prediction repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, prediction_id: UUID) -> Optional[Prediction]:
        """Get prediction by ID"""
        stmt = select(Prediction).where(Prediction.id == prediction_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_scored_by_user_id(self, user_id: UUID) -> List[Prediction]:
        """Get all scored predictions of a user, oldest first"""
        stmt = (
            select(Prediction)
            .where(Prediction.user_id == user_id, Prediction.points_earned != None)
            .order_by(Prediction.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, prediction: Prediction) -> Prediction:
        """Create a new prediction"""
        self.session.add(prediction)
        await self.session.flush()
        await self.session.refresh(prediction)
        return prediction

    async def record_score_if_unscored(
        self, prediction: Prediction, is_correct: bool, points: int
    ) -> bool:
        """Score the prediction with a single conditional UPDATE"""
        stmt = (
            update(Prediction)
            .where(Prediction.id == prediction.id, Prediction.points_earned == None)
            .values(is_correct=is_correct, points_earned=points)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False
        await self.session.refresh(prediction)
        return True
