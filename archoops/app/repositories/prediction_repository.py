from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from archoops.domain.entities import Prediction


class IPredictionRepository(ABC):
    """Prediction repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, prediction_id: UUID) -> Optional[Prediction]:
        """Get prediction by ID"""
        pass

    @abstractmethod
    async def get_scored_by_user_id(self, user_id: UUID) -> List[Prediction]:
        """Get all scored predictions of a user"""
        pass

    @abstractmethod
    async def create(self, prediction: Prediction) -> Prediction:
        """Create a new prediction"""
        pass

    @abstractmethod
    async def record_score_if_unscored(
        self, prediction: Prediction, is_correct: bool, points: int
    ) -> bool:
        """
        Write the outcome and points of a prediction that has none yet.

        Returns:
            False when another writer scored the prediction first
        """
        pass
