from abc import ABC, abstractmethod
from uuid import UUID

from archoops.domain.entities import PointsTransaction


class DuplicatePointsAwardError(Exception):
    """Raised when a prediction already has a points transaction"""

    def __init__(self, prediction_id: UUID):
        self.prediction_id = prediction_id
        super().__init__(f"Points already awarded for prediction {prediction_id}")


class IPointsTransactionRepository(ABC):
    """PointsTransaction repository interface - application layer"""

    @abstractmethod
    async def create(self, transaction: PointsTransaction) -> PointsTransaction:
        """Create a new points transaction. Raises DuplicatePointsAwardError for a second award."""
        pass

    @abstractmethod
    async def total_for_user(self, user_id: UUID) -> int:
        """Sum of all points awarded to a user"""
        pass
