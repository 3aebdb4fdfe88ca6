from abc import ABC, abstractmethod

from archoops.app.repositories.class_repository import IClassRepository
from archoops.app.repositories.enrollment_repository import IEnrollmentRepository
from archoops.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from archoops.app.repositories.points_transaction_repository import IPointsTransactionRepository
from archoops.app.repositories.prediction_repository import IPredictionRepository
from archoops.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    classes: IClassRepository
    enrollments: IEnrollmentRepository
    password_reset_tokens: IPasswordResetTokenRepository
    predictions: IPredictionRepository
    points_transactions: IPointsTransactionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
