from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.adapter.repositories.class_repository import ClassRepository
from archoops.adapter.repositories.enrollment_repository import EnrollmentRepository
from archoops.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from archoops.adapter.repositories.points_transaction_repository import PointsTransactionRepository
from archoops.adapter.repositories.prediction_repository import PredictionRepository
from archoops.adapter.repositories.user_repository import UserRepository
from archoops.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.classes = ClassRepository(self.session)
        self.enrollments = EnrollmentRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.predictions = PredictionRepository(self.session)
        self.points_transactions = PointsTransactionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
