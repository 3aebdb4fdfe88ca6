from datetime import timedelta
from functools import lru_cache

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from archoops.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from archoops.app.services.clock import Clock, utc_now
from archoops.app.services.scoring_policy import DEFAULT_SCORING_POLICY, ScoringPolicy
from archoops.app.services.token_gate import TokenGate
from archoops.app.use_cases.auth import ResetTokenDelivery, log_reset_token

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return utc_now


@lru_cache
def get_token_gate() -> TokenGate:
    return TokenGate(
        secret=ApplicationConfig.JWT_SECRET,
        expires_in=timedelta(days=ApplicationConfig.JWT_EXPIRY_DAYS),
    )


def get_scoring_policy() -> ScoringPolicy:
    return DEFAULT_SCORING_POLICY


def get_reset_token_delivery() -> ResetTokenDelivery:
    return log_reset_token


def get_join_code_max_attempts() -> int:
    return ApplicationConfig.JOIN_CODE_MAX_ATTEMPTS
