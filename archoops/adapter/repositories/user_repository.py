from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.app.repositories.user_repository import DuplicateEmailError, IUserRepository
from archoops.domain.entities import User


class UserRepository(IUserRepository):
    """
    User repository implementation using SQLModel.

    Emails are stored lower-cased, so lookups lower-case their argument.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        user.email = user.email.lower()
        try:
            async with self.session.begin_nested():
                self.session.add(user)
                await self.session.flush()
        except IntegrityError as exc:
            if "email" not in str(exc.orig):
                raise
            raise DuplicateEmailError(user.email) from exc
        await self.session.refresh(user)
        return user

    async def set_password_hash(self, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        self.session.add(user)
        await self.session.flush()
        return user
