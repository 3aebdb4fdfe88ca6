from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from .dtos import PublicUser
from .public_user import to_public_user


class LoadCurrentUserUseCase:
    """Loads the public profile behind a verified session"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[PublicUser]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            return Return.ok(to_public_user(user))
