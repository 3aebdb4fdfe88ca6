"""
Change Password Use Case

Replaces the password of a signed-in user who knows the current one.
"""

import logging
from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from .dtos import ChangePasswordResponse
from .passwords import hash_password, validate_password, verify_password

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - The current password must verify against the stored hash
    - The new password must meet complexity requirements (min 10 chars)
    - Issued session tokens are not revoked
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Errors:
            - INVALID_PASSWORD: New password does not meet complexity requirements
            - USER_NOT_FOUND: Account deleted after the session was issued
            - INVALID_CURRENT_PASSWORD: Current password is incorrect
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not verify_password(current_password, user.password_hash):
                return Return.err(
                    Error("INVALID_CURRENT_PASSWORD", "Current password is incorrect")
                )

            await self.uow.users.set_password_hash(user, hash_password(new_password))
            await self.uow.commit()
            logger.info(f"Password changed for user {user.id}")

        return Return.ok(
            ChangePasswordResponse(status="success", message="Password changed successfully")
        )
