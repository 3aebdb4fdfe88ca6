"""
Confirm Password Reset Use Case

Redeems a reset token and sets a new password.
"""

import logging

from archoops.app.result import Error, Result, Return
from archoops.app.services.clock import Clock, utc_now
from archoops.app.services.reset_token_ledger import ResetTokenLedger
from archoops.app.services.unit_of_work import UnitOfWork
from .dtos import ConfirmPasswordResetResponse
from .passwords import hash_password, validate_password

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password must meet complexity requirements (min 10 chars)
    - Token must exist, be unused and not expired
    - Token consumption and the password change commit together
    - Issued session tokens are not revoked; they end at expiry
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - INVALID_TOKEN: Token not found
            - TOKEN_ALREADY_USED: Token has already been used
            - TOKEN_EXPIRED: Token has expired
            - USER_NOT_FOUND: Token owner no longer exists
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            ledger = ResetTokenLedger(self.uow.password_reset_tokens, clock=self.clock)
            redemption = await ledger.validate_and_consume(token)
            if redemption.is_err():
                return Return.err(redemption.error)

            user = await self.uow.users.get_by_id(redemption.value)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            await self.uow.users.set_password_hash(user, hash_password(new_password))

            await self.uow.commit()
            logger.info(f"Password reset completed for user {user.id}")

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully. You can now log in with your new password.",
            )
        )
