"""
Request Password Reset Use Case

Issues a password reset token and hands it to a delivery channel.
"""

import logging
from typing import Awaitable, Callable, Optional

from archoops.app.result import Result, Return
from archoops.app.services.clock import Clock, utc_now
from archoops.app.services.reset_token_ledger import IssuedResetToken, ResetTokenLedger
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import User
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

ResetTokenDelivery = Callable[[User, IssuedResetToken], Awaitable[None]]

RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset link has been sent."


async def log_reset_token(user: User, issued: IssuedResetToken) -> None:
    """Development delivery channel: writes the reset link to the log"""
    logger.info(
        f"Password reset for {user.email}: token={issued.token} "
        f"expires={issued.expires_at.isoformat()}"
    )


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - No email enumeration: same response whether or not the email exists
    - Token issued only when the email belongs to an account
    - Earlier outstanding tokens stay valid until used or expired
    - Delivery happens after commit so an undelivered token is never lost
    """

    def __init__(
        self,
        uow: UnitOfWork,
        deliver: Optional[ResetTokenDelivery] = None,
        clock: Clock = utc_now,
    ):
        self.uow = uow
        self.deliver = deliver or log_reset_token
        self.clock = clock

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        response = RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())
            if user is None:
                return Return.ok(response)

            ledger = ResetTokenLedger(self.uow.password_reset_tokens, clock=self.clock)
            issued = await ledger.issue_reset_token(user.id)
            await self.uow.commit()

            await self.deliver(user, issued)
            return Return.ok(response)
