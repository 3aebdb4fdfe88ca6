"""
Password Reset Token Ledger

Issues and redeems single-use, time-limited password reset tokens.
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from archoops.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from archoops.app.result import Error, Result, Return
from archoops.app.services.clock import Clock, utc_now
from archoops.domain.entities import PasswordResetToken

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(hours=1)
RESET_TOKEN_BYTES = 32


@dataclass(frozen=True)
class IssuedResetToken:
    """Plain token handed to the user once, with its expiry"""

    token: str
    expires_at: datetime


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class ResetTokenLedger:
    """
    Ledger of password reset tokens.

    Business Rules:
    - 256-bit random token, hex-encoded; only its SHA-256 hash is stored
    - Expires exactly 1 hour after issuance
    - A token is expired only when now is strictly after expires_at
    - Redemption is a conditional update so one of two racing requests wins
    - Issuing a token leaves earlier outstanding tokens valid
    """

    def __init__(self, tokens: IPasswordResetTokenRepository, clock: Clock = utc_now):
        self.tokens = tokens
        self.clock = clock

    async def issue_reset_token(self, owner_id: UUID) -> IssuedResetToken:
        """
        Generate and persist a new reset token for a user.

        Args:
            owner_id: ID of the user the token authorizes

        Returns:
            IssuedResetToken with the plain token and its expiry
        """
        token = secrets.token_hex(RESET_TOKEN_BYTES)
        expires_at = self.clock() + RESET_TOKEN_TTL

        await self.tokens.create(
            PasswordResetToken(
                user_id=owner_id,
                token_hash=hash_reset_token(token),
                used=False,
                expires_at=expires_at,
            )
        )
        logger.info(f"Issued password reset token for user {owner_id}")

        return IssuedResetToken(token=token, expires_at=expires_at)

    def is_expired(self, expires_at: datetime, now: Optional[datetime] = None) -> bool:
        if now is None:
            now = self.clock()
        return now > expires_at

    async def validate_and_consume(self, token: str) -> Result[UUID]:
        """
        Redeem a reset token.

        Args:
            token: Plain token as received by the user

        Returns:
            Result with the owner's user ID, or Error
            (INVALID_TOKEN, TOKEN_ALREADY_USED, TOKEN_EXPIRED)
        """
        record = await self.tokens.get_by_token_hash(hash_reset_token(token))

        if record is None:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired password reset token"))

        if record.used:
            return Return.err(
                Error("TOKEN_ALREADY_USED", "Password reset token has already been used")
            )

        if self.is_expired(record.expires_at):
            return Return.err(Error("TOKEN_EXPIRED", "Password reset token has expired"))

        consumed = await self.tokens.mark_used_if_unused(record.id)
        if not consumed:
            logger.warning(f"Concurrent redemption of reset token {record.id} lost the race")
            return Return.err(
                Error("TOKEN_ALREADY_USED", "Password reset token has already been used")
            )

        return Return.ok(record.user_id)
