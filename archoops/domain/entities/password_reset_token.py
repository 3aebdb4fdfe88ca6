"""
PasswordResetToken Entity

Single-use, time-limited password reset tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from archoops.domain.base import utc_now


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity.

    Business Rules:
    - Expires 1 hour after issuance, never extended
    - Only the SHA-256 hash of the plain token is stored
    - Single-use: marked as used by a conditional update on redemption
    - Several outstanding tokens per user are allowed
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=64, unique=True)

    used: bool = Field(default=False)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_expires_at", "expires_at"),)
