"""
User Entity

A teacher, student or administrator account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from archoops.domain.base import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash (cost factor 12)
    - Role is fixed at signup; admins are created by operators
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)
    display_name: str = Field(max_length=100)
    role: UserRole = Field(default=UserRole.student)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
