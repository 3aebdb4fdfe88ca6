"""
ClassRoom Entity

A class run by a teacher that students enroll in with a join code.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from archoops.domain.base import utc_now


class ClassRoom(SQLModel, table=True):
    """
    ClassRoom entity.

    Business Rules:
    - join_code is 6 characters from [A-Z0-9]
    - join_code is unique across all live classes (unique index is the authority)
    - Only the owning teacher may rotate the join code
    """

    __tablename__ = "classes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    teacher_id: UUID = Field(foreign_key="users.id", index=True)
    join_code: str = Field(unique=True, index=True, min_length=6, max_length=6)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
