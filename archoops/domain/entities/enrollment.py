"""
Enrollment Entity

Links a student to a class.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from archoops.domain.base import utc_now


class Enrollment(SQLModel, table=True):
    """Enrollment entity - one row per (student, class)"""

    __tablename__ = "enrollments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    class_id: UUID = Field(foreign_key="classes.id", index=True)

    joined_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (UniqueConstraint("user_id", "class_id", name="uq_enrollment_user_class"),)
