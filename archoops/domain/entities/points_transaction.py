"""
PointsTransaction Entity

Ledger of points awarded to users.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from archoops.domain.base import utc_now
from .enums import PointsReason


class PointsTransaction(SQLModel, table=True):
    """
    PointsTransaction entity - append-only.

    Business Rules:
    - At most one prediction award per prediction (unique prediction_id)
    - Adjustments carry no prediction and may be negative
    """

    __tablename__ = "points_transactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    prediction_id: Optional[UUID] = Field(
        default=None, foreign_key="predictions.id", unique=True
    )
    points: int
    reason: PointsReason = Field(default=PointsReason.prediction)
    description: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
