"""
Prediction Entity

A student's pick for a game with a stated confidence.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from archoops.domain.base import utc_now


class Prediction(SQLModel, table=True):
    """
    Prediction entity.

    Business Rules:
    - confidence lies in [0, 1]
    - is_correct stays None until the game is resolved
    - points_earned is written once, when the prediction is scored
    """

    __tablename__ = "predictions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    game_id: str = Field(max_length=64, index=True)
    predicted_winner: str = Field(max_length=10)
    confidence: float = Field(ge=0, le=1)

    is_correct: Optional[bool] = None
    points_earned: Optional[int] = None

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
