"""
Points Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class SubmitPredictionCommand(BaseModel):
    """Validated intent to record a prediction"""

    game_id: str
    predicted_winner: str
    confidence: float


class AdjustPointsCommand(BaseModel):
    """Manual points correction made by an admin"""

    user_id: str
    points: int
    description: Optional[str] = None


class PredictionResponse(BaseModel):
    """Prediction as returned to clients"""

    id: str
    game_id: str
    predicted_winner: str
    confidence: float
    is_correct: Optional[bool] = None
    points_earned: Optional[int] = None


class ScorePredictionResponse(BaseModel):
    """Response for scoring a prediction"""

    prediction_id: str
    user_id: str
    is_correct: bool
    confidence: float
    points: int
    policy: str


class PointsTransactionResponse(BaseModel):
    """One entry of the points ledger"""

    id: str
    user_id: str
    prediction_id: Optional[str] = None
    points: int
    reason: str
    description: Optional[str] = None
    created_at: datetime


class PointsSummaryResponse(BaseModel):
    """Running totals for a user"""

    user_id: str
    total_points: int
    scored_predictions: int
    correct_predictions: int
    accuracy_percentage: float
    current_streak: int
    best_streak: int


class LeaderboardEntry(PointsSummaryResponse):
    display_name: str


class ClassLeaderboard(BaseModel):
    """Enrolled students of a class ranked by total points"""

    class_id: str
    entries: List[LeaderboardEntry]
    generated_at: datetime
