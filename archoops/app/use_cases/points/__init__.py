"""
Points Use Cases

Prediction submission, scoring, adjustments, summaries and leaderboards.
"""

from .submit_prediction_use_case import SubmitPredictionUseCase
from .score_prediction_use_case import ScorePredictionUseCase
from .adjust_points_use_case import AdjustPointsUseCase
from .get_points_summary_use_case import GetPointsSummaryUseCase
from .class_leaderboard_use_case import GetClassLeaderboardUseCase
from .dtos import (
    SubmitPredictionCommand,
    AdjustPointsCommand,
    PredictionResponse,
    ScorePredictionResponse,
    PointsTransactionResponse,
    PointsSummaryResponse,
    ClassLeaderboard,
)

__all__ = [
    "SubmitPredictionUseCase",
    "ScorePredictionUseCase",
    "AdjustPointsUseCase",
    "GetPointsSummaryUseCase",
    "GetClassLeaderboardUseCase",
    "SubmitPredictionCommand",
    "AdjustPointsCommand",
    "PredictionResponse",
    "ScorePredictionResponse",
    "PointsTransactionResponse",
    "PointsSummaryResponse",
    "ClassLeaderboard",
]
