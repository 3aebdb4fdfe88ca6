from typing import List, Tuple
from uuid import UUID

from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import Prediction
from .dtos import PointsSummaryResponse


def streaks(predictions: List[Prediction]) -> Tuple[int, int]:
    """(current, best) runs of correct predictions, oldest first input"""
    best = current = 0
    for prediction in predictions:
        if prediction.is_correct:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return current, best


async def build_points_summary(uow: UnitOfWork, user_id: UUID) -> PointsSummaryResponse:
    """
    Derive a user's totals on read.

    total_points comes from the points ledger, so it includes manual
    adjustments; accuracy and streaks come from scored predictions only.
    """
    total_points = await uow.points_transactions.total_for_user(user_id)
    scored = await uow.predictions.get_scored_by_user_id(user_id)

    correct = sum(1 for p in scored if p.is_correct)
    accuracy = round(correct / len(scored) * 100, 2) if scored else 0.0
    current_streak, best_streak = streaks(scored)

    return PointsSummaryResponse(
        user_id=str(user_id),
        total_points=total_points,
        scored_predictions=len(scored),
        correct_predictions=correct,
        accuracy_percentage=accuracy,
        current_streak=current_streak,
        best_streak=best_streak,
    )
