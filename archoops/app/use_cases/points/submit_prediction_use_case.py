"""
Submit Prediction Use Case

Records a student's pick for a game with a stated confidence.
"""

from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.scoring_policy import InvalidConfidenceError, validate_confidence
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import Prediction
from .dtos import PredictionResponse, SubmitPredictionCommand


def to_prediction_response(prediction: Prediction) -> PredictionResponse:
    return PredictionResponse(
        id=str(prediction.id),
        game_id=prediction.game_id,
        predicted_winner=prediction.predicted_winner,
        confidence=prediction.confidence,
        is_correct=prediction.is_correct,
        points_earned=prediction.points_earned,
    )


class SubmitPredictionUseCase:
    """
    Use case for prediction submission.

    Business Rules:
    - Confidence must lie in [0, 1]; out-of-range values are rejected, not clamped
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, command: SubmitPredictionCommand) -> Result[PredictionResponse]:
        try:
            confidence = validate_confidence(command.confidence)
        except InvalidConfidenceError as exc:
            return Return.err(Error("INVALID_CONFIDENCE", str(exc)))

        async with self.uow:
            prediction = await self.uow.predictions.create(
                Prediction(
                    user_id=user_id,
                    game_id=command.game_id,
                    predicted_winner=command.predicted_winner,
                    confidence=confidence,
                )
            )
            await self.uow.commit()
            return Return.ok(to_prediction_response(prediction))
