"""
Score Prediction Use Case

Resolves a prediction and awards points through the scoring policy.
"""

import logging
from uuid import UUID

from archoops.app.repositories.points_transaction_repository import DuplicatePointsAwardError
from archoops.app.result import Error, Result, Return
from archoops.app.services.scoring_policy import (
    DEFAULT_SCORING_POLICY,
    InvalidConfidenceError,
    PredictionOutcome,
    ScoringPolicy,
)
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import PointsReason, PointsTransaction
from .dtos import ScorePredictionResponse

logger = logging.getLogger(__name__)

ALREADY_SCORED = Error("ALREADY_SCORED", "Prediction has already been scored")


class ScorePredictionUseCase:
    """
    Use case for scoring a prediction.

    Business Rules:
    - A prediction is scored once; a second attempt is ALREADY_SCORED,
      including one racing the first
    - Points come only from the injected ScoringPolicy
    - The award is written to the prediction and to the points ledger
      in the same transaction
    """

    def __init__(self, uow: UnitOfWork, policy: ScoringPolicy = DEFAULT_SCORING_POLICY):
        self.uow = uow
        self.policy = policy

    async def execute(self, prediction_id: UUID, is_correct: bool) -> Result[ScorePredictionResponse]:
        async with self.uow:
            prediction = await self.uow.predictions.get_by_id(prediction_id)
            if prediction is None:
                return Return.err(Error("PREDICTION_NOT_FOUND", "Prediction not found"))

            if prediction.points_earned is not None:
                return Return.err(ALREADY_SCORED)

            outcome = PredictionOutcome(
                is_correct=is_correct,
                confidence=prediction.confidence,
                prediction_id=str(prediction.id),
            )
            try:
                points = self.policy.score(outcome)
            except InvalidConfidenceError as exc:
                return Return.err(Error("INVALID_CONFIDENCE", str(exc)))

            scored = await self.uow.predictions.record_score_if_unscored(
                prediction, is_correct, points
            )
            if not scored:
                logger.info(f"Prediction {prediction.id} was scored by a concurrent request")
                return Return.err(ALREADY_SCORED)

            try:
                await self.uow.points_transactions.create(
                    PointsTransaction(
                        user_id=prediction.user_id,
                        prediction_id=prediction.id,
                        points=points,
                        reason=PointsReason.prediction,
                    )
                )
            except DuplicatePointsAwardError:
                return Return.err(ALREADY_SCORED)

            await self.uow.commit()
            logger.info(f"Scored prediction {prediction.id}: {points} points ({self.policy.name})")

            return Return.ok(
                ScorePredictionResponse(
                    prediction_id=str(prediction.id),
                    user_id=str(prediction.user_id),
                    is_correct=is_correct,
                    confidence=prediction.confidence,
                    points=points,
                    policy=self.policy.name,
                )
            )
