"""
Adjust Points Use Case

Manual corrections to a user's points, made by an admin.
"""

import logging
from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import PointsReason, PointsTransaction
from .dtos import AdjustPointsCommand, PointsTransactionResponse

logger = logging.getLogger(__name__)


def to_transaction_response(transaction: PointsTransaction) -> PointsTransactionResponse:
    return PointsTransactionResponse(
        id=str(transaction.id),
        user_id=str(transaction.user_id),
        prediction_id=str(transaction.prediction_id) if transaction.prediction_id else None,
        points=transaction.points,
        reason=transaction.reason.value,
        description=transaction.description,
        created_at=transaction.created_at,
    )


class AdjustPointsUseCase:
    """
    Use case for points adjustments.

    Business Rules:
    - The adjustment is a ledger entry with reason "adjustment" and no prediction
    - Points may be negative but not zero
    - Predictions, accuracy and streaks are untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: AdjustPointsCommand) -> Result[PointsTransactionResponse]:
        if command.points == 0:
            return Return.err(Error("INVALID_POINTS", "Adjustment must be a non-zero number of points"))

        try:
            user_id = UUID(command.user_id)
        except ValueError:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            transaction = await self.uow.points_transactions.create(
                PointsTransaction(
                    user_id=user.id,
                    points=command.points,
                    reason=PointsReason.adjustment,
                    description=command.description,
                )
            )
            await self.uow.commit()
            logger.info(f"Adjusted points of user {user.id} by {command.points}")

            return Return.ok(to_transaction_response(transaction))
