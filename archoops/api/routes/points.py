from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from archoops.api.error import ClientError, ServerError
from archoops.api.utils.session_auth import (
    require_admin,
    require_session,
    require_student,
    subject_uuid,
)
from archoops.app.services.clock import Clock
from archoops.app.services.scoring_policy import ScoringPolicy
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.app.use_cases.points import (
    AdjustPointsCommand,
    AdjustPointsUseCase,
    ClassLeaderboard,
    GetClassLeaderboardUseCase,
    GetPointsSummaryUseCase,
    PointsSummaryResponse,
    PointsTransactionResponse,
    PredictionResponse,
    ScorePredictionResponse,
    ScorePredictionUseCase,
    SubmitPredictionCommand,
    SubmitPredictionUseCase,
)
from archoops.depends import get_clock, get_scoring_policy, get_unit_of_work
from archoops.domain.identity import SessionIdentity

router = APIRouter()


class SubmitPredictionRequest(BaseModel):
    game_id: str = Field(..., min_length=1, max_length=64)
    predicted_winner: str = Field(..., min_length=1, max_length=10, description="Team abbreviation")
    confidence: float = Field(..., description="Stated confidence in [0, 1]")


@router.post("/predictions", status_code=status.HTTP_201_CREATED, response_model=PredictionResponse)
async def submit_prediction(
    request: SubmitPredictionRequest,
    identity: SessionIdentity = Depends(require_student),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Submit Prediction (student only)

    Raises:
        - 400 Bad Request: INVALID_CONFIDENCE
    """
    command = SubmitPredictionCommand(
        game_id=request.game_id,
        predicted_winner=request.predicted_winner,
        confidence=request.confidence,
    )
    result = await SubmitPredictionUseCase(uow).execute(subject_uuid(identity), command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CONFIDENCE":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


class ScorePredictionRequest(BaseModel):
    is_correct: bool


@router.post(
    "/scoring/prediction/{prediction_id}",
    status_code=status.HTTP_200_OK,
    response_model=ScorePredictionResponse,
)
async def score_prediction(
    prediction_id: UUID,
    request: ScorePredictionRequest,
    identity: SessionIdentity = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    """
    Score Prediction (admin only)

    Raises:
        - 404 Not Found: PREDICTION_NOT_FOUND
        - 409 Conflict: ALREADY_SCORED
        - 400 Bad Request: INVALID_CONFIDENCE
    """
    result = await ScorePredictionUseCase(uow, policy=policy).execute(
        prediction_id, request.is_correct
    )

    if result.is_err():
        error = result.error
        if error.code == "PREDICTION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "ALREADY_SCORED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        if error.code == "INVALID_CONFIDENCE":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.get("/points/me", status_code=status.HTTP_200_OK, response_model=PointsSummaryResponse)
async def get_my_points(
    identity: SessionIdentity = Depends(require_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Points summary for the current user"""
    result = await GetPointsSummaryUseCase(uow).execute(subject_uuid(identity))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/predictions/leaderboard/{class_id}",
    status_code=status.HTTP_200_OK,
    response_model=ClassLeaderboard,
)
async def get_class_leaderboard(
    class_id: UUID,
    identity: SessionIdentity = Depends(require_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Class Leaderboard (owning teacher or enrolled student)

    Raises:
        - 403 Forbidden: no access to this class
    """
    result = await GetClassLeaderboardUseCase(uow, clock=clock).execute(
        identity, subject_uuid(identity), class_id
    )

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


class AdjustPointsRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    points: int = Field(..., description="Points to add; negative to deduct")
    description: Optional[str] = Field(default=None, max_length=255)


@router.post(
    "/admin/points/adjust",
    status_code=status.HTTP_201_CREATED,
    response_model=PointsTransactionResponse,
)
async def adjust_points(
    request: AdjustPointsRequest,
    identity: SessionIdentity = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Adjust Points (admin only)

    Raises:
        - 400 Bad Request: INVALID_POINTS
        - 404 Not Found: USER_NOT_FOUND
    """
    command = AdjustPointsCommand(
        user_id=request.user_id,
        points=request.points,
        description=request.description,
    )
    result = await AdjustPointsUseCase(uow).execute(command)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "INVALID_POINTS":
            raise ClientError(error)
        raise ServerError(error)

    return result.value
