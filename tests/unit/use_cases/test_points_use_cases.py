"""
Unit tests for prediction submission, scoring, adjustments, summaries and leaderboards
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from archoops.app.repositories.points_transaction_repository import DuplicatePointsAwardError
from archoops.app.use_cases.points import (
    AdjustPointsCommand,
    AdjustPointsUseCase,
    GetClassLeaderboardUseCase,
    GetPointsSummaryUseCase,
    ScorePredictionUseCase,
    SubmitPredictionCommand,
    SubmitPredictionUseCase,
)
from archoops.domain.entities import ClassRoom, Enrollment, PointsReason, Prediction, User, UserRole
from archoops.domain.identity import SessionIdentity
from tests.unit.fakes import FakeClock


def _prediction(confidence=0.75, **overrides) -> Prediction:
    data = {
        "id": uuid4(),
        "user_id": uuid4(),
        "game_id": "game-42",
        "predicted_winner": "home",
        "confidence": confidence,
    }
    data.update(overrides)
    return Prediction(**data)


class DoublePointsPolicy:
    name = "double_test"

    def score(self, outcome):
        return 40 if outcome.is_correct else 0


@pytest.mark.asyncio
async def test_submit_prediction(mock_uow):
    user_id = uuid4()
    command = SubmitPredictionCommand(game_id="game-1", predicted_winner="away", confidence=0.6)

    result = await SubmitPredictionUseCase(mock_uow).execute(user_id, command)

    assert result.is_ok()
    assert result.value.confidence == 0.6
    assert result.value.points_earned is None
    created = mock_uow.predictions.create.call_args[0][0]
    assert created.user_id == user_id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("confidence", [-0.01, 1.5, float("nan")])
async def test_submit_prediction_rejects_out_of_range_confidence(mock_uow, confidence):
    command = SubmitPredictionCommand(game_id="game-1", predicted_winner="away", confidence=confidence)

    result = await SubmitPredictionUseCase(mock_uow).execute(uuid4(), command)

    assert result.is_err()
    assert result.error.code == "INVALID_CONFIDENCE"
    mock_uow.predictions.create.assert_not_called()


@pytest.mark.asyncio
async def test_score_correct_prediction_with_default_policy(mock_uow):
    prediction = _prediction(confidence=0.75)
    mock_uow.predictions.get_by_id.return_value = prediction

    result = await ScorePredictionUseCase(mock_uow).execute(prediction.id, True)

    assert result.is_ok()
    assert result.value.points == 18
    assert result.value.policy == "linear_v1"
    assert prediction.is_correct is True
    assert prediction.points_earned == 18

    transaction = mock_uow.points_transactions.create.call_args[0][0]
    assert transaction.user_id == prediction.user_id
    assert transaction.prediction_id == prediction.id
    assert transaction.points == 18
    assert transaction.reason == PointsReason.prediction
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_score_incorrect_prediction_awards_zero(mock_uow):
    prediction = _prediction(confidence=0.95)
    mock_uow.predictions.get_by_id.return_value = prediction

    result = await ScorePredictionUseCase(mock_uow).execute(prediction.id, False)

    assert result.is_ok()
    assert result.value.points == 0
    assert prediction.points_earned == 0


@pytest.mark.asyncio
async def test_score_uses_injected_policy(mock_uow):
    prediction = _prediction()
    mock_uow.predictions.get_by_id.return_value = prediction

    result = await ScorePredictionUseCase(mock_uow, policy=DoublePointsPolicy()).execute(
        prediction.id, True
    )

    assert result.value.points == 40
    assert result.value.policy == "double_test"


@pytest.mark.asyncio
async def test_score_prediction_twice(mock_uow):
    prediction = _prediction(is_correct=True, points_earned=18)
    mock_uow.predictions.get_by_id.return_value = prediction

    result = await ScorePredictionUseCase(mock_uow).execute(prediction.id, False)

    assert result.is_err()
    assert result.error.code == "ALREADY_SCORED"
    assert prediction.points_earned == 18
    mock_uow.points_transactions.create.assert_not_called()


@pytest.mark.asyncio
async def test_score_missing_prediction(mock_uow):
    result = await ScorePredictionUseCase(mock_uow).execute(uuid4(), True)

    assert result.is_err()
    assert result.error.code == "PREDICTION_NOT_FOUND"


@pytest.mark.asyncio
async def test_score_stored_out_of_range_confidence_is_rejected(mock_uow):
    prediction = _prediction(confidence=1.2)
    mock_uow.predictions.get_by_id.return_value = prediction

    result = await ScorePredictionUseCase(mock_uow).execute(prediction.id, False)

    assert result.is_err()
    assert result.error.code == "INVALID_CONFIDENCE"
    assert prediction.points_earned is None
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_points_summary(mock_uow):
    user_id = uuid4()
    start = datetime(2025, 1, 1)
    outcomes = [True, True, True, False, True, True]
    scored = [
        _prediction(
            user_id=user_id,
            is_correct=correct,
            points_earned=15 if correct else 0,
            created_at=start + timedelta(days=i),
        )
        for i, correct in enumerate(outcomes)
    ]
    mock_uow.predictions.get_scored_by_user_id.return_value = scored
    mock_uow.points_transactions.total_for_user.return_value = 75

    result = await GetPointsSummaryUseCase(mock_uow).execute(user_id)

    assert result.is_ok()
    summary = result.value
    assert summary.total_points == 75
    assert summary.scored_predictions == 6
    assert summary.correct_predictions == 5
    assert summary.accuracy_percentage == 83.33
    assert summary.current_streak == 2
    assert summary.best_streak == 3


@pytest.mark.asyncio
async def test_points_summary_without_predictions(mock_uow):
    result = await GetPointsSummaryUseCase(mock_uow).execute(uuid4())

    assert result.is_ok()
    assert result.value.total_points == 0
    assert result.value.accuracy_percentage == 0.0
    assert result.value.current_streak == 0


@pytest.mark.asyncio
async def test_score_lost_to_concurrent_scorer(mock_uow):
    prediction = _prediction()
    mock_uow.predictions.get_by_id.return_value = prediction
    mock_uow.predictions.record_score_if_unscored.side_effect = None
    mock_uow.predictions.record_score_if_unscored.return_value = False

    result = await ScorePredictionUseCase(mock_uow).execute(prediction.id, True)

    assert result.is_err()
    assert result.error.code == "ALREADY_SCORED"
    mock_uow.points_transactions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_score_with_existing_award_in_ledger(mock_uow):
    prediction = _prediction()
    mock_uow.predictions.get_by_id.return_value = prediction
    mock_uow.points_transactions.create.side_effect = DuplicatePointsAwardError(prediction.id)

    result = await ScorePredictionUseCase(mock_uow).execute(prediction.id, True)

    assert result.is_err()
    assert result.error.code == "ALREADY_SCORED"
    mock_uow.commit.assert_not_called()


def _user(name: str, role=UserRole.student) -> User:
    return User(
        id=uuid4(),
        email=f"{name}@example.com",
        password_hash="hash",
        display_name=name,
        role=role,
    )


@pytest.mark.asyncio
async def test_adjust_points(mock_uow):
    user = _user("student")
    mock_uow.users.get_by_id.return_value = user
    command = AdjustPointsCommand(user_id=str(user.id), points=-5, description="Late submission")

    result = await AdjustPointsUseCase(mock_uow).execute(command)

    assert result.is_ok()
    assert result.value.points == -5
    assert result.value.reason == "adjustment"
    assert result.value.prediction_id is None
    transaction = mock_uow.points_transactions.create.call_args[0][0]
    assert transaction.reason == PointsReason.adjustment
    assert transaction.description == "Late submission"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_adjust_points_rejects_zero(mock_uow):
    result = await AdjustPointsUseCase(mock_uow).execute(
        AdjustPointsCommand(user_id=str(uuid4()), points=0)
    )

    assert result.is_err()
    assert result.error.code == "INVALID_POINTS"
    mock_uow.points_transactions.create.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [str(uuid4()), "not-a-uuid"])
async def test_adjust_points_unknown_user(mock_uow, user_id):
    result = await AdjustPointsUseCase(mock_uow).execute(AdjustPointsCommand(user_id=user_id, points=3))

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.fixture
def leaderboard_class(mock_uow):
    teacher_id = uuid4()
    class_room = ClassRoom(id=uuid4(), name="Period 1", teacher_id=teacher_id, join_code="LEAD01")
    ana, ben, cal = _user("Ana"), _user("Ben"), _user("Cal")
    totals = {ana.id: 30, ben.id: 45, cal.id: 30}
    scored = {
        ana.id: [_prediction(user_id=ana.id, is_correct=True, points_earned=15)] * 2,
        ben.id: [_prediction(user_id=ben.id, is_correct=False, points_earned=0)],
        cal.id: [],
    }

    async def total_for_user(user_id):
        return totals[user_id]

    async def get_scored_by_user_id(user_id):
        return scored[user_id]

    mock_uow.classes.get_by_id.return_value = class_room
    mock_uow.enrollments.list_roster.return_value = [
        (Enrollment(user_id=user.id, class_id=class_room.id), user) for user in (cal, ben, ana)
    ]
    mock_uow.points_transactions.total_for_user.side_effect = total_for_user
    mock_uow.predictions.get_scored_by_user_id.side_effect = get_scored_by_user_id
    return class_room


@pytest.mark.asyncio
async def test_leaderboard_for_owning_teacher(mock_uow, leaderboard_class):
    teacher_id = leaderboard_class.teacher_id
    identity = SessionIdentity(subject_id=str(teacher_id), role=UserRole.teacher)
    clock = FakeClock(datetime(2025, 3, 1, 12, 0, 0))

    result = await GetClassLeaderboardUseCase(mock_uow, clock=clock).execute(
        identity, teacher_id, leaderboard_class.id
    )

    assert result.is_ok()
    board = result.value
    assert board.class_id == str(leaderboard_class.id)
    assert board.generated_at == clock.now
    assert [e.display_name for e in board.entries] == ["Ben", "Ana", "Cal"]
    assert [e.total_points for e in board.entries] == [45, 30, 30]
    ana = board.entries[1]
    assert ana.correct_predictions == 2
    assert ana.accuracy_percentage == 100.0
    assert ana.current_streak == 2


@pytest.mark.asyncio
async def test_leaderboard_for_enrolled_student(mock_uow, leaderboard_class):
    student_id = uuid4()
    identity = SessionIdentity(subject_id=str(student_id), role=UserRole.student)
    mock_uow.enrollments.get_by_user_and_class.return_value = Enrollment(
        user_id=student_id, class_id=leaderboard_class.id
    )

    result = await GetClassLeaderboardUseCase(mock_uow).execute(
        identity, student_id, leaderboard_class.id
    )

    assert result.is_ok()
    assert len(result.value.entries) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.teacher, UserRole.student, UserRole.admin])
async def test_leaderboard_forbidden_without_access(mock_uow, leaderboard_class, role):
    outsider_id = uuid4()
    identity = SessionIdentity(subject_id=str(outsider_id), role=role)

    result = await GetClassLeaderboardUseCase(mock_uow).execute(
        identity, outsider_id, leaderboard_class.id
    )

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.enrollments.list_roster.assert_not_called()


@pytest.mark.asyncio
async def test_leaderboard_for_missing_class(mock_uow):
    teacher_id = uuid4()
    identity = SessionIdentity(subject_id=str(teacher_id), role=UserRole.teacher)

    result = await GetClassLeaderboardUseCase(mock_uow).execute(identity, teacher_id, uuid4())

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
