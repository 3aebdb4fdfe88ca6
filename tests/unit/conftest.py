import pytest
from unittest.mock import AsyncMock, MagicMock


def _set_password_hash(user, password_hash):
    user.password_hash = password_hash
    return user


def _record_score(prediction, is_correct, points):
    prediction.is_correct = is_correct
    prediction.points_earned = points
    return True


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.set_password_hash = AsyncMock(side_effect=_set_password_hash)

    uow.classes = MagicMock()
    uow.classes.get_by_id = AsyncMock(return_value=None)
    uow.classes.get_by_join_code = AsyncMock(return_value=None)
    uow.classes.create = AsyncMock(side_effect=lambda class_room: class_room)
    uow.classes.update_join_code = AsyncMock()
    uow.classes.list_by_teacher = AsyncMock(return_value=[])
    uow.classes.delete = AsyncMock()

    uow.enrollments = MagicMock()
    uow.enrollments.get_by_user_and_class = AsyncMock(return_value=None)
    uow.enrollments.create = AsyncMock(side_effect=lambda enrollment: enrollment)
    uow.enrollments.delete = AsyncMock()
    uow.enrollments.delete_by_class = AsyncMock(return_value=0)
    uow.enrollments.count_by_class = AsyncMock(return_value=0)
    uow.enrollments.list_classes_for_user = AsyncMock(return_value=[])
    uow.enrollments.list_roster = AsyncMock(return_value=[])

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.mark_used_if_unused = AsyncMock(return_value=True)

    uow.predictions = MagicMock()
    uow.predictions.get_by_id = AsyncMock(return_value=None)
    uow.predictions.get_scored_by_user_id = AsyncMock(return_value=[])
    uow.predictions.create = AsyncMock(side_effect=lambda prediction: prediction)
    uow.predictions.record_score_if_unscored = AsyncMock(side_effect=_record_score)

    uow.points_transactions = MagicMock()
    uow.points_transactions.create = AsyncMock(side_effect=lambda transaction: transaction)
    uow.points_transactions.total_for_user = AsyncMock(return_value=0)
    return uow
