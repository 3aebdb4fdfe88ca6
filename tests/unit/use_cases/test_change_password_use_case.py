"""
Unit tests for ChangePasswordUseCase
"""
from uuid import uuid4

import pytest

from archoops.app.use_cases.auth import ChangePasswordUseCase
from archoops.app.use_cases.auth.passwords import hash_password, verify_password
from archoops.domain.entities import User, UserRole

CURRENT_PASSWORD = "CurrentPass123"
NEW_PASSWORD = "FreshPassword456"


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        email="teacher@example.com",
        password_hash=hash_password(CURRENT_PASSWORD),
        display_name="Teacher",
        role=UserRole.teacher,
    )


@pytest.mark.asyncio
async def test_change_password(mock_uow, user):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, CURRENT_PASSWORD, NEW_PASSWORD)

    assert result.is_ok()
    assert result.value.status == "success"
    assert verify_password(NEW_PASSWORD, user.password_hash)
    assert not verify_password(CURRENT_PASSWORD, user.password_hash)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_wrong_current_password(mock_uow, user):
    old_hash = user.password_hash
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, "NotMyPassword1", NEW_PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_CURRENT_PASSWORD"
    assert user.password_hash == old_hash
    mock_uow.users.set_password_hash.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_weak_new_password(mock_uow, user):
    result = await ChangePasswordUseCase(mock_uow).execute(user.id, CURRENT_PASSWORD, "short")

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_deleted_account(mock_uow):
    result = await ChangePasswordUseCase(mock_uow).execute(uuid4(), CURRENT_PASSWORD, NEW_PASSWORD)

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
