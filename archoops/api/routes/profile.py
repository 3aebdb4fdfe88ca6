from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from archoops.api.error import ClientError, ServerError
from archoops.api.utils.session_auth import require_session, subject_uuid
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.app.use_cases.auth import ChangePasswordResponse, ChangePasswordUseCase
from archoops.depends import get_unit_of_work
from archoops.domain.identity import SessionIdentity

router = APIRouter(prefix="/profile")


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., min_length=10, description="New password (min 10 chars)")


@router.put("/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse)
async def change_password(
    request: ChangePasswordRequest,
    identity: SessionIdentity = Depends(require_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password

    Raises:
        - 400 Bad Request: INVALID_CURRENT_PASSWORD, INVALID_PASSWORD
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await ChangePasswordUseCase(uow).execute(
        subject_uuid(identity), request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CURRENT_PASSWORD", "INVALID_PASSWORD"):
            raise ClientError(error)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
