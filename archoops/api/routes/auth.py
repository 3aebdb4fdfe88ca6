from typing import Literal, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from archoops.api.error import ClientError, ServerError
from archoops.api.utils.session_auth import (
    clear_session_cookie,
    require_session,
    set_session_cookie,
    subject_uuid,
)
from archoops.app.services.clock import Clock
from archoops.app.services.token_gate import TokenGate
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.app.use_cases.auth import (
    AuthResponse,
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    LoadCurrentUserUseCase,
    LoginUseCase,
    PublicUser,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResetTokenDelivery,
    SignupCommand,
    SignupUseCase,
)
from archoops.depends import (
    get_clock,
    get_reset_token_delivery,
    get_token_gate,
    get_unit_of_work,
)
from archoops.domain.identity import SessionIdentity

router = APIRouter()


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=10, description="User password (min 10 chars)")
    display_name: str = Field(..., min_length=2, max_length=100)
    role: Literal["teacher", "student"]
    class_join_code: Optional[str] = Field(
        default=None, description="Optional class code for students, 6 characters"
    )


@router.post("/auth/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    request: SignupRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_gate: TokenGate = Depends(get_token_gate),
):
    """
    User Signup

    Creates a teacher or student account, enrolls a student in the class
    behind class_join_code when it matches, and starts a session.

    Raises:
        - 409 Conflict: Email already exists
        - 400 Bad Request: Invalid role or password
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = SignupCommand(
        email=request.email,
        password=request.password,
        display_name=request.display_name,
        role=request.role,
        class_join_code=request.class_join_code or None,
    )

    result = await SignupUseCase(uow, token_gate).execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        if error.code in ("INVALID_ROLE", "INVALID_PASSWORD"):
            raise ClientError(error)
        raise ServerError(error)

    set_session_cookie(response, result.value.access_token)
    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/auth/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_gate: TokenGate = Depends(get_token_gate),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    result = await LoginUseCase(uow, token_gate).execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_session_cookie(response, result.value.access_token)
    return result.value


@router.post("/auth/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """Clears the session cookie. The token itself stays valid until it expires."""
    clear_session_cookie(response)
    return {"ok": True}


@router.get("/me", status_code=status.HTTP_200_OK, response_model=PublicUser)
async def get_me(
    identity: SessionIdentity = Depends(require_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current user

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session
        - 404 Not Found: Account deleted after the token was issued
    """
    result = await LoadCurrentUserUseCase(uow).execute(subject_uuid(identity))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/auth/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    deliver: ResetTokenDelivery = Depends(get_reset_token_delivery),
    clock: Clock = Depends(get_clock),
):
    """
    Request Password Reset

    Always answers with the same message to prevent email enumeration.
    """
    result = await RequestPasswordResetUseCase(uow, deliver=deliver, clock=clock).execute(
        request.email
    )

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Reset token")
    new_password: str = Field(..., min_length=10, description="New password (min 10 chars)")


@router.post(
    "/auth/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: INVALID_TOKEN, TOKEN_EXPIRED, TOKEN_ALREADY_USED, INVALID_PASSWORD
    """
    result = await ConfirmPasswordResetUseCase(uow, clock=clock).execute(
        request.token, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in (
            "INVALID_TOKEN",
            "TOKEN_EXPIRED",
            "TOKEN_ALREADY_USED",
            "INVALID_PASSWORD",
        ):
            raise ClientError(error)
        raise ServerError(error)

    return result.value
