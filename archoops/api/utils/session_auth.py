"""
Session Authentication Dependencies

Every protected route depends on one of these. The token is read from the
Authorization header (Bearer) or, failing that, from the session cookie.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import ApplicationConfig
from archoops.api.error import ClientError
from archoops.app.result import Error
from archoops.app.services.token_gate import TokenGate
from archoops.depends import get_token_gate
from archoops.domain.entities import UserRole
from archoops.domain.identity import SessionIdentity

bearer_scheme = HTTPBearer(auto_error=False)


def extract_session_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)


def require_role(required_role: Optional[UserRole] = None):
    """
    Build a dependency that authenticates the request and checks its role.

    Args:
        required_role: Exact role the route demands, or None for any session

    Returns:
        FastAPI dependency resolving to the verified SessionIdentity

    Raises:
        ClientError: 401 for a missing or invalid token, 403 for a role mismatch
    """

    async def dependency(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        token_gate: TokenGate = Depends(get_token_gate),
    ) -> SessionIdentity:
        token = extract_session_token(request, credentials)
        result = token_gate.authorize(token, required_role)
        if result.is_err():
            error = result.error
            raise ClientError(error)

        request.state.identity = result.value
        return result.value

    return dependency


require_session = require_role()
require_teacher = require_role(UserRole.teacher)
require_student = require_role(UserRole.student)
require_admin = require_role(UserRole.admin)


def subject_uuid(identity: SessionIdentity) -> UUID:
    """Session subject as a UUID; a malformed subject is treated as unauthenticated"""
    try:
        return UUID(identity.subject_id)
    except ValueError:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        ) from None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
        max_age=ApplicationConfig.JWT_EXPIRY_DAYS * 24 * 60 * 60,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=ApplicationConfig.SESSION_COOKIE_NAME, path="/")
