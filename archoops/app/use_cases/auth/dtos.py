"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """Validated intent to create an account"""

    email: str
    password: str
    display_name: str
    role: str
    class_join_code: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PublicUser(BaseModel):
    """User fields safe to return to clients"""

    id: str
    email: str
    display_name: str
    role: str


class AuthResponse(BaseModel):
    """Response for signup and login use cases"""

    user: PublicUser
    access_token: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
