"""
Authentication Use Cases

Signup, login, current user, password change and password reset.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .load_current_user_use_case import LoadCurrentUserUseCase
from .request_password_reset_use_case import (
    RequestPasswordResetUseCase,
    ResetTokenDelivery,
    log_reset_token,
)
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import (
    SignupCommand,
    PublicUser,
    AuthResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
    ChangePasswordResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "LoadCurrentUserUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "ChangePasswordUseCase",
    # Delivery
    "ResetTokenDelivery",
    "log_reset_token",
    # DTOs
    "SignupCommand",
    "PublicUser",
    "AuthResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
    "ChangePasswordResponse",
]
