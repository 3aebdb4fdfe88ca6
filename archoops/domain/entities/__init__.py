"""
ArcHoops Domain Entities

Each entity lives in its own module.
"""

from .enums import UserRole, PointsReason

from .user import User
from .class_room import ClassRoom
from .enrollment import Enrollment
from .password_reset_token import PasswordResetToken
from .prediction import Prediction
from .points_transaction import PointsTransaction

__all__ = [
    # Enums
    "UserRole",
    "PointsReason",
    # Entities
    "User",
    "ClassRoom",
    "Enrollment",
    "PasswordResetToken",
    "Prediction",
    "PointsTransaction",
]
