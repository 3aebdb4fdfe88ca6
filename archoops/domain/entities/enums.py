"""
ArcHoops Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried by a user record and by their session token"""

    teacher = "teacher"
    student = "student"
    admin = "admin"


class PointsReason(str, Enum):
    """Why a points transaction was created"""

    prediction = "prediction"
    adjustment = "adjustment"
