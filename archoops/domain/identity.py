"""
Session identity carried inside a signed session token.
"""

from dataclasses import dataclass

from archoops.domain.entities.enums import UserRole


@dataclass(frozen=True)
class SessionIdentity:
    subject_id: str
    role: UserRole
