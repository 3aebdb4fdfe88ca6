from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from archoops.domain.entities import User


class DuplicateEmailError(Exception):
    """Raised when an insert collides on the email unique index"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address, case-insensitive"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEmailError when the email is taken."""
        pass

    @abstractmethod
    async def set_password_hash(self, user: User, password_hash: str) -> User:
        """Replace the stored password hash"""
        pass
