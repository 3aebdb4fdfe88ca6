from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from archoops.domain.entities import ClassRoom, Enrollment, User


class DuplicateEnrollmentError(Exception):
    """Raised when an insert collides on the (user, class) unique constraint"""

    def __init__(self, user_id: UUID, class_id: UUID):
        self.user_id = user_id
        self.class_id = class_id
        super().__init__(f"User {user_id} is already enrolled in class {class_id}")


class IEnrollmentRepository(ABC):
    """Enrollment repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_class(
        self, user_id: UUID, class_id: UUID
    ) -> Optional[Enrollment]:
        """Get enrollment of a user in a class"""
        pass

    @abstractmethod
    async def create(self, enrollment: Enrollment) -> Enrollment:
        """Create a new enrollment. Raises DuplicateEnrollmentError when it already exists."""
        pass

    @abstractmethod
    async def delete(self, enrollment: Enrollment) -> None:
        """Remove one enrollment"""
        pass

    @abstractmethod
    async def delete_by_class(self, class_id: UUID) -> int:
        """Remove every enrollment of a class, returning how many were removed"""
        pass

    @abstractmethod
    async def count_by_class(self, class_id: UUID) -> int:
        """Number of students enrolled in a class"""
        pass

    @abstractmethod
    async def list_classes_for_user(self, user_id: UUID) -> List[ClassRoom]:
        """Classes a user is enrolled in, most recently joined first"""
        pass

    @abstractmethod
    async def list_roster(self, class_id: UUID) -> List[Tuple[Enrollment, User]]:
        """Enrollments of a class with their students, most recently joined first"""
        pass
