from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from archoops.domain.entities import ClassRoom


class DuplicateJoinCodeError(Exception):
    """Raised when an insert or update collides on the join_code unique index"""

    def __init__(self, join_code: str):
        self.join_code = join_code
        super().__init__(f"Join code already in use: {join_code}")


class IClassRepository(ABC):
    """ClassRoom repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, class_id: UUID) -> Optional[ClassRoom]:
        """Get class by ID"""
        pass

    @abstractmethod
    async def get_by_join_code(self, join_code: str) -> Optional[ClassRoom]:
        """Get live class by join code"""
        pass

    @abstractmethod
    async def create(self, class_room: ClassRoom) -> ClassRoom:
        """Create a new class. Raises DuplicateJoinCodeError on code collision."""
        pass

    @abstractmethod
    async def update_join_code(self, class_room: ClassRoom, join_code: str) -> ClassRoom:
        """Replace the join code of a class. Raises DuplicateJoinCodeError on code collision."""
        pass

    @abstractmethod
    async def list_by_teacher(self, teacher_id: UUID) -> List[ClassRoom]:
        """Classes owned by a teacher, newest first"""
        pass

    @abstractmethod
    async def delete(self, class_room: ClassRoom) -> None:
        """Delete a class; its join code becomes free for reuse"""
        pass
