"""
Rotate Join Code Use Case

Replaces a class's join code, for example after it leaked.
"""

from typing import Callable
from uuid import UUID

from archoops.app.result import Error, Result, Return
from archoops.app.services.join_code_allocator import (
    DEFAULT_MAX_ATTEMPTS,
    JoinCodeAllocationExhausted,
    JoinCodeAllocator,
    generate_join_code,
)
from archoops.app.services.unit_of_work import UnitOfWork
from .class_summary import class_not_found, find_owned_class
from .dtos import RotateJoinCodeResponse


class RotateJoinCodeUseCase:
    """
    Use case for join code rotation.

    Business Rules:
    - Only the teacher who owns the class may rotate its code
    - Other teachers get CLASS_NOT_FOUND so class IDs are not disclosed
    - The old code stops working immediately
    """

    def __init__(
        self,
        uow: UnitOfWork,
        code_factory: Callable[[], str] = generate_join_code,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.code_factory = code_factory
        self.max_attempts = max_attempts

    async def execute(self, teacher_id: UUID, class_id: UUID) -> Result[RotateJoinCodeResponse]:
        async with self.uow:
            class_room = await find_owned_class(self.uow, teacher_id, class_id)
            if class_room is None:
                return Return.err(class_not_found("modify"))

            allocator = JoinCodeAllocator(
                self.uow.classes,
                code_factory=self.code_factory,
                max_attempts=self.max_attempts,
            )

            async def replace_code(join_code: str):
                return await self.uow.classes.update_join_code(class_room, join_code)

            try:
                class_room = await allocator.claim(replace_code)
            except JoinCodeAllocationExhausted as exc:
                return Return.err(Error("ALLOCATION_EXHAUSTED", str(exc)))

            await self.uow.commit()
            return Return.ok(RotateJoinCodeResponse(join_code=class_room.join_code))
