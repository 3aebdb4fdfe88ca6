"""
Create Class Use Case

Creates a class for a teacher with a freshly allocated join code.
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
from archoops.domain.entities import ClassRoom
from .class_summary import to_class_summary
from .dtos import ClassSummary


class CreateClassUseCase:
    """
    Use case for class creation.

    Business Rules:
    - Join code is 6 characters from [A-Z0-9], unique among live classes
    - A concurrent insert of the same code is retried with a new code
    - ALLOCATION_EXHAUSTED when the retry budget runs out
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

    async def execute(self, teacher_id: UUID, name: str) -> Result[ClassSummary]:
        async with self.uow:
            allocator = JoinCodeAllocator(
                self.uow.classes,
                code_factory=self.code_factory,
                max_attempts=self.max_attempts,
            )

            async def insert_class(join_code: str) -> ClassRoom:
                return await self.uow.classes.create(
                    ClassRoom(name=name, teacher_id=teacher_id, join_code=join_code)
                )

            try:
                class_room = await allocator.claim(insert_class)
            except JoinCodeAllocationExhausted as exc:
                return Return.err(Error("ALLOCATION_EXHAUSTED", str(exc)))

            await self.uow.commit()
            return Return.ok(to_class_summary(class_room))
