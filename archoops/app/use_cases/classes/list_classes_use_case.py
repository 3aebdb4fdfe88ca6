"""
List Classes Use Cases

Classes a teacher owns and classes a student is enrolled in.
"""

from typing import List
from uuid import UUID

from archoops.app.result import Result, Return
from archoops.app.services.unit_of_work import UnitOfWork
from .class_summary import to_class_summary
from .dtos import ClassSummary, TeacherClassSummary


class ListTeacherClassesUseCase:
    """Classes owned by a teacher with their enrollment counts, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, teacher_id: UUID) -> Result[List[TeacherClassSummary]]:
        async with self.uow:
            classes = await self.uow.classes.list_by_teacher(teacher_id)
            summaries = []
            for class_room in classes:
                student_count = await self.uow.enrollments.count_by_class(class_room.id)
                summaries.append(
                    TeacherClassSummary(
                        **to_class_summary(class_room).model_dump(),
                        student_count=student_count,
                    )
                )
            return Return.ok(summaries)


class ListStudentClassesUseCase:
    """Classes a student is enrolled in, most recently joined first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, student_id: UUID) -> Result[List[ClassSummary]]:
        async with self.uow:
            classes = await self.uow.enrollments.list_classes_for_user(student_id)
            return Return.ok([to_class_summary(class_room) for class_room in classes])
