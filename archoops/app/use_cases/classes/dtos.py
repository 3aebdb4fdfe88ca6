"""
Class Use Case DTOs
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel


class ClassSummary(BaseModel):
    """Class fields returned to teachers and enrolled students"""

    id: str
    name: str
    join_code: str
    created_at: datetime


class TeacherClassSummary(ClassSummary):
    """Class as listed for its teacher"""

    student_count: int


class RotateJoinCodeResponse(BaseModel):
    """Response for join code rotation"""

    join_code: str


class RosterStudent(BaseModel):
    id: str
    display_name: str
    email: str
    joined_at: datetime


class ClassRoster(BaseModel):
    """Students enrolled in a class, most recently joined first"""

    id: str
    name: str
    join_code: str
    students: List[RosterStudent]
