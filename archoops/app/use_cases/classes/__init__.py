"""
Class Use Cases

Class creation, listing, deletion, join code rotation, rosters and enrollment.
"""

from .create_class_use_case import CreateClassUseCase
from .rotate_join_code_use_case import RotateJoinCodeUseCase
from .join_class_use_case import JoinClassUseCase
from .leave_class_use_case import LeaveClassUseCase
from .delete_class_use_case import DeleteClassUseCase
from .class_roster_use_case import GetClassRosterUseCase
from .list_classes_use_case import ListStudentClassesUseCase, ListTeacherClassesUseCase
from .dtos import ClassRoster, ClassSummary, RotateJoinCodeResponse, TeacherClassSummary

__all__ = [
    "CreateClassUseCase",
    "RotateJoinCodeUseCase",
    "JoinClassUseCase",
    "LeaveClassUseCase",
    "DeleteClassUseCase",
    "GetClassRosterUseCase",
    "ListTeacherClassesUseCase",
    "ListStudentClassesUseCase",
    "ClassRoster",
    "ClassSummary",
    "RotateJoinCodeResponse",
    "TeacherClassSummary",
]
