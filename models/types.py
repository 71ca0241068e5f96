# models/types.py

"""
Holds TypeVar definitions for simplifying type checks.
"""

from typing import TypeVar

from .attendance import Attendance
from .grade import Grade
from .lesson_plan import LessonPlan
from .student import Student
from .teacher import Teacher

RecordType = TypeVar("RecordType", Attendance, Grade, LessonPlan, Student, Teacher)

# records that carry their own id and can be updated or deleted by it
IdentifiedRecord = TypeVar("IdentifiedRecord", Grade, LessonPlan, Student, Teacher)
