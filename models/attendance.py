# models/attendance.py

"""
Represents one student's attendance at one lesson.

Attendance has no independent id: the (student_id, lesson_plan_id) pair is its identity,
and at most one record per pair is kept in a collection.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.utils import validate_text_input


class AttendanceStatus(str, Enum):
    PRESENT = "P"
    ABSENT = "F"


class Attendance:

    def __init__(
        self,
        student_id: str,
        lesson_plan_id: str,
        status: AttendanceStatus | str,
    ):
        self._student_id: str = validate_text_input(student_id, "Student id")
        self._lesson_plan_id: str = validate_text_input(lesson_plan_id, "Lesson plan id")
        self._status: AttendanceStatus = Attendance.validate_status_input(status)

    # === properties ===

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def lesson_plan_id(self) -> str:
        return self._lesson_plan_id

    @property
    def key(self) -> tuple[str, str]:
        return (self._student_id, self._lesson_plan_id)

    @property
    def status(self) -> AttendanceStatus:
        return self._status

    @property
    def is_present(self) -> bool:
        return self._status == AttendanceStatus.PRESENT

    @property
    def is_absent(self) -> bool:
        return self._status == AttendanceStatus.ABSENT

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "studentId": self._student_id,
            "lessonPlanId": self._lesson_plan_id,
            "status": self._status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Attendance:
        return cls(
            student_id=data["studentId"],
            lesson_plan_id=data["lessonPlanId"],
            status=data["status"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attendance):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._student_id, self._lesson_plan_id, self._status))

    def __repr__(self) -> str:
        return f"Attendance({self._student_id}, {self._lesson_plan_id}, {self._status.value})"

    # === data validators ===

    @staticmethod
    def validate_status_input(status: Any) -> AttendanceStatus:
        try:
            return AttendanceStatus(status)

        except ValueError:
            raise ValueError(
                "Invalid input. Attendance status must be 'P' (present) or 'F' (absent)."
            ) from None
