# models/lesson_plan.py

"""
Represents a planned lesson: the teacher giving it, the calendar date and shift it occupies,
and a free-text description of its content.

Attendance records reference lesson plans by id. Deleting a plan does not cascade, so
consumers must tolerate attendance rows pointing at a plan that no longer exists.
"""

from __future__ import annotations

import datetime
from typing import Any

from core.utils import optional_field, validate_text_input

from models.teacher import Shift, validate_shift_input


class LessonPlan:

    def __init__(
        self,
        id: str,
        teacher_id: str,
        date: datetime.date | str,
        shift: Shift | str = Shift.FIRST,
        description: str = "",
    ):
        self._id: str = validate_text_input(id, "Lesson plan id")
        self._teacher_id: str = validate_text_input(teacher_id, "Teacher id")
        self._date: datetime.date = LessonPlan.validate_date_input(date)
        self._shift: Shift = validate_shift_input(shift)
        self._description: str = validate_text_input(description, "Description")

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def teacher_id(self) -> str:
        return self._teacher_id

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def shift(self) -> Shift:
        return self._shift

    @property
    def description(self) -> str:
        return self._description

    @property
    def slot(self) -> tuple[datetime.date, Shift]:
        return (self._date, self._shift)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "teacherId": self._teacher_id,
            "date": self._date.isoformat(),
            "shift": self._shift.value,
            "description": self._description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LessonPlan:
        return cls(
            id=data["id"],
            teacher_id=data["teacherId"],
            date=data["date"],
            shift=data["shift"],
            description=optional_field(data, "description", ""),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LessonPlan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._id, self._teacher_id, self._date, self._shift))

    def __repr__(self) -> str:
        return f"LessonPlan({self._id}, {self._teacher_id}, {self._date.isoformat()}, {self._shift.value})"

    def __str__(self) -> str:
        return f"LESSON PLAN: {self._date.isoformat()} {self._shift.value} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_date_input(date: Any) -> datetime.date:
        """
        Validates and normalizes a lesson date.

        Accepts a `datetime.date` or an ISO-formatted date string. A `datetime.datetime`
        is reduced to its calendar date.

        Raises:
            ValueError: If a string is given that is not an ISO date.
            TypeError: If the value is of any other type.
        """
        if isinstance(date, datetime.datetime):
            return date.date()

        if isinstance(date, datetime.date):
            return date

        if isinstance(date, str):
            return datetime.date.fromisoformat(date)

        raise TypeError("Invalid input. Lesson date must be a date or ISO string.")
