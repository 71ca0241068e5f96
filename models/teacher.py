# models/teacher.py

"""
Represents a teacher assignment: a named teacher, the subject taught, and the weekly
slot (day of week and shift) the teacher occupies.

The (day_of_week, shift) pair is expected to be unique across the roster; this is checked by
`core.validators.is_teacher_slot_taken()` at creation and edit time, not by the record itself.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.utils import validate_text_input


class Shift(str, Enum):
    FIRST = "1º Horário"
    SECOND = "2º Horário"


class WeekDay(str, Enum):
    MONDAY = "Segunda-feira"
    TUESDAY = "Terça-feira"
    WEDNESDAY = "Quarta-feira"
    THURSDAY = "Quinta-feira"
    FRIDAY = "Sexta-feira"
    SATURDAY = "Sábado"

    @property
    def order(self) -> int:
        return list(WeekDay).index(self)


def validate_shift_input(shift: Any) -> Shift:
    """
    Validates and normalizes a shift value.

    Raises:
        ValueError: If the value is not one of the two shifts.
    """
    try:
        return Shift(shift)

    except ValueError:
        raise ValueError(
            f"Invalid input. Shift must be one of: {', '.join(s.value for s in Shift)}."
        ) from None


class Teacher:

    def __init__(
        self,
        id: str,
        name: str,
        subject: str,
        day_of_week: WeekDay | str = WeekDay.MONDAY,
        shift: Shift | str = Shift.FIRST,
    ):
        self._id: str = validate_text_input(id, "Teacher id")
        self._name: str = validate_text_input(name, "Teacher name")
        self._subject: str = validate_text_input(subject, "Subject")
        self._day_of_week: WeekDay = Teacher.validate_day_input(day_of_week)
        self._shift: Shift = validate_shift_input(shift)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def day_of_week(self) -> WeekDay:
        return self._day_of_week

    @property
    def shift(self) -> Shift:
        return self._shift

    @property
    def slot(self) -> tuple[WeekDay, Shift]:
        return (self._day_of_week, self._shift)

    def replace(self, **changes: Any) -> Teacher:
        fields = {
            "name": self._name,
            "subject": self._subject,
            "day_of_week": self._day_of_week,
            "shift": self._shift,
        }
        fields.update(changes)

        return Teacher(id=self._id, **fields)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "subject": self._subject,
            "dayOfWeek": self._day_of_week.value,
            "shift": self._shift.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Teacher:
        return cls(
            id=data["id"],
            name=data["name"],
            subject=data["subject"],
            day_of_week=data["dayOfWeek"],
            shift=data["shift"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Teacher):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._id, self._name, self._subject, self._day_of_week, self._shift))

    def __repr__(self) -> str:
        return f"Teacher({self._id}, {self._name}, {self._subject}, {self._day_of_week.value}, {self._shift.value})"

    def __str__(self) -> str:
        return f"TEACHER: {self._name} ({self._subject}) - {self._day_of_week.value}, {self._shift.value}"

    # === data validators ===

    @staticmethod
    def validate_day_input(day: Any) -> WeekDay:
        """
        Validates and normalizes a day of week.

        Raises:
            ValueError: If the value is not one of the six teaching days.
        """
        try:
            return WeekDay(day)

        except ValueError:
            raise ValueError(
                f"Invalid input. Day of week must be one of: {', '.join(d.value for d in WeekDay)}."
            ) from None
