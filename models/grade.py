# models/grade.py

"""
Represents a single grade awarded to a student in a subject.

Each `Grade` records the student's ID, the subject (free text, matched against the teacher
roster for per-subject reports), a description of the assessment, and a numeric value.

Notes:
- The value domain is [0, 10]. It is enforced by `validate_value_input()`, which the
  mutation layer calls before accepting a new grade. The constructor only requires a
  finite number (`validate_number_input()`), so previously stored snapshots still load.
- Averages are computed externally by `core.aggregation`.
"""

from __future__ import annotations

import math
from typing import Any

from core.utils import optional_field, validate_text_input

MIN_GRADE_VALUE = 0.0
MAX_GRADE_VALUE = 10.0


class Grade:

    def __init__(
        self,
        id: str,
        student_id: str,
        subject: str,
        value: float,
        description: str = "",
    ):
        self._id: str = validate_text_input(id, "Grade id")
        self._student_id: str = validate_text_input(student_id, "Student id")
        self._subject: str = validate_text_input(subject, "Subject")
        self._value: float = Grade.validate_number_input(value)
        self._description: str = validate_text_input(description, "Description")

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def value(self) -> float:
        return self._value

    @property
    def description(self) -> str:
        return self._description

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "studentId": self._student_id,
            "subject": self._subject,
            "description": self._description,
            "value": self._value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Grade:
        return cls(
            id=data["id"],
            student_id=data["studentId"],
            subject=data["subject"],
            value=data["value"],
            description=optional_field(data, "description", ""),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grade):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._id, self._student_id, self._subject, self._value))

    def __repr__(self) -> str:
        return f"Grade({self._id}, {self._student_id}, {self._subject}, {self._value})"

    def __str__(self) -> str:
        return f"GRADE: {self._subject} {self._value:.1f} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_number_input(value: Any) -> float:
        """
        Casts a stored grade value to a finite float, without checking the [0, 10] domain.

        Raises:
            TypeError: If the input is a bool or cannot be cast to float.
            ValueError: If the input is non-finite.
        """
        if isinstance(value, bool):
            raise TypeError("Invalid input. Grade value must be a number.")

        try:
            value = float(value)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Grade value must be a number.") from None

        if not math.isfinite(value):
            raise ValueError("Invalid input. Grade value must be a finite number.")

        return value

    @staticmethod
    def validate_value_input(value: Any) -> float:
        """
        Validates and normalizes input for a new `Grade` value.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it lies within [0, 10].

        Args:
            value (Any): The input value to validate.

        Returns:
            The normalized grade value (float).

        Raises:
            TypeError: If the input is a bool or cannot be cast to float.
            ValueError: If the input is non-finite or outside [0, 10].
        """
        value = Grade.validate_number_input(value)

        if not MIN_GRADE_VALUE <= value <= MAX_GRADE_VALUE:
            raise ValueError(
                f"Invalid input. Grade value must be between {MIN_GRADE_VALUE:g} and {MAX_GRADE_VALUE:g}."
            )

        return value
