# models/student.py

"""
Represents a student enrolled with the coordination office.

Stores core identifying information such as name, national id (CPF), date of birth,
schooling level, and a unique ID.

Includes functionality for:
- Validating and normalizing the schooling level and date of birth
- Serializing to and from JSON-compatible dictionaries

Students are immutable value records: an edit builds a new `Student` with the same id
via `replace()`, and the owning collection is swapped wholesale.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from core.utils import optional_field, validate_text_input


class SchoolingLevel(str, Enum):
    FUNDAMENTAL_I = "Fundamental I"
    FUNDAMENTAL_II = "Fundamental II"
    ENSINO_MEDIO = "Ensino Médio"
    SUPERIOR = "Superior"


class Student:

    def __init__(
        self,
        id: str,
        name: str,
        cpf: str = "",
        dob: datetime.date | None = None,
        schooling: SchoolingLevel | str = SchoolingLevel.FUNDAMENTAL_I,
    ):
        self._id: str = validate_text_input(id, "Student id")
        self._name: str = validate_text_input(name, "Student name")
        self._cpf: str = validate_text_input(cpf, "CPF")
        self._dob: datetime.date | None = Student.validate_dob_input(dob)
        self._schooling: SchoolingLevel = Student.validate_schooling_input(schooling)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def cpf(self) -> str:
        return self._cpf

    @property
    def dob(self) -> datetime.date | None:
        return self._dob

    @property
    def dob_iso(self) -> str:
        return self._dob.isoformat() if self._dob else ""

    @property
    def schooling(self) -> SchoolingLevel:
        return self._schooling

    def replace(self, **changes: Any) -> Student:
        """
        Returns a copy of this student with the given fields replaced. The id is always kept.
        """
        fields = {
            "name": self._name,
            "cpf": self._cpf,
            "dob": self._dob,
            "schooling": self._schooling,
        }
        fields.update(changes)

        return Student(id=self._id, **fields)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "cpf": self._cpf,
            "dob": self.dob_iso,
            "schooling": self._schooling.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data["id"],
            name=data["name"],
            cpf=optional_field(data, "cpf", ""),
            dob=data.get("dob"),
            schooling=optional_field(data, "schooling", SchoolingLevel.FUNDAMENTAL_I),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._id, self._name, self._cpf, self._dob, self._schooling))

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._cpf}, {self.dob_iso}, {self._schooling.value})"

    def __str__(self) -> str:
        return f"STUDENT: {self._name} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_schooling_input(schooling: Any) -> SchoolingLevel:
        """
        Validates and normalizes a schooling level.

        Args:
            schooling (Any): A `SchoolingLevel` member or its stored string value.

        Returns:
            The matching `SchoolingLevel` member.

        Raises:
            ValueError: If the value is not one of the four schooling levels.
        """
        try:
            return SchoolingLevel(schooling)

        except ValueError:
            raise ValueError(
                f"Invalid input. Schooling level must be one of: {', '.join(s.value for s in SchoolingLevel)}."
            ) from None

    @staticmethod
    def validate_dob_input(dob: Any) -> datetime.date | None:
        """
        Validates and normalizes a date of birth.

        Accepts `None`, a `datetime.date`, or an ISO-formatted date string. A blank string
        is stored as `None`.

        Raises:
            ValueError: If a string is given that is not an ISO date.
            TypeError: If the value is of any other type.
        """
        if dob is None or dob == "" or isinstance(dob, datetime.date):
            return dob or None

        if isinstance(dob, str):
            return datetime.date.fromisoformat(dob)

        raise TypeError("Invalid input. Date of birth must be a date or ISO string.")
