# models/app_state.py

"""
The AppState model is the single root snapshot of all tracked data and represents the
"source of truth" for every derived view.

Holds the five entity collections (students, teachers, lesson plans, attendances, grades) as
tuples, plus the configured portal URL. A snapshot is never mutated: `replace()` returns a new
`AppState` sharing the untouched collections with the old one.

Deserialization is schema-validated. Every field is checked and defaulted independently:
- A missing or non-list collection becomes empty.
- In lenient mode (the default, used for the local store), malformed records are skipped with a warning.
- In strict mode (used when restoring a user-supplied backup), the first malformed record raises.
"""

from __future__ import annotations

from typing import Any, Callable

from core.logger import get_logger
from models.attendance import Attendance
from models.grade import Grade
from models.lesson_plan import LessonPlan
from models.student import Student
from models.teacher import Teacher
from models.types import RecordType

log = get_logger(__name__)


class AppState:

    def __init__(
        self,
        students: tuple[Student, ...] = (),
        teachers: tuple[Teacher, ...] = (),
        lesson_plans: tuple[LessonPlan, ...] = (),
        attendances: tuple[Attendance, ...] = (),
        grades: tuple[Grade, ...] = (),
        portal_url: str = "",
    ):
        self._students = tuple(students)
        self._teachers = tuple(teachers)
        self._lesson_plans = tuple(lesson_plans)
        self._attendances = tuple(attendances)
        self._grades = tuple(grades)
        self._portal_url = portal_url or ""

    # === properties ===

    @property
    def students(self) -> tuple[Student, ...]:
        return self._students

    @property
    def teachers(self) -> tuple[Teacher, ...]:
        return self._teachers

    @property
    def lesson_plans(self) -> tuple[LessonPlan, ...]:
        return self._lesson_plans

    @property
    def attendances(self) -> tuple[Attendance, ...]:
        return self._attendances

    @property
    def grades(self) -> tuple[Grade, ...]:
        return self._grades

    @property
    def portal_url(self) -> str:
        return self._portal_url

    # === public classmethods ===

    @classmethod
    def empty(cls) -> AppState:
        return cls()

    def replace(self, **changes: Any) -> AppState:
        """
        Returns a new snapshot with the named collections (or `portal_url`) replaced.

        Raises:
            TypeError: If an unknown field name is passed.
        """
        fields = {
            "students": self._students,
            "teachers": self._teachers,
            "lesson_plans": self._lesson_plans,
            "attendances": self._attendances,
            "grades": self._grades,
            "portal_url": self._portal_url,
        }

        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"Unknown AppState field(s): {', '.join(sorted(unknown))}")

        fields.update(changes)

        return AppState(**fields)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "students": [s.to_dict() for s in self._students],
            "teachers": [t.to_dict() for t in self._teachers],
            "lessonPlans": [p.to_dict() for p in self._lesson_plans],
            "attendances": [a.to_dict() for a in self._attendances],
            "grades": [g.to_dict() for g in self._grades],
            "portalUrl": self._portal_url,
        }

    @classmethod
    def from_dict(cls, data: Any, strict: bool = False) -> AppState:
        """
        Builds an `AppState` from a deserialized JSON payload.

        Args:
            data (Any): The decoded payload, expected to be a dictionary.
            strict (bool): If True, any malformed field or record raises instead of being defaulted.

        Returns:
            AppState: The validated snapshot.

        Raises:
            - ValueError:
                - If `data` is not a dictionary (always).
                - In strict mode, if a collection is not a list or a record fails validation.

        Notes:
            - Duplicate attendance pairs keep the last record in the payload.
        """
        if not isinstance(data, dict):
            raise ValueError("Snapshot payload must be a JSON object.")

        def import_records(
            key: str, from_dict_fn: Callable[[dict[str, Any]], RecordType]
        ) -> list[RecordType]:
            raw = data.get(key, [])

            if not isinstance(raw, list):
                if strict:
                    raise ValueError(f"Expected '{key}' to contain a list.")
                log.warning("snapshot_field_defaulted", field=key)
                return []

            records = []
            for record_dict in raw:
                try:
                    if not isinstance(record_dict, dict):
                        raise TypeError("record is not an object")
                    records.append(from_dict_fn(record_dict))

                except (KeyError, ValueError, TypeError) as e:
                    if strict:
                        raise ValueError(
                            f"Failed to deserialize {key} record: {record_dict} - {e}"
                        ) from None
                    log.warning(
                        "snapshot_record_skipped",
                        field=key,
                        record=record_dict,
                        error=str(e),
                    )

            return records

        attendances: dict[tuple[str, str], Attendance] = {}
        for attendance in import_records("attendances", Attendance.from_dict):
            attendances.pop(attendance.key, None)
            attendances[attendance.key] = attendance

        portal_url = data.get("portalUrl", "")
        if portal_url is None:
            portal_url = ""
        elif not isinstance(portal_url, str):
            if strict:
                raise ValueError("Expected 'portalUrl' to contain a string.")
            log.warning("snapshot_field_defaulted", field="portalUrl")
            portal_url = ""

        return cls(
            students=tuple(import_records("students", Student.from_dict)),
            teachers=tuple(import_records("teachers", Teacher.from_dict)),
            lesson_plans=tuple(import_records("lessonPlans", LessonPlan.from_dict)),
            attendances=tuple(attendances.values()),
            grades=tuple(import_records("grades", Grade.from_dict)),
            portal_url=portal_url,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"AppState(students={len(self._students)}, teachers={len(self._teachers)}, "
            f"lesson_plans={len(self._lesson_plans)}, attendances={len(self._attendances)}, "
            f"grades={len(self._grades)})"
        )
