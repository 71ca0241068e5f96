# core/lookups.py

"""
Read-only lookups and ordered views over entity collections.

Foreign-key resolution never assumes the referenced record exists: every `resolve_*` helper
returns None for a dangling id, and callers render that as a placeholder.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from core.utils import name_sort_key
from models.attendance import Attendance, AttendanceStatus
from models.lesson_plan import LessonPlan
from models.student import Student
from models.teacher import Teacher
from models.types import IdentifiedRecord


@dataclass(frozen=True)
class AttendanceSheetRow:
    student_id: str
    name: str
    status: AttendanceStatus | None


# === reference resolution ===


def find_by_id(
    records: Iterable[IdentifiedRecord], record_id: str | None
) -> IdentifiedRecord | None:
    if not record_id:
        return None
    return next((r for r in records if r.id == record_id), None)


def resolve_student(students: Iterable[Student], student_id: str | None) -> Student | None:
    return find_by_id(students, student_id)


def resolve_teacher(teachers: Iterable[Teacher], teacher_id: str | None) -> Teacher | None:
    return find_by_id(teachers, teacher_id)


def resolve_lesson_plan(
    plans: Iterable[LessonPlan], lesson_plan_id: str | None
) -> LessonPlan | None:
    return find_by_id(plans, lesson_plan_id)


def find_attendance(
    attendances: Iterable[Attendance], student_id: str, lesson_plan_id: str
) -> Attendance | None:
    return next(
        (a for a in attendances if a.key == (student_id, lesson_plan_id)),
        None,
    )


# === ordered views ===


def sort_students_by_name(students: Iterable[Student]) -> list[Student]:
    return sorted(students, key=lambda s: name_sort_key(s.name))


def search_students(students: Iterable[Student], query: str = "") -> list[Student]:
    """
    Returns students whose name contains `query` (case-insensitive) or whose CPF contains it,
    ordered by name. An empty query matches everyone.
    """
    needle = query.strip()
    ordered = sort_students_by_name(students)

    if not needle:
        return ordered

    lowered = needle.casefold()
    return [s for s in ordered if lowered in s.name.casefold() or needle in s.cpf]


def sort_teachers_by_slot(teachers: Iterable[Teacher]) -> list[Teacher]:
    return sorted(
        teachers,
        key=lambda t: (t.day_of_week.order, t.shift.value, name_sort_key(t.name)),
    )


def sort_plans_by_date_desc(plans: Iterable[LessonPlan]) -> list[LessonPlan]:
    # stable sort keeps insertion order (most recent first) among plans on the same date
    return sorted(plans, key=lambda p: p.date, reverse=True)


def attendance_sheet(
    students: Iterable[Student],
    attendances: Iterable[Attendance],
    lesson_plan_id: str,
    query: str = "",
) -> list[AttendanceSheetRow]:
    """
    Lists every matching student with their recorded status for one lesson plan.

    Students with no record for the plan get a status of None (unmarked).
    """
    statuses = {
        a.student_id: a.status
        for a in attendances
        if a.lesson_plan_id == lesson_plan_id
    }

    return [
        AttendanceSheetRow(
            student_id=student.id,
            name=student.name,
            status=statuses.get(student.id),
        )
        for student in search_students(students, query)
    ]
