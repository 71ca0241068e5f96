# core/aggregation.py

"""
Derived-report engine.

Every function here is pure: it takes entity collections from an `AppState` snapshot and
returns freshly computed rows, with no side effects. Values are kept at full float precision;
rounding for display is left to `core.formatters` and `core.reports`, so risk thresholds are
always compared against the unrounded numbers.

Dangling references (attendance or grades pointing at deleted records) never raise. They are
counted against whichever student id they carry and simply never surface for ids with no student.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from core.utils import name_sort_key
from models.attendance import Attendance
from models.grade import Grade
from models.student import Student
from models.teacher import Teacher

AT_RISK_GRADE_THRESHOLD = 5.0
AT_RISK_ATTENDANCE_THRESHOLD = 75.0

# rate reported for a student with no recorded sessions
NO_SESSIONS_RATE = 100.0


@dataclass(frozen=True)
class AttendanceStats:
    student_id: str
    name: str
    total_sessions: int
    present_count: int
    absent_count: int
    attendance_rate_percent: float


@dataclass(frozen=True)
class AtRiskStudent:
    student_id: str
    name: str
    average_grade: float
    attendance_rate_percent: float


@dataclass(frozen=True)
class SubjectAverages:
    student_id: str
    name: str
    # subject -> mean of that subject's grades, or None when the student has none
    per_subject_average: dict[str, float | None] = field(default_factory=dict)
    overall_average: float = 0.0


@dataclass(frozen=True)
class ConsolidatedAttendance:
    present_total: int
    absent_total: int

    @property
    def chart_present_value(self) -> int:
        """Present slice for the proportion chart; never zero when both totals are zero."""
        if self.present_total == 0 and self.absent_total == 0:
            return 1
        return self.present_total


@dataclass(frozen=True)
class DashboardCounts:
    total_students: int
    total_teachers: int
    lessons_recorded: int


class GradeBand(str, Enum):
    LOW = "LOW"
    AVERAGE = "AVERAGE"
    GOOD = "GOOD"
    EXCELLENT = "EXCELLENT"


# === helpers ===


def _mean(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def _attendance_by_student(
    attendances: Iterable[Attendance],
) -> dict[str, list[Attendance]]:
    grouped: dict[str, list[Attendance]] = defaultdict(list)
    for attendance in attendances:
        grouped[attendance.student_id].append(attendance)
    return grouped


def _grades_by_student(grades: Iterable[Grade]) -> dict[str, list[Grade]]:
    grouped: dict[str, list[Grade]] = defaultdict(list)
    for grade in grades:
        grouped[grade.student_id].append(grade)
    return grouped


def attendance_rate(records: Sequence[Attendance]) -> float:
    """
    Returns the share of present records as a percentage in [0, 100].

    An empty sequence yields 100.0, so a student with no recorded sessions is never at risk by attendance.
    """
    if not records:
        return NO_SESSIONS_RATE
    present = sum(1 for a in records if a.is_present)
    return present / len(records) * 100


def is_at_risk(average_grade: float, attendance_rate_percent: float) -> bool:
    return (
        average_grade < AT_RISK_GRADE_THRESHOLD
        or attendance_rate_percent < AT_RISK_ATTENDANCE_THRESHOLD
    )


def subjects_from_roster(teachers: Iterable[Teacher]) -> list[str]:
    """
    Returns the distinct subjects taught by the roster, in first-appearance order.

    Grade reports are keyed on this list, so a subject with grades but no teacher is not shown.
    """
    return list(dict.fromkeys(teacher.subject for teacher in teachers))


# === engine ===


def compute_attendance_stats(
    students: Iterable[Student],
    attendances: Iterable[Attendance],
) -> list[AttendanceStats]:
    """
    Computes per-student attendance totals and rate, ordered by student name.
    """
    by_student = _attendance_by_student(attendances)
    stats = []

    for student in students:
        records = by_student.get(student.id, [])
        present = sum(1 for a in records if a.is_present)
        stats.append(
            AttendanceStats(
                student_id=student.id,
                name=student.name,
                total_sessions=len(records),
                present_count=present,
                absent_count=len(records) - present,
                attendance_rate_percent=attendance_rate(records),
            )
        )

    return sorted(stats, key=lambda s: name_sort_key(s.name))


def compute_at_risk_students(
    students: Iterable[Student],
    grades: Iterable[Grade],
    attendances: Iterable[Attendance],
) -> list[AtRiskStudent]:
    """
    Returns the students whose grade average is below 5 or whose attendance rate is below 75%.

    Both comparisons are strict. A student with no grades has an average of 0 and is therefore
    at risk. Output follows the input student order.
    """
    grades_by_student = _grades_by_student(grades)
    attendance_by_student = _attendance_by_student(attendances)
    at_risk = []

    for student in students:
        average = _mean([g.value for g in grades_by_student.get(student.id, [])])
        average = average if average is not None else 0.0
        rate = attendance_rate(attendance_by_student.get(student.id, []))

        if is_at_risk(average, rate):
            at_risk.append(
                AtRiskStudent(
                    student_id=student.id,
                    name=student.name,
                    average_grade=average,
                    attendance_rate_percent=rate,
                )
            )

    return at_risk


def compute_subject_averages(
    students: Iterable[Student],
    grades: Iterable[Grade],
    subjects: Sequence[str],
) -> list[SubjectAverages]:
    """
    Computes each student's average per subject plus an overall average, ordered by name.

    Args:
        students (Iterable[Student]): The students to report on.
        grades (Iterable[Grade]): All grades; grades of unknown students are ignored.
        subjects (Sequence[str]): The subject columns, normally `subjects_from_roster(teachers)`.

    Returns:
        list[SubjectAverages]: One row per student. A subject with no grades maps to None.
            The overall average covers every grade of the student regardless of subject, and is 0 when there are none.
    """
    grades_by_student = _grades_by_student(grades)
    rows = []

    for student in students:
        student_grades = grades_by_student.get(student.id, [])

        per_subject = {
            subject: _mean([g.value for g in student_grades if g.subject == subject])
            for subject in subjects
        }
        overall = _mean([g.value for g in student_grades])

        rows.append(
            SubjectAverages(
                student_id=student.id,
                name=student.name,
                per_subject_average=per_subject,
                overall_average=overall if overall is not None else 0.0,
            )
        )

    return sorted(rows, key=lambda r: name_sort_key(r.name))


def compute_consolidated_attendance(
    attendances: Iterable[Attendance],
) -> ConsolidatedAttendance:
    present = 0
    absent = 0

    for attendance in attendances:
        if attendance.is_present:
            present += 1
        else:
            absent += 1

    return ConsolidatedAttendance(present_total=present, absent_total=absent)


def compute_dashboard_counts(
    students: Sequence[Student],
    teachers: Sequence[Teacher],
    attendances: Iterable[Attendance],
) -> DashboardCounts:
    # a lesson counts as recorded once any attendance references it, even if the plan was deleted
    lessons = {attendance.lesson_plan_id for attendance in attendances}

    return DashboardCounts(
        total_students=len(students),
        total_teachers=len(teachers),
        lessons_recorded=len(lessons),
    )


def classify_grade(value: float) -> GradeBand:
    if value < AT_RISK_GRADE_THRESHOLD:
        return GradeBand.LOW
    if value <= 7.4:
        return GradeBand.AVERAGE
    if value == 10:
        return GradeBand.EXCELLENT
    return GradeBand.GOOD
