# tests/test_lookups.py

import datetime

from core.lookups import (
    attendance_sheet,
    find_attendance,
    resolve_lesson_plan,
    resolve_student,
    resolve_teacher,
    search_students,
    sort_plans_by_date_desc,
    sort_students_by_name,
    sort_teachers_by_slot,
)
from models.attendance import AttendanceStatus
from models.lesson_plan import LessonPlan
from models.student import Student
from models.teacher import Shift, Teacher, WeekDay


def test_resolve_known_ids(sample_state):
    assert resolve_student(sample_state.students, "s002").name == "Ana"
    assert resolve_teacher(sample_state.teachers, "t002").subject == "Português"
    assert resolve_lesson_plan(sample_state.lesson_plans, "p001").description == "Frações"


def test_resolve_dangling_ids_returns_none(sample_state):
    assert resolve_student(sample_state.students, "ghost") is None
    assert resolve_teacher(sample_state.teachers, "") is None
    assert resolve_lesson_plan(sample_state.lesson_plans, None) is None


def test_find_attendance(sample_state):
    record = find_attendance(sample_state.attendances, "s001", "p002")

    assert record.status is AttendanceStatus.ABSENT
    assert find_attendance(sample_state.attendances, "s003", "p002") is None


def test_sort_students_folds_accents():
    students = [Student("1", "Zé"), Student("2", "Ângela"), Student("3", "ana")]

    assert [s.name for s in sort_students_by_name(students)] == ["ana", "Ângela", "Zé"]


def test_search_students_by_name_and_cpf():
    students = [
        Student("1", "Bruno Alves", cpf="111.222.333-44"),
        Student("2", "Ana Bruna", cpf="555.666.777-88"),
        Student("3", "Carla", cpf="999.000.111-22"),
    ]

    assert [s.id for s in search_students(students, "brun")] == ["2", "1"]
    assert [s.id for s in search_students(students, "999.000")] == ["3"]
    assert [s.id for s in search_students(students, "  ")] == ["2", "1", "3"]
    assert search_students(students, "xyz") == []


def test_sort_teachers_by_slot():
    teachers = [
        Teacher("1", "Rui", "Artes", WeekDay.FRIDAY, Shift.FIRST),
        Teacher("2", "Lia", "Física", WeekDay.MONDAY, Shift.SECOND),
        Teacher("3", "Bia", "Química", WeekDay.MONDAY, Shift.FIRST),
    ]

    assert [t.id for t in sort_teachers_by_slot(teachers)] == ["3", "2", "1"]


def test_sort_plans_by_date_desc_is_stable():
    plans = [
        LessonPlan("a", "t1", datetime.date(2024, 3, 1), Shift.SECOND),
        LessonPlan("b", "t1", datetime.date(2024, 3, 5), Shift.FIRST),
        LessonPlan("c", "t1", datetime.date(2024, 3, 1), Shift.FIRST),
    ]

    assert [p.id for p in sort_plans_by_date_desc(plans)] == ["b", "a", "c"]


def test_attendance_sheet_marks_unrecorded_students(sample_state):
    rows = attendance_sheet(sample_state.students, sample_state.attendances, "p002")

    assert [(r.name, r.status) for r in rows] == [
        ("Ana", AttendanceStatus.PRESENT),
        ("Bruno", AttendanceStatus.ABSENT),
        ("Élio", None),
    ]


def test_attendance_sheet_filters_by_query(sample_state):
    rows = attendance_sheet(
        sample_state.students, sample_state.attendances, "p001", query="bru"
    )

    assert [r.student_id for r in rows] == ["s001"]
