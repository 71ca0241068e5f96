# tests/test_reports.py

import datetime

import pytest

from core.aggregation import ConsolidatedAttendance
from core.reports import (
    REPORT_BUILDERS,
    build_report,
    consolidated_attendance_report,
    lesson_plan_report,
)
from models.app_state import AppState
from models.lesson_plan import LessonPlan
from models.teacher import Shift


def test_attendance_report_rows(sample_state):
    report = build_report(sample_state, "attendance")

    assert report.name == "Frequencia_Geral_SME"
    assert report.headers == ["Nome", "Presencas", "Faltas", "Taxa_Frequencia"]
    assert report.as_table() == [
        ["Ana", "2", "0", "100.0%"],
        ["Bruno", "1", "1", "50.0%"],
        ["Élio", "0", "0", "100.0%"],
    ]


def test_grade_report_uses_roster_subjects(sample_state):
    report = build_report(sample_state, "grades")

    assert report.headers == ["Nome", "Matemática", "Português", "Média_Geral"]
    assert report.rows[0] == {
        "Nome": "Ana",
        "Matemática": "7.00",
        "Português": "-",
        "Média_Geral": "5.00",
    }
    assert report.rows[2]["Média_Geral"] == "0.00"


def test_at_risk_report(sample_state):
    report = build_report(sample_state, "at-risk")

    assert report.as_table() == [
        ["Bruno", "4.5", "50.0%"],
        ["Élio", "0.0", "100.0%"],
    ]


def test_lesson_plan_report_unknown_teacher(sample_state):
    plans = (LessonPlan("p9", "ghost", datetime.date(2024, 5, 2), Shift.SECOND, "Revisão"),)

    report = lesson_plan_report(plans, sample_state.teachers)

    assert report.rows == [
        {
            "Data": "2024-05-02",
            "Docente": "-",
            "Materia": "-",
            "Turno": "2º Horário",
            "Plano": "Revisão",
        }
    ]


def test_lesson_plan_report_keeps_collection_order(sample_state):
    report = build_report(sample_state, "plans")

    assert [row["Docente"] for row in report.rows] == ["Dora", "Carlos"]


def test_consolidated_attendance_report():
    report = consolidated_attendance_report(ConsolidatedAttendance(3, 1))

    assert report.as_table() == [["Presenças", "3"], ["Faltas", "1"]]


@pytest.mark.parametrize("name", list(REPORT_BUILDERS))
def test_reports_on_empty_state_keep_headers(name):
    report = build_report(AppState.empty(), name)

    assert report.headers
    if name != "summary":
        assert report.rows == []


def test_unknown_report_name(sample_state):
    with pytest.raises(KeyError):
        build_report(sample_state, "payroll")


def test_student_and_teacher_reports_are_ordered(sample_state):
    students = build_report(sample_state, "students")
    teachers = build_report(sample_state, "teachers")

    assert [row["Nome"] for row in students.rows] == ["Ana", "Bruno", "Élio"]
    assert students.rows[0]["Escolaridade"] == "Fundamental I"
    assert [row["Dia"] for row in teachers.rows] == ["Segunda-feira", "Terça-feira"]
