# core/reports.py

"""
Report formatter.

Flattens aggregation output into `Report` objects: an ordered header list plus one flat,
label-keyed row per student (or per summary line). Rows keep the ordering of the view they come
from, and every value is already rendered to a display string, so export back-ends only have to
lay them out.

Averages with no underlying grades render as `formatters.NO_DATA` rather than zero, and
unresolvable teacher references render as `formatters.UNKNOWN`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Callable

import core.formatters as formatters
from core.aggregation import (
    AtRiskStudent,
    AttendanceStats,
    ConsolidatedAttendance,
    SubjectAverages,
    compute_at_risk_students,
    compute_attendance_stats,
    compute_consolidated_attendance,
    compute_subject_averages,
    subjects_from_roster,
)
from core.lookups import (
    resolve_teacher,
    sort_plans_by_date_desc,
    sort_students_by_name,
    sort_teachers_by_slot,
)
from models.app_state import AppState
from models.lesson_plan import LessonPlan
from models.student import Student
from models.teacher import Teacher


@dataclass(frozen=True)
class Report:
    name: str
    title: str
    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)

    def as_table(self) -> list[list[str]]:
        """Returns the rows as lists of cells, in header order."""
        return [[row.get(h, "") for h in self.headers] for row in self.rows]


# === row builders ===


def student_list_report(students: Iterable[Student]) -> Report:
    headers = ["Nome", "CPF", "Nascimento", "Escolaridade"]
    rows = [
        {
            "Nome": s.name,
            "CPF": s.cpf,
            "Nascimento": s.dob_iso,
            "Escolaridade": s.schooling.value,
        }
        for s in students
    ]

    return Report("Lista_Alunos", "Lista de Alunos", headers, rows)


def teacher_roster_report(teachers: Iterable[Teacher]) -> Report:
    headers = ["Nome", "Materia", "Dia", "Horario"]
    rows = [
        {
            "Nome": t.name,
            "Materia": t.subject,
            "Dia": t.day_of_week.value,
            "Horario": t.shift.value,
        }
        for t in teachers
    ]

    return Report("Lista_Docentes_SME", "Corpo Docente", headers, rows)


def lesson_plan_report(
    plans: Iterable[LessonPlan], teachers: Sequence[Teacher]
) -> Report:
    headers = ["Data", "Docente", "Materia", "Turno", "Plano"]
    rows = []

    for plan in plans:
        teacher = resolve_teacher(teachers, plan.teacher_id)
        rows.append(
            {
                "Data": plan.date.isoformat(),
                "Docente": teacher.name if teacher else formatters.UNKNOWN,
                "Materia": teacher.subject if teacher else formatters.UNKNOWN,
                "Turno": plan.shift.value,
                "Plano": plan.description,
            }
        )

    return Report("Planejamentos_SME", "Planejamento Pedagógico", headers, rows)


def attendance_report(stats: Iterable[AttendanceStats]) -> Report:
    headers = ["Nome", "Presencas", "Faltas", "Taxa_Frequencia"]
    rows = [
        {
            "Nome": s.name,
            "Presencas": str(s.present_count),
            "Faltas": str(s.absent_count),
            "Taxa_Frequencia": formatters.format_percent(s.attendance_rate_percent),
        }
        for s in stats
    ]

    return Report("Frequencia_Geral_SME", "Frequência Geral", headers, rows)


def grade_report(rows_in: Iterable[SubjectAverages], subjects: Sequence[str]) -> Report:
    headers = ["Nome", *subjects, "Média_Geral"]
    rows = []

    for r in rows_in:
        row = {"Nome": r.name}
        for subject in subjects:
            row[subject] = formatters.format_average(r.per_subject_average.get(subject))
        row["Média_Geral"] = formatters.format_average(r.overall_average)
        rows.append(row)

    return Report("Relatorio_Notas_SME", "Relatório de Notas", headers, rows)


def at_risk_report(students: Iterable[AtRiskStudent]) -> Report:
    headers = ["Nome", "Media", "Taxa_Frequencia"]
    rows = [
        {
            "Nome": s.name,
            "Media": formatters.format_average(s.average_grade, decimals=1),
            "Taxa_Frequencia": formatters.format_percent(s.attendance_rate_percent),
        }
        for s in students
    ]

    return Report("Alunos_Em_Risco_SME", "Monitor de Desempenho", headers, rows)


def consolidated_attendance_report(totals: ConsolidatedAttendance) -> Report:
    headers = ["Situacao", "Total"]
    rows = [
        {"Situacao": "Presenças", "Total": str(totals.present_total)},
        {"Situacao": "Faltas", "Total": str(totals.absent_total)},
    ]

    return Report("Resumo_Presenca_SME", "Resumo de Presença", headers, rows)


# === report registry ===

ReportBuilder = Callable[[AppState], Report]

REPORT_BUILDERS: dict[str, ReportBuilder] = {
    "students": lambda state: student_list_report(sort_students_by_name(state.students)),
    "teachers": lambda state: teacher_roster_report(sort_teachers_by_slot(state.teachers)),
    "plans": lambda state: lesson_plan_report(
        sort_plans_by_date_desc(state.lesson_plans), state.teachers
    ),
    "attendance": lambda state: attendance_report(
        compute_attendance_stats(state.students, state.attendances)
    ),
    "grades": lambda state: grade_report(
        compute_subject_averages(
            state.students, state.grades, subjects_from_roster(state.teachers)
        ),
        subjects_from_roster(state.teachers),
    ),
    "at-risk": lambda state: at_risk_report(
        compute_at_risk_students(state.students, state.grades, state.attendances)
    ),
    "summary": lambda state: consolidated_attendance_report(
        compute_consolidated_attendance(state.attendances)
    ),
}


def build_report(state: AppState, report_name: str) -> Report:
    """
    Builds one of the named reports from a snapshot.

    Raises:
        KeyError: If `report_name` is not in `REPORT_BUILDERS`.
    """
    try:
        builder = REPORT_BUILDERS[report_name]

    except KeyError:
        raise KeyError(
            f"Unknown report '{report_name}'. Choose from: {', '.join(REPORT_BUILDERS)}."
        ) from None

    return builder(state)
