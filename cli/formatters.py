# cli/formatters.py

# anything that renders derived views for the terminal
from textwrap import dedent

import core.formatters as formatters
from core.aggregation import ConsolidatedAttendance, DashboardCounts, classify_grade
from core.lookups import AttendanceSheetRow
from core.reports import Report
from models.grade import Grade
from models.lesson_plan import LessonPlan
from models.student import Student


def format_dashboard(
    counts: DashboardCounts,
    totals: ConsolidatedAttendance,
    at_risk_count: int,
    portal_url: str,
) -> str:
    portal_link = formatters.format_portal_link(portal_url) or formatters.NO_DATA
    body = dedent(
        f"""\
        ... Total de Alunos: {formatters.format_count(counts.total_students)}
        ... Docentes Ativos: {formatters.format_count(counts.total_teachers)}
        ... Aulas Registradas: {formatters.format_count(counts.lessons_recorded)}
        ... Presenças: {totals.present_total}
        ... Faltas: {totals.absent_total}
        ... Alunos em risco: {at_risk_count}
        ... Portal: {portal_link}"""
    )

    return f"{formatters.format_banner_text('PORTAL DE GESTÃO')}\n{body}"


def format_report(report: Report) -> str:
    """Renders a report as an aligned table without pagination."""
    if not report.rows:
        return f"{formatters.format_banner_text(report.title)}\n[NO RECORDS]"

    table = report.as_table()
    widths = [
        max(len(header), *(len(row[i]) for row in table))
        for i, header in enumerate(report.headers)
    ]

    def line(cells: list[str]) -> str:
        return "  ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    lines = [
        formatters.format_banner_text(report.title),
        line(report.headers),
        line(["-" * w for w in widths]),
        *(line(row) for row in table),
    ]

    return "\n".join(lines)


def format_student_matches(students: list[Student]) -> str:
    if not students:
        return "[NO MATCHES]"

    return "\n".join(f"{s.id}  {s.name}  {s.cpf or formatters.NO_DATA}" for s in students)


def format_attendance_sheet(plan: LessonPlan, rows: list[AttendanceSheetRow]) -> str:
    lines = [
        formatters.format_banner_text(f"{plan.date.isoformat()} {plan.shift.value}"),
    ]

    for row in rows:
        mark = row.status.value if row.status else "."
        lines.append(f"[{mark}] {row.name}")

    if not rows:
        lines.append("[NO STUDENTS]")

    return "\n".join(lines)


def format_student_grades(student: Student, grades: list[Grade]) -> str:
    lines = [formatters.format_banner_text(student.name)]

    for grade in grades:
        band = classify_grade(grade.value).value
        label = f" ({grade.description})" if grade.description else ""
        lines.append(f"... {grade.subject}{label}: {grade.value:.1f} [{band}]")

    if not grades:
        lines.append("[NO GRADES]")

    return "\n".join(lines)
