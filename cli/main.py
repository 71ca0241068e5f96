# cli/main.py

"""
Command-line front end for the coordination dashboard.

Loads the snapshot from the configured data directory, runs one command against it, and exits.
Mutating commands go through `EntityStore.apply()`, so every accepted change is persisted
immediately; rejected changes print the failure detail and leave the stored data untouched.
"""

import argparse
import os
import sys
from typing import Any, Callable, cast

import cli.formatters as formatters
import core.mutations as mutations
from core.aggregation import (
    compute_at_risk_students,
    compute_consolidated_attendance,
    compute_dashboard_counts,
)
from core.config import AppConfig, get_config
from core.export import FORMAT_EXTENSIONS, export_report
from core.formatters import format_national_id
from core.logger import setup_logging
from core.lookups import (
    attendance_sheet,
    resolve_lesson_plan,
    resolve_student,
    search_students,
)
from core.reports import REPORT_BUILDERS, build_report
from core.response import Response
from core.storage import JsonStorage
from core.store import EntityStore
from models.attendance import AttendanceStatus
from models.student import SchoolingLevel
from models.teacher import Shift, WeekDay

# CLI collection name -> (AppState collection, delete mutation)
DELETE_MUTATIONS: dict[str, tuple[str, Callable[..., Response]]] = {
    "students": ("students", mutations.delete_student),
    "teachers": ("teachers", mutations.delete_teacher),
    "plans": ("lesson_plans", mutations.delete_lesson_plan),
    "grades": ("grades", mutations.delete_grade),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="educontrol",
        description="School coordination dashboard: students, teachers, lesson plans, attendance and grades.",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding the stored data (overrides EDUCONTROL_DATA_DIR)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    # --- views ---
    commands.add_parser("summary", help="Show dashboard counts and attendance totals")

    show = commands.add_parser("show", help="Print a report to the terminal")
    show.add_argument("report", choices=list(REPORT_BUILDERS))

    export = commands.add_parser("export", help="Write a report to a file")
    export.add_argument("report", choices=list(REPORT_BUILDERS))
    export.add_argument("--format", dest="fmt", choices=list(FORMAT_EXTENSIONS), default="xlsx")
    export.add_argument("--out", default=None, help="Output directory (overrides EDUCONTROL_EXPORT_DIR)")

    find = commands.add_parser("find", help="Search students by name or CPF")
    find.add_argument("query", nargs="?", default="")

    sheet = commands.add_parser("sheet", help="Show the attendance sheet of a lesson plan")
    sheet.add_argument("lesson_plan_id")
    sheet.add_argument("--search", default="", help="Filter students by name or CPF")

    grades_of = commands.add_parser("grades-of", help="List a student's grades with their bands")
    grades_of.add_argument("student_id")

    # --- mutations ---
    add_student = commands.add_parser("add-student", help="Register a student")
    add_student.add_argument("name")
    add_student.add_argument("--cpf", default="")
    add_student.add_argument("--dob", default=None, help="Date of birth (YYYY-MM-DD)")
    add_student.add_argument(
        "--schooling",
        choices=[s.value for s in SchoolingLevel],
        default=SchoolingLevel.FUNDAMENTAL_I.value,
    )

    edit_student = commands.add_parser("edit-student", help="Change a student's details")
    edit_student.add_argument("student_id")
    edit_student.add_argument("--name")
    edit_student.add_argument("--cpf")
    edit_student.add_argument("--dob", help="Date of birth (YYYY-MM-DD)")
    edit_student.add_argument("--schooling", choices=[s.value for s in SchoolingLevel])

    add_teacher = commands.add_parser("add-teacher", help="Assign a teacher to a weekly slot")
    add_teacher.add_argument("name")
    add_teacher.add_argument("subject")
    add_teacher.add_argument("--day", choices=[d.value for d in WeekDay], default=WeekDay.MONDAY.value)
    add_teacher.add_argument("--shift", choices=[s.value for s in Shift], default=Shift.FIRST.value)

    edit_teacher = commands.add_parser("edit-teacher", help="Change a teacher's subject or weekly slot")
    edit_teacher.add_argument("teacher_id")
    edit_teacher.add_argument("--name")
    edit_teacher.add_argument("--subject")
    edit_teacher.add_argument("--day", choices=[d.value for d in WeekDay])
    edit_teacher.add_argument("--shift", choices=[s.value for s in Shift])

    add_plan = commands.add_parser("add-plan", help="Create a lesson plan")
    add_plan.add_argument("teacher_id")
    add_plan.add_argument("date", help="Lesson date (YYYY-MM-DD)")
    add_plan.add_argument("--shift", choices=[s.value for s in Shift], default=Shift.FIRST.value)
    add_plan.add_argument("--description", default="")

    mark = commands.add_parser("mark", help="Record attendance for a student at a lesson")
    mark.add_argument("student_id")
    mark.add_argument("lesson_plan_id")
    mark.add_argument("status", choices=[s.value for s in AttendanceStatus])

    add_grade = commands.add_parser("add-grade", help="Record a grade")
    add_grade.add_argument("student_id")
    add_grade.add_argument("subject")
    add_grade.add_argument("value")
    add_grade.add_argument("--description", default="")

    delete = commands.add_parser("delete", help="Remove a record by id")
    delete.add_argument("collection", choices=list(DELETE_MUTATIONS))
    delete.add_argument("record_id")

    portal = commands.add_parser("set-portal", help="Set the portal address")
    portal.add_argument("url")

    # --- backup ---
    backup = commands.add_parser("backup", help="Write a full backup file")
    backup.add_argument("path")

    restore = commands.add_parser("restore", help="Replace all data with a backup file")
    restore.add_argument("path")

    return parser


def given_fields(args: argparse.Namespace, **fields: str) -> dict[str, Any]:
    """Maps the flags the user actually passed (`dest` -> keyword) into mutation keyword arguments."""
    return {key: getattr(args, dest) for key, dest in fields.items() if getattr(args, dest) is not None}


def report_response(response: Response) -> int:
    if response.success:
        if response.detail:
            print(response.detail)
        return 0

    print(f"{response}: {response.detail}", file=sys.stderr)
    return 1


def run_cli(argv: list[str] | None = None, config: AppConfig | None = None) -> int:
    """
    Parses `argv`, runs the selected command, and returns the process exit code.

    Returns:
        int: 0 on success, 1 if the command's `Response` reports failure.
    """
    config = config or get_config()
    args = build_parser().parse_args(argv)

    setup_logging(json_output=config.log_json, log_level=config.log_level)

    data_dir = args.data_dir or config.data_dir
    storage = JsonStorage(os.path.join(os.path.expanduser(data_dir), config.state_file))
    store = EntityStore.load(storage)
    state = store.state

    match args.command:
        case "summary":
            print(
                formatters.format_dashboard(
                    compute_dashboard_counts(state.students, state.teachers, state.attendances),
                    compute_consolidated_attendance(state.attendances),
                    len(compute_at_risk_students(state.students, state.grades, state.attendances)),
                    state.portal_url or config.default_portal_url,
                )
            )
            return 0

        case "show":
            print(formatters.format_report(build_report(state, args.report)))
            return 0

        case "export":
            out_dir = os.path.expanduser(cast(str, args.out or config.export_dir))
            return report_response(
                export_report(
                    build_report(state, args.report),
                    args.fmt,
                    out_dir,
                    rows_per_page=config.rows_per_page,
                )
            )

        case "find":
            print(formatters.format_student_matches(search_students(state.students, args.query)))
            return 0

        case "sheet":
            plan = resolve_lesson_plan(state.lesson_plans, args.lesson_plan_id)
            if plan is None:
                print(f"No lesson plan found for {args.lesson_plan_id}.", file=sys.stderr)
                return 1

            rows = attendance_sheet(state.students, state.attendances, plan.id, args.search)
            print(formatters.format_attendance_sheet(plan, rows))
            return 0

        case "grades-of":
            student = resolve_student(state.students, args.student_id)
            if student is None:
                print(f"No student found for {args.student_id}.", file=sys.stderr)
                return 1

            grades = [g for g in state.grades if g.student_id == student.id]
            print(formatters.format_student_grades(student, grades))
            return 0

        case "add-student":
            return report_response(
                store.apply(
                    "students",
                    mutations.create_student,
                    args.name,
                    cpf=format_national_id(args.cpf),
                    dob=args.dob,
                    schooling=args.schooling,
                )
            )

        case "edit-student":
            changes = given_fields(args, name="name", cpf="cpf", dob="dob", schooling="schooling")
            if "cpf" in changes:
                changes["cpf"] = format_national_id(changes["cpf"])

            return report_response(
                store.apply("students", mutations.edit_student, args.student_id, **changes)
            )

        case "add-teacher":
            return report_response(
                store.apply(
                    "teachers",
                    mutations.create_teacher,
                    args.name,
                    args.subject,
                    day_of_week=args.day,
                    shift=args.shift,
                )
            )

        case "edit-teacher":
            changes = given_fields(args, name="name", subject="subject", day_of_week="day", shift="shift")
            return report_response(
                store.apply("teachers", mutations.edit_teacher, args.teacher_id, **changes)
            )

        case "add-plan":
            return report_response(
                store.apply(
                    "lesson_plans",
                    mutations.create_lesson_plan,
                    args.teacher_id,
                    args.date,
                    shift=args.shift,
                    description=args.description,
                )
            )

        case "mark":
            return report_response(
                store.apply(
                    "attendances",
                    mutations.set_attendance,
                    args.student_id,
                    args.lesson_plan_id,
                    args.status,
                )
            )

        case "add-grade":
            return report_response(
                store.apply(
                    "grades",
                    mutations.create_grade,
                    args.student_id,
                    args.subject,
                    args.value,
                    description=args.description,
                )
            )

        case "delete":
            collection, delete_record = DELETE_MUTATIONS[args.collection]
            return report_response(store.apply(collection, delete_record, args.record_id))

        case "set-portal":
            return report_response(store.set_portal_url(args.url))

        case "backup":
            return report_response(store.backup(args.path))

        case "restore":
            return report_response(store.restore(args.path))

        case _:
            raise RuntimeError(f"Unexpected command received: {args.command}")


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
