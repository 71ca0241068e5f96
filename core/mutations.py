# core/mutations.py

"""
Mutation operations over the entity collections.

Each operation takes the current collection (a tuple) plus the candidate values, and returns a
`Response`. On success the new collection is returned under `data["records"]` and the touched
record under `data["record"]`; the input collection is never modified. On failure the caller
keeps its current collection and decides how to surface the rejection.

Operations never raise past their boundary: field validators raise `ValueError`/`TypeError`
internally and are mapped to `ErrorCode`s here.
"""

from __future__ import annotations

import datetime
from typing import Any, Callable

from core.logger import get_logger
from core.response import ErrorCode, Response
from core.utils import generate_uuid
from core.validators import is_lesson_slot_taken, is_teacher_slot_taken
from models.app_state import AppState
from models.attendance import Attendance, AttendanceStatus
from models.grade import Grade
from models.lesson_plan import LessonPlan
from models.student import SchoolingLevel, Student
from models.teacher import Shift, Teacher, WeekDay
from models.types import IdentifiedRecord

log = get_logger(__name__)

IdFactory = Callable[[], str]


# === generalized record operations ===


def _add_record(
    records: tuple[IdentifiedRecord, ...],
    record: IdentifiedRecord,
    prepend: bool = False,
) -> Response:
    new_records = (record, *records) if prepend else (*records, record)

    return Response.succeed(
        detail=f"{type(record).__name__} successfully added.",
        data={
            "records": new_records,
            "record": record,
        },
    )


def _replace_record(
    records: tuple[IdentifiedRecord, ...], record: IdentifiedRecord
) -> Response:
    """
    Swaps the record sharing `record.id` for `record`, keeping its position.

    Returns:
        Response: `ErrorCode.NOT_FOUND` (404) if no record has that id, otherwise the new collection.
    """
    if not any(r.id == record.id for r in records):
        return _not_found(type(record).__name__, record.id)

    new_records = tuple(record if r.id == record.id else r for r in records)

    return Response.succeed(
        detail=f"{type(record).__name__} successfully updated.",
        data={
            "records": new_records,
            "record": record,
        },
    )


def _remove_record(
    records: tuple[IdentifiedRecord, ...], record_id: str, record_name: str
) -> Response:
    """
    Removes the record with `record_id`.

    Returns:
        Response: `ErrorCode.NOT_FOUND` (404) if no record has that id, otherwise the new collection.

    Notes:
        - Removal never cascades: records referencing the removed id are left in place.
    """
    removed = next((r for r in records if r.id == record_id), None)

    if removed is None:
        return _not_found(record_name, record_id)

    return Response.succeed(
        detail=f"{record_name} successfully removed.",
        data={
            "records": tuple(r for r in records if r.id != record_id),
            "record": removed,
        },
    )


def _not_found(record_name: str, record_id: str) -> Response:
    log.info("mutation_rejected", reason="not_found", record=record_name, id=record_id)

    return Response.fail(
        detail=f"No matching {record_name.lower()} found for {record_id}.",
        error=ErrorCode.NOT_FOUND,
        status_code=404,
    )


def _missing(field_name: str) -> Response:
    log.info("mutation_rejected", reason="missing_field", field=field_name)

    return Response.fail(
        detail=f"Missing required field: {field_name}.",
        error=ErrorCode.MISSING_REQUIRED_FIELD,
    )


def _invalid(e: Exception) -> Response:
    log.info("mutation_rejected", reason="invalid_value", error=str(e))

    return Response.fail(
        detail=f"Invalid field value: {e}",
        error=ErrorCode.INVALID_FIELD_VALUE,
    )


def _slot_conflict(detail: str, slot: tuple[Any, Any]) -> Response:
    log.info("mutation_rejected", reason="slot_conflict", slot=[str(v) for v in slot])

    return Response.fail(
        detail=detail,
        error=ErrorCode.SLOT_CONFLICT,
        status_code=409,
        data={
            "slot": slot,
        },
    )


def _unexpected(e: Exception) -> Response:
    log.error("mutation_failed", error=str(e))

    return Response.fail(
        detail=f"Unexpected error: {e}",
        error=ErrorCode.INTERNAL_ERROR,
    )


# === student mutations ===


def create_student(
    students: tuple[Student, ...],
    name: str,
    cpf: str = "",
    dob: datetime.date | str | None = None,
    schooling: SchoolingLevel | str = SchoolingLevel.FUNDAMENTAL_I,
    id_factory: IdFactory = generate_uuid,
) -> Response:
    """
    Creates a new `Student` with a freshly generated id and appends it to the collection.

    Args:
        students (tuple[Student, ...]): The current student collection.
        name (str): The student's name. Required.
        cpf (str): The national id string, stored as given.
        dob (datetime.date | str | None): Date of birth, as a date or ISO string.
        schooling (SchoolingLevel | str): One of the four schooling levels.
        id_factory (Callable[[], str]): Generator for the new record id.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the student was created.
                - False if the name is blank or a field value is invalid.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if the name is blank.
                - `ErrorCode.INVALID_FIELD_VALUE` if the schooling level or date of birth is invalid.
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (tuple[Student, ...]): The new collection.
                    - "record" (Student): The created student.

    Notes:
        - No conflict validation is performed for students.
    """
    if not name or not name.strip():
        return _missing("name")

    try:
        student = Student(
            id=id_factory(),
            name=name.strip(),
            cpf=cpf,
            dob=dob,
            schooling=schooling,
        )

    except (ValueError, TypeError) as e:
        return _invalid(e)

    except Exception as e:
        return _unexpected(e)

    else:
        return _add_record(students, student)


def update_student(students: tuple[Student, ...], student: Student) -> Response:
    """
    Replaces the student sharing `student.id` with `student` (full-field replacement).

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the student was replaced in place.
                - False if the name is blank or no student has that id.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if the name is blank.
                - `ErrorCode.NOT_FOUND` if no student has that id.
            - data (dict | None):
                - On success: "records" and "record", as for `create_student()`.
    """
    if not student.name.strip():
        return _missing("name")

    return _replace_record(students, student)


def edit_student(students: tuple[Student, ...], student_id: str, **changes: Any) -> Response:
    """
    Applies a partial edit to the student with `student_id` and replaces it via `update_student()`.

    Args:
        students (tuple[Student, ...]): The current student collection.
        student_id (str): The id of the student to edit.
        **changes: Any of `name`, `cpf`, `dob`, `schooling`. Fields left out keep their value.

    Returns:
        Response: As for `update_student()`, plus:
            - `ErrorCode.NOT_FOUND` if no student has that id.
            - `ErrorCode.INVALID_FIELD_VALUE` if a changed value is invalid.
    """
    student = next((s for s in students if s.id == student_id), None)

    if student is None:
        return _not_found("Student", student_id)

    try:
        edited = student.replace(**changes)

    except (ValueError, TypeError) as e:
        return _invalid(e)

    return update_student(students, edited)


def delete_student(students: tuple[Student, ...], student_id: str) -> Response:
    """
    Removes a student by id. Grades and attendance of the student are left untouched.
    """
    return _remove_record(students, student_id, "Student")


# === teacher mutations ===


def create_teacher(
    teachers: tuple[Teacher, ...],
    name: str,
    subject: str,
    day_of_week: WeekDay | str = WeekDay.MONDAY,
    shift: Shift | str = Shift.FIRST,
    id_factory: IdFactory = generate_uuid,
) -> Response:
    """
    Creates a new `Teacher` and appends it to the roster, unless the weekly slot is taken.

    Args:
        teachers (tuple[Teacher, ...]): The current roster.
        name (str): The teacher's name. Required.
        subject (str): The subject taught. Required.
        day_of_week (WeekDay | str): One of the six teaching days.
        shift (Shift | str): One of the two shifts.
        id_factory (Callable[[], str]): Generator for the new record id.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the teacher was created.
                - False if a required field is blank, a value is invalid, or the slot is taken.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if the name or subject is blank.
                - `ErrorCode.INVALID_FIELD_VALUE` if the day or shift is not recognized.
                - `ErrorCode.SLOT_CONFLICT` if another teacher holds the same day and shift.
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - status_code (int | None):
                - 200 on success
                - 409 on slot conflict
                - 400 on other failures
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (tuple[Teacher, ...]): The new roster.
                    - "record" (Teacher): The created teacher.
                - On slot conflict:
                    - "slot" (tuple[WeekDay, Shift]): The occupied pair.
    """
    if not name or not name.strip():
        return _missing("name")

    if not subject or not subject.strip():
        return _missing("subject")

    try:
        teacher = Teacher(
            id=id_factory(),
            name=name.strip(),
            subject=subject.strip(),
            day_of_week=day_of_week,
            shift=shift,
        )

    except (ValueError, TypeError) as e:
        return _invalid(e)

    except Exception as e:
        return _unexpected(e)

    if is_teacher_slot_taken(teachers, teacher.day_of_week, teacher.shift):
        return _slot_conflict(
            f"The slot {teacher.day_of_week.value} ({teacher.shift.value}) is already held by another teacher.",
            teacher.slot,
        )

    return _add_record(teachers, teacher)


def update_teacher(teachers: tuple[Teacher, ...], teacher: Teacher) -> Response:
    """
    Replaces the teacher sharing `teacher.id` with `teacher`, unless the new slot is held by someone else.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the teacher was replaced in place.
                - False if a required field is blank, the slot is taken by another teacher, or the id is unknown.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if the name or subject is blank.
                - `ErrorCode.SLOT_CONFLICT` if a different teacher holds the same day and shift.
                - `ErrorCode.NOT_FOUND` if no teacher has that id.
            - data (dict | None):
                - On success: "records" and "record", as for `create_teacher()`.
                - On slot conflict: "slot".

    Notes:
        - The edited teacher is excluded from the slot check, so re-saving into the same slot succeeds.
    """
    if not teacher.name.strip():
        return _missing("name")

    if not teacher.subject.strip():
        return _missing("subject")

    if is_teacher_slot_taken(
        teachers, teacher.day_of_week, teacher.shift, exclude_teacher_id=teacher.id
    ):
        return _slot_conflict(
            f"The slot {teacher.day_of_week.value} ({teacher.shift.value}) is already held by another teacher.",
            teacher.slot,
        )

    return _replace_record(teachers, teacher)


def edit_teacher(teachers: tuple[Teacher, ...], teacher_id: str, **changes: Any) -> Response:
    """
    Applies a partial edit to the teacher with `teacher_id` and replaces it via `update_teacher()`.

    Args:
        teachers (tuple[Teacher, ...]): The current roster.
        teacher_id (str): The id of the teacher to edit.
        **changes: Any of `name`, `subject`, `day_of_week`, `shift`. Fields left out keep their value.

    Returns:
        Response: As for `update_teacher()`, plus:
            - `ErrorCode.NOT_FOUND` if no teacher has that id.
            - `ErrorCode.INVALID_FIELD_VALUE` if a changed value is invalid.
    """
    teacher = next((t for t in teachers if t.id == teacher_id), None)

    if teacher is None:
        return _not_found("Teacher", teacher_id)

    try:
        edited = teacher.replace(**changes)

    except (ValueError, TypeError) as e:
        return _invalid(e)

    return update_teacher(teachers, edited)


def delete_teacher(teachers: tuple[Teacher, ...], teacher_id: str) -> Response:
    """
    Removes a teacher by id. Lesson plans referencing the teacher are left untouched.
    """
    return _remove_record(teachers, teacher_id, "Teacher")


# === lesson plan mutations ===


def create_lesson_plan(
    plans: tuple[LessonPlan, ...],
    teacher_id: str,
    date: datetime.date | str,
    shift: Shift | str = Shift.FIRST,
    description: str = "",
    id_factory: IdFactory = generate_uuid,
) -> Response:
    """
    Creates a new `LessonPlan` and prepends it to the collection, unless the date and shift are taken.

    Args:
        plans (tuple[LessonPlan, ...]): The current plan collection.
        teacher_id (str): The id of the teacher giving the lesson. Required.
        date (datetime.date | str): The lesson date, as a date or ISO string.
        shift (Shift | str): One of the two shifts.
        description (str): Free-text lesson content.
        id_factory (Callable[[], str]): Generator for the new record id.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the plan was created.
                - False if the teacher is missing, a value is invalid, or the slot is taken.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if `teacher_id` is blank.
                - `ErrorCode.INVALID_FIELD_VALUE` if the date or shift is invalid.
                - `ErrorCode.SLOT_CONFLICT` if a plan already exists for the same date and shift.
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - status_code (int | None):
                - 200 on success
                - 409 on slot conflict
                - 400 on other failures
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (tuple[LessonPlan, ...]): The new collection, with the new plan first.
                    - "record" (LessonPlan): The created plan.
                - On slot conflict:
                    - "slot" (tuple[datetime.date, Shift]): The occupied pair.

    Notes:
        - Insertion order is most-recent-first regardless of the plan date.
        - The teacher id is not resolved against the roster.
    """
    if not teacher_id:
        return _missing("teacherId")

    try:
        plan = LessonPlan(
            id=id_factory(),
            teacher_id=teacher_id,
            date=date,
            shift=shift,
            description=description,
        )

    except (ValueError, TypeError) as e:
        return _invalid(e)

    except Exception as e:
        return _unexpected(e)

    if is_lesson_slot_taken(plans, plan.date, plan.shift):
        return _slot_conflict(
            f"A lesson plan already exists for {plan.date.isoformat()} ({plan.shift.value}).",
            plan.slot,
        )

    return _add_record(plans, plan, prepend=True)


def delete_lesson_plan(plans: tuple[LessonPlan, ...], plan_id: str) -> Response:
    """
    Removes a lesson plan by id.

    Notes:
        - Attendance records for the plan are not deleted; downstream views treat them as referencing an unknown plan.
    """
    return _remove_record(plans, plan_id, "LessonPlan")


# === attendance mutations ===


def set_attendance(
    attendances: tuple[Attendance, ...],
    student_id: str,
    lesson_plan_id: str,
    status: AttendanceStatus | str,
) -> Response:
    """
    Upserts an attendance record by its (student_id, lesson_plan_id) pair.

    Any existing record for the pair is removed and the new record is appended last, so
    applying the same call twice yields the same collection as applying it once.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): False only if an id is blank or the status is not recognized.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if either id is blank.
                - `ErrorCode.INVALID_FIELD_VALUE` if the status is invalid.
            - data (dict | None):
                - On success:
                    - "records" (tuple[Attendance, ...]): The new collection.
                    - "record" (Attendance): The stored record.
    """
    if not student_id:
        return _missing("studentId")

    if not lesson_plan_id:
        return _missing("lessonPlanId")

    try:
        attendance = Attendance(student_id, lesson_plan_id, status)

    except (ValueError, TypeError) as e:
        return _invalid(e)

    others = tuple(a for a in attendances if a.key != attendance.key)

    return Response.succeed(
        detail="Attendance successfully recorded.",
        data={
            "records": (*others, attendance),
            "record": attendance,
        },
    )


# === grade mutations ===


def create_grade(
    grades: tuple[Grade, ...],
    student_id: str,
    subject: str,
    value: Any,
    description: str = "",
    id_factory: IdFactory = generate_uuid,
) -> Response:
    """
    Creates a new `Grade` and appends it to the collection.

    Args:
        grades (tuple[Grade, ...]): The current grade collection.
        student_id (str): The graded student's id. Required.
        subject (str): The subject the grade belongs to. Required.
        value (Any): The numeric grade; must be finite and within [0, 10].
        description (str): Free-text assessment description.
        id_factory (Callable[[], str]): Generator for the new record id.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the grade was created.
                - False if a required field is blank or the value is outside the grade domain.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if `student_id` or `subject` is blank.
                - `ErrorCode.INVALID_FIELD_VALUE` if the value is not a number in [0, 10].
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (tuple[Grade, ...]): The new collection.
                    - "record" (Grade): The created grade.

    Notes:
        - The value is stored at full precision; one-decimal display is a formatting concern.
    """
    if not student_id:
        return _missing("studentId")

    if not subject or not subject.strip():
        return _missing("subject")

    try:
        grade = Grade(
            id=id_factory(),
            student_id=student_id,
            subject=subject.strip(),
            value=Grade.validate_value_input(value),
            description=description,
        )

    except (ValueError, TypeError) as e:
        return _invalid(e)

    except Exception as e:
        return _unexpected(e)

    else:
        return _add_record(grades, grade)


def delete_grade(grades: tuple[Grade, ...], grade_id: str) -> Response:
    return _remove_record(grades, grade_id, "Grade")


# === snapshot settings ===


def set_portal_url(state: AppState, portal_url: str) -> Response:
    """
    Returns a new snapshot with the portal URL replaced (whitespace stripped).

    Returns:
        Response: Always succeeds, with the new snapshot under `data["state"]`.
    """
    new_state = state.replace(portal_url=(portal_url or "").strip())

    return Response.succeed(
        detail="Portal URL successfully updated.",
        data={
            "state": new_state,
        },
    )
