# tests/conftest.py

import datetime
import itertools

import pytest

from models.app_state import AppState
from models.attendance import Attendance, AttendanceStatus
from models.grade import Grade
from models.lesson_plan import LessonPlan
from models.student import SchoolingLevel, Student
from models.teacher import Shift, Teacher, WeekDay


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id{next(counter):03d}"


@pytest.fixture
def sample_student():
    return Student(
        id="s001",
        name="Ana Souza",
        cpf="123.456.789-01",
        dob=datetime.date(2010, 4, 2),
        schooling=SchoolingLevel.FUNDAMENTAL_II,
    )


@pytest.fixture
def sample_teacher():
    return Teacher("t001", "Carlos Lima", "Matemática", WeekDay.MONDAY, Shift.FIRST)


@pytest.fixture
def sample_lesson_plan():
    return LessonPlan(
        id="p001",
        teacher_id="t001",
        date=datetime.date(2024, 3, 10),
        shift=Shift.FIRST,
        description="Frações",
    )


@pytest.fixture
def sample_state():
    students = (
        Student("s001", "Bruno"),
        Student("s002", "Ana"),
        Student("s003", "Élio"),
    )
    teachers = (
        Teacher("t001", "Carlos", "Matemática", WeekDay.MONDAY, Shift.FIRST),
        Teacher("t002", "Dora", "Português", WeekDay.TUESDAY, Shift.SECOND),
    )
    plans = (
        LessonPlan("p002", "t002", datetime.date(2024, 3, 12), Shift.SECOND, "Redação"),
        LessonPlan("p001", "t001", datetime.date(2024, 3, 11), Shift.FIRST, "Frações"),
    )
    attendances = (
        Attendance("s001", "p001", AttendanceStatus.PRESENT),
        Attendance("s001", "p002", AttendanceStatus.ABSENT),
        Attendance("s002", "p001", AttendanceStatus.PRESENT),
        Attendance("s002", "p002", AttendanceStatus.PRESENT),
    )
    grades = (
        Grade("g001", "s001", "Matemática", 4.0),
        Grade("g002", "s001", "Português", 5.0),
        Grade("g003", "s002", "Matemática", 10.0),
        Grade("g004", "s002", "Matemática", 4.0),
        Grade("g005", "s002", "Artes", 1.0),
    )
    return AppState(
        students=students,
        teachers=teachers,
        lesson_plans=plans,
        attendances=attendances,
        grades=grades,
        portal_url="portal-sme.example.org",
    )
