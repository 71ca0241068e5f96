# tests/test_lesson_plan.py

import datetime

import pytest

from models.lesson_plan import LessonPlan
from models.teacher import Shift


def test_lesson_plan_to_dict(sample_lesson_plan):
    assert sample_lesson_plan.to_dict() == {
        "id": "p001",
        "teacherId": "t001",
        "date": "2024-03-10",
        "shift": "1º Horário",
        "description": "Frações",
    }


def test_lesson_plan_from_dict():
    plan = LessonPlan.from_dict(
        {
            "id": "p001",
            "teacherId": "t001",
            "date": "2024-03-10",
            "shift": "2º Horário",
        }
    )

    assert plan.date == datetime.date(2024, 3, 10)
    assert plan.shift is Shift.SECOND
    assert plan.description == ""


def test_lesson_plan_accepts_datetime():
    plan = LessonPlan("p001", "t001", datetime.datetime(2024, 3, 10, 8, 30))

    assert plan.date == datetime.date(2024, 3, 10)


def test_lesson_plan_rejects_bad_date():
    with pytest.raises(ValueError):
        LessonPlan("p001", "t001", "10/03/2024")

    with pytest.raises(TypeError):
        LessonPlan("p001", "t001", 20240310)
