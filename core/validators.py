# core/validators.py

"""
Slot conflict predicates.

Both checks are pure and advisory: they read a collection and answer whether a slot is
occupied. The mutation layer calls them before accepting a new or edited record.
"""

import datetime
from collections.abc import Iterable

from models.lesson_plan import LessonPlan
from models.teacher import Shift, Teacher, WeekDay


def is_lesson_slot_taken(
    plans: Iterable[LessonPlan],
    date: datetime.date,
    shift: Shift,
) -> bool:
    """
    Returns True if any existing lesson plan has the same date and the same shift.

    Equality is exact; plans on neighbouring dates never conflict.
    """
    return any(plan.date == date and plan.shift == shift for plan in plans)


def is_teacher_slot_taken(
    teachers: Iterable[Teacher],
    day_of_week: WeekDay,
    shift: Shift,
    exclude_teacher_id: str | None = None,
) -> bool:
    """
    Returns True if any teacher other than `exclude_teacher_id` holds the same day and shift.

    Args:
        teachers (Iterable[Teacher]): The current roster.
        day_of_week (WeekDay): The proposed day.
        shift (Shift): The proposed shift.
        exclude_teacher_id (str | None): None on creation; the edited teacher's id on update,
            so that a teacher can be re-saved into their own slot.
    """
    return any(
        teacher.day_of_week == day_of_week
        and teacher.shift == shift
        and teacher.id != exclude_teacher_id
        for teacher in teachers
    )
