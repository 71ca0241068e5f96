# tests/test_attendance.py

import pytest

from models.attendance import Attendance, AttendanceStatus


def test_attendance_round_trip():
    attendance = Attendance.from_dict(
        {"studentId": "s001", "lessonPlanId": "p001", "status": "F"}
    )

    assert attendance.status is AttendanceStatus.ABSENT
    assert attendance.is_absent
    assert not attendance.is_present
    assert attendance.key == ("s001", "p001")
    assert attendance.to_dict() == {
        "studentId": "s001",
        "lessonPlanId": "p001",
        "status": "F",
    }


def test_attendance_equality():
    assert Attendance("s001", "p001", "P") == Attendance("s001", "p001", AttendanceStatus.PRESENT)
    assert Attendance("s001", "p001", "P") != Attendance("s001", "p001", "F")


def test_attendance_rejects_unknown_status():
    with pytest.raises(ValueError):
        Attendance("s001", "p001", "Late")
