# tests/test_storage.py

import json

import pytest

from core.aggregation import compute_attendance_stats
from core.reports import build_report
from core.response import ErrorCode
from core.storage import JsonStorage, dump_backup, restore_backup
from models.app_state import AppState


@pytest.fixture
def storage(tmp_path):
    return JsonStorage(str(tmp_path / "data" / "state.json"))


def test_load_missing_file_returns_empty(storage):
    assert storage.load() == AppState.empty()


def test_save_then_load(storage, sample_state):
    response = storage.save(sample_state)

    assert response.success
    assert storage.load() == sample_state


def test_saved_document_uses_camel_case_keys(storage, sample_state):
    storage.save(sample_state)

    with open(storage.path, encoding="utf-8") as f:
        document = json.load(f)

    assert set(document) == {
        "students",
        "teachers",
        "lessonPlans",
        "attendances",
        "grades",
        "portalUrl",
    }
    assert document["lessonPlans"][0]["teacherId"] == "t002"


def test_load_corrupt_file_returns_empty(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonStorage(str(path)).load() == AppState.empty()


def test_load_skips_malformed_records(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "students": ["oops", {"id": "s1", "name": "Ana"}],
                "teachers": "not a list",
                "portalUrl": None,
            }
        ),
        encoding="utf-8",
    )

    state = JsonStorage(str(path)).load()

    assert [s.id for s in state.students] == ["s1"]
    assert state.teachers == ()
    assert state.portal_url == ""


def test_save_failure_is_reported(tmp_path, sample_state):
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    response = JsonStorage(str(blocker / "state.json")).save(sample_state)

    assert not response.success
    assert response.error is ErrorCode.PERSISTENCE_FAILURE
    assert response.status_code == 500


def test_backup_and_restore(tmp_path, sample_state):
    path = str(tmp_path / "backup.json")

    assert dump_backup(sample_state, path).success

    response = restore_backup(path)

    assert response.success
    assert response.data["state"] == sample_state


@pytest.mark.parametrize(
    "content",
    [
        "[]",
        "{broken",
        json.dumps({"students": "nope"}),
        json.dumps({"students": [{"name": "no id"}]}),
        json.dumps({"portalUrl": 42}),
    ],
)
def test_restore_malformed_backup(tmp_path, content):
    path = tmp_path / "backup.json"
    path.write_text(content, encoding="utf-8")

    response = restore_backup(str(path))

    assert not response.success
    assert response.error is ErrorCode.MALFORMED_BACKUP


def test_restore_missing_file(tmp_path):
    response = restore_backup(str(tmp_path / "missing.json"))

    assert not response.success
    assert response.error is ErrorCode.PERSISTENCE_FAILURE


def test_load_skips_null_names_so_views_still_render(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "students": [{"id": "s1", "name": None}, {"id": "s2", "name": "Bia"}],
                "teachers": [
                    {"id": "t1", "name": "Caio", "subject": None, "dayOfWeek": "Segunda-feira", "shift": "1º Horário"}
                ],
            }
        ),
        encoding="utf-8",
    )

    state = JsonStorage(str(path)).load()

    assert [s.name for s in compute_attendance_stats(state.students, state.attendances)] == ["Bia"]
    assert build_report(state, "grades").headers == ["Nome", "Média_Geral"]


def test_restore_rejects_wrong_typed_backup(tmp_path):
    path = tmp_path / "backup.json"
    path.write_text(
        json.dumps(
            {
                "teachers": [
                    {"id": 1, "name": 5, "subject": None, "dayOfWeek": "Segunda-feira", "shift": "1º Horário"}
                ],
                "grades": [{"id": "g1", "studentId": "s1", "subject": "Artes", "value": True}],
            }
        ),
        encoding="utf-8",
    )

    response = restore_backup(str(path))

    assert not response.success
    assert response.error is ErrorCode.MALFORMED_BACKUP
