# tests/test_cli.py

import pytest

from cli.main import run_cli
from core.config import AppConfig
from core.storage import JsonStorage


@pytest.fixture
def config(tmp_path):
    return AppConfig(
        data_dir=str(tmp_path / "data"),
        export_dir=str(tmp_path / "exports"),
    )


def run(config, *argv):
    return run_cli(list(argv), config=config)


def test_summary_on_empty_data(config, capsys):
    assert run(config, "summary") == 0

    out = capsys.readouterr().out
    assert "PORTAL DE GESTÃO" in out
    assert "Total de Alunos: 00" in out
    assert "Portal: https://SME-COORDENACAO.GO.GOV.BR" in out


def test_add_student_persists(config, capsys):
    assert run(config, "add-student", "Ana", "--cpf", "123.456.789-01") == 0
    assert run(config, "show", "students") == 0

    out = capsys.readouterr().out
    assert "Ana" in out
    assert "123.456.789-01" in out


def test_rejected_mutation_exits_with_error(config, capsys):
    assert run(config, "add-teacher", "Carlos", "Matemática") == 0
    assert run(config, "add-teacher", "Dora", "Português") == 1

    captured = capsys.readouterr()
    assert "already held" in captured.err


def test_add_plan_mark_and_grade(config, capsys):
    run(config, "add-teacher", "Carlos", "Matemática")
    run(config, "add-student", "Bruno")
    run(config, "add-plan", "t-any", "2024-03-10")
    run(config, "add-plan", "t-any", "2024-03-10")

    err = capsys.readouterr().err
    assert "2024-03-10" in err

    assert run(config, "add-grade", "s-any", "Matemática", "11") == 1
    assert run(config, "add-grade", "s-any", "Matemática", "9.5") == 0


def test_show_empty_report(config, capsys):
    assert run(config, "show", "at-risk") == 0

    assert "[NO RECORDS]" in capsys.readouterr().out


def test_export_report(config, tmp_path, capsys):
    run(config, "add-student", "Ana")

    assert run(config, "export", "students", "--format", "csv") == 0

    assert (tmp_path / "exports" / "Lista_Alunos.csv").exists()


def test_set_portal(config, capsys):
    run(config, "set-portal", "sme.example.org")
    run(config, "summary")

    assert "Portal: https://sme.example.org" in capsys.readouterr().out


def test_backup_and_restore(config, tmp_path, capsys):
    backup = str(tmp_path / "backup.json")
    run(config, "add-student", "Ana")

    assert run(config, "backup", backup) == 0
    run(config, "add-student", "Bruno")
    assert run(config, "restore", backup) == 0
    capsys.readouterr()

    run(config, "show", "students")

    out = capsys.readouterr().out
    assert "Ana" in out
    assert "Bruno" not in out


def test_data_dir_flag_overrides_config(config, tmp_path, capsys):
    other = tmp_path / "other"

    run(config, "--data-dir", str(other), "add-student", "Ana")

    assert (other / config.state_file).exists()


@pytest.fixture
def seeded_config(config, sample_state):
    JsonStorage(config.state_path).save(sample_state)
    return config


def test_add_student_masks_cpf(config, capsys):
    run(config, "add-student", "Ana", "--cpf", "12345678901")
    run(config, "find", "ana")

    assert "123.456.789-01" in capsys.readouterr().out


def test_find_students(seeded_config, capsys):
    assert run(seeded_config, "find", "BRU") == 0
    assert run(seeded_config, "find", "zzz") == 0

    out = capsys.readouterr().out
    assert "s001  Bruno" in out
    assert "[NO MATCHES]" in out


def test_attendance_sheet(seeded_config, capsys):
    assert run(seeded_config, "sheet", "p002") == 0

    out = capsys.readouterr().out
    assert "2024-03-12 2º Horário" in out
    assert "[P] Ana" in out
    assert "[F] Bruno" in out
    assert "[.] Élio" in out


def test_attendance_sheet_unknown_plan(seeded_config, capsys):
    assert run(seeded_config, "sheet", "ghost") == 1

    assert "ghost" in capsys.readouterr().err


def test_grades_of_student(seeded_config, capsys):
    assert run(seeded_config, "grades-of", "s002") == 0

    out = capsys.readouterr().out
    assert "Matemática: 10.0 [EXCELLENT]" in out
    assert "Artes: 1.0 [LOW]" in out


def test_summary_counts(seeded_config, capsys):
    run(seeded_config, "summary")

    out = capsys.readouterr().out
    assert "Total de Alunos: 03" in out
    assert "Aulas Registradas: 02" in out
    assert "Alunos em risco: 2" in out
    assert "Portal: https://portal-sme.example.org" in out


def test_edit_student(seeded_config, capsys):
    assert run(seeded_config, "edit-student", "s002", "--name", "Ana Paula", "--cpf", "12345678901") == 0

    student = JsonStorage(seeded_config.state_path).load().students[1]
    assert student.name == "Ana Paula"
    assert student.cpf == "123.456.789-01"
    assert student.schooling.value == "Fundamental I"


def test_edit_student_rejections(seeded_config, capsys):
    assert run(seeded_config, "edit-student", "ghost", "--name", "X") == 1
    assert run(seeded_config, "edit-student", "s001", "--dob", "02/04/2010") == 1
    assert run(seeded_config, "edit-student", "s001", "--name", "  ") == 1

    err = capsys.readouterr().err
    assert "ghost" in err
    assert [s.name for s in JsonStorage(seeded_config.state_path).load().students] == ["Bruno", "Ana", "Élio"]


def test_edit_teacher_keeps_own_slot(seeded_config, capsys):
    assert run(seeded_config, "edit-teacher", "t001", "--subject", "Física") == 0
    assert run(
        seeded_config, "edit-teacher", "t001", "--day", "Segunda-feira", "--shift", "1º Horário"
    ) == 0

    teacher = JsonStorage(seeded_config.state_path).load().teachers[0]
    assert teacher.subject == "Física"
    assert teacher.day_of_week.value == "Segunda-feira"
    assert teacher.shift.value == "1º Horário"


def test_edit_teacher_into_taken_slot(seeded_config, capsys):
    assert run(
        seeded_config, "edit-teacher", "t001", "--day", "Terça-feira", "--shift", "2º Horário"
    ) == 1

    assert "already held" in capsys.readouterr().err
    assert JsonStorage(seeded_config.state_path).load().teachers[0].day_of_week.value == "Segunda-feira"


def test_delete_plan_keeps_attendance(seeded_config, capsys):
    assert run(seeded_config, "delete", "plans", "p001") == 0

    state = JsonStorage(seeded_config.state_path).load()
    assert [p.id for p in state.lesson_plans] == ["p002"]
    assert any(a.lesson_plan_id == "p001" for a in state.attendances)

    assert run(seeded_config, "sheet", "p001") == 1
    assert run(seeded_config, "summary") == 0
    assert "Aulas Registradas: 02" in capsys.readouterr().out


@pytest.mark.parametrize(
    "collection, record_id, remaining",
    [
        ("students", "s003", 2),
        ("teachers", "t002", 1),
        ("grades", "g005", 4),
    ],
)
def test_delete_records(seeded_config, capsys, collection, record_id, remaining):
    assert run(seeded_config, "delete", collection, record_id) == 0

    state = JsonStorage(seeded_config.state_path).load()
    assert len(getattr(state, collection)) == remaining


def test_delete_unknown_record(seeded_config, capsys):
    assert run(seeded_config, "delete", "grades", "ghost") == 1

    assert "ghost" in capsys.readouterr().err
