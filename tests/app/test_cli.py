from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from gymdesk.ui import cli


def _main(data_dir: Path, *args: str) -> None:
    cli.main(["--data-dir", str(data_dir), *args])


def _seed(data_dir: Path) -> None:
    _main(
        data_dir,
        "student",
        "add",
        "--cpf",
        "123.456.789-01",
        "--name",
        "Ana Souza",
        "--email",
        "Ana@Example.com",
    )
    _main(
        data_dir,
        "plan",
        "add",
        "--id",
        "P1",
        "--name",
        "Premium",
        "--price",
        "100.00",
        "--days",
        "30",
        "--type",
        "PREMIUM",
    )
    _main(
        data_dir,
        "enroll",
        "--cpf",
        "12345678901",
        "--plan",
        "P1",
        "--start",
        "01/01/2024",
        "--end",
        "31/12/2024",
    )


def test_cli_enroll_and_pay(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _seed(tmp_path)
    assert capsys.readouterr().out.strip() == "MAT001"

    _main(tmp_path, "pay", "--enrollment", "MAT001", "--amount", "150.00", "--date", "05/01/2024")
    assert capsys.readouterr().out.strip() == "PAG001"

    _main(tmp_path, "list", "payments")
    listing = capsys.readouterr().out
    assert "Pagamento via PIX" in listing
    assert "CONFIRMADO" in listing

    _main(tmp_path, "report", "financial")
    assert "Receitas Confirmadas: R$ 150.00" in capsys.readouterr().out


def test_cli_enroll_defaults_end_to_plan_duration(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _seed(tmp_path)
    _main(tmp_path, "enrollment", "cancel", "MAT001")
    capsys.readouterr()

    _main(tmp_path, "enroll", "--cpf", "12345678901", "--plan", "P1", "--start", "01/03/2024")
    assert capsys.readouterr().out.strip() == "MAT002"

    _main(tmp_path, "list", "enrollments")
    assert "01/03/2024-31/03/2024" in capsys.readouterr().out


def test_cli_lists_students_with_formatted_id(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _seed(tmp_path)
    capsys.readouterr()

    _main(tmp_path, "list", "students")

    out = capsys.readouterr().out
    assert "123.456.789-01" in out
    assert "ana@example.com" in out
    assert "MAT001" in out


def test_cli_invalid_national_id_exits_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _main(tmp_path, "student", "add", "--cpf", "123", "--name", "Ana", "--email", "a@b.co")

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "Traceback" not in err


def test_cli_invalid_date_exits_2(tmp_path: Path) -> None:
    _seed(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        _main(tmp_path, "pay", "--enrollment", "MAT001", "--amount", "10", "--date", "2024-01-05")

    assert excinfo.value.code == 2


def test_cli_card_without_kind_exits_2(tmp_path: Path) -> None:
    _seed(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        _main(tmp_path, "pay", "--enrollment", "MAT001", "--amount", "10", "--method", "CARTAO")

    assert excinfo.value.code == 2


def test_cli_unknown_enrollment_exits_1(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _main(tmp_path, "enrollment", "suspend", "MAT404")

    assert excinfo.value.code == 1


def test_cli_repeated_cancel_exits_2(tmp_path: Path) -> None:
    _seed(tmp_path)
    _main(tmp_path, "enrollment", "cancel", "MAT001")

    with pytest.raises(SystemExit) as excinfo:
        _main(tmp_path, "enrollment", "cancel", "MAT001")

    assert excinfo.value.code == 2


def test_cli_report_exports_csv(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _seed(tmp_path)
    target = tmp_path / "plans.csv"

    _main(tmp_path, "report", "plans", "--csv", str(target))

    assert "Premium: 1" in capsys.readouterr().out
    assert target.read_text(encoding="utf-8") == "plano,matriculas_ativas\nPremium,1\n"


def test_cli_instructor_add_and_list(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _main(
        tmp_path,
        "instructor",
        "add",
        "--cpf",
        "11122233344",
        "--name",
        "Carla Dias",
        "--email",
        "carla@example.com",
        "--specialty",
        "Pilates",
        "--cref",
        "123456-G/SP",
    )

    _main(tmp_path, "list", "instructors")

    assert "111.222.333-44  Carla Dias  Pilates  CREF 123456-G/SP" in capsys.readouterr().out


def test_cli_lists_plans_with_final_price(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _seed(tmp_path)
    capsys.readouterr()

    _main(tmp_path, "list", "plans")

    assert "P1  Premium  PREMIUM  R$ 150.00  30d" in capsys.readouterr().out


def test_cli_student_report_filters_by_status(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _seed(tmp_path)
    _main(tmp_path, "enrollment", "suspend", "MAT001")
    capsys.readouterr()

    _main(tmp_path, "report", "students", "--status", "ATIVA")
    assert "Nenhum aluno encontrado." in capsys.readouterr().out

    _main(tmp_path, "report", "students", "--status", "SUSPENSA")
    assert "Total de alunos: 1" in capsys.readouterr().out


def test_cli_reverse_payment(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _seed(tmp_path)
    _main(tmp_path, "pay", "--enrollment", "MAT001", "--amount", "150", "--method", "DINHEIRO")
    _main(tmp_path, "payment", "reverse", "PAG001")
    capsys.readouterr()

    _main(tmp_path, "report", "financial")

    assert "Valores Estornados:   R$ 150.00" in capsys.readouterr().out
